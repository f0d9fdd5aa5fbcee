"""
Runtime Configuration Store.

Resolves where the compiler, the splitter and the corpus live. Values come,
in decreasing priority, from CLI arguments, the environment, the
``[tool.ast_roundtrip]`` table of the nearest ``pyproject.toml``, and the
defaults below.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  try:
    import tomli as tomllib
  except ImportError:
    tomllib = None  # type: ignore

BUILD_DIR_ENV = "SOLIDITY_BUILD_DIR"
TOML_SECTION = "ast_roundtrip"

DEFAULT_CORPUS_DIRS = ["test/libsolidity/syntaxTests", "test/libsolidity/ASTJSON"]

# Exercises a local fix for a boost::filesystem bug through a malformed path,
# which cannot round-trip.
DEFAULT_EXCLUDED = ["boost_filesystem_bug.sol"]


class RoundTripConfig(BaseModel):
  """
  Global configuration container for a round-trip run.
  """

  repo_root: Path = Field(default_factory=Path.cwd, description="Root of the compiler source tree.")
  build_dir: Path = Field(Path("build"), description="Build output directory holding the compiler binary.")
  compiler_path: Optional[Path] = Field(None, description="Explicit compiler binary. Default: <build_dir>/solc/solc.")
  corpus_dirs: List[Path] = Field(
    default_factory=lambda: [Path(p) for p in DEFAULT_CORPUS_DIRS],
    description="Corpus roots, relative to repo_root unless absolute.",
  )
  extension: str = Field(".sol", description="Suffix of corpus source files.")
  excluded_names: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED))
  json_indent: int = Field(4, ge=0, description="Indentation of the exported AST JSON.")
  splitter_script: Optional[Path] = Field(None, description="External splitter. Default: built-in marker splitter.")
  artifacts_dir: Optional[Path] = Field(None, description="Where scratch directories of failing entries are kept.")
  exit_on_error: bool = Field(False, description="Halt on the first AST mismatch.")

  @field_validator("extension")
  @classmethod
  def validate_extension(cls, v: str) -> str:
    """
    Normalizes the suffix to start with a dot.

    Args:
        v (str): Raw suffix, e.g. 'sol' or '.sol'.

    Returns:
        str: The suffix with a leading dot.
    """
    v = v.strip()
    if not v:
      raise ValueError("Corpus file extension must not be empty")
    return v if v.startswith(".") else f".{v}"

  @property
  def compiler(self) -> Path:
    return self.compiler_path or self.build_dir / "solc" / "solc"

  @property
  def resolved_corpus_dirs(self) -> List[Path]:
    return [p if p.is_absolute() else self.repo_root / p for p in self.corpus_dirs]

  @classmethod
  def load(
    cls,
    repo_root: Optional[Path] = None,
    build_dir: Optional[Path] = None,
    splitter_script: Optional[Path] = None,
    artifacts_dir: Optional[Path] = None,
    exit_on_error: Optional[bool] = None,
    search_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
  ) -> "RoundTripConfig":
    """
    Loads configuration from pyproject.toml and the environment, then applies CLI overrides.

    Args:
        repo_root (Optional[Path]): Override for the repository root.
        build_dir (Optional[Path]): Override for the build directory.
        splitter_script (Optional[Path]): Override for the external splitter.
        artifacts_dir (Optional[Path]): Override for the artifacts directory.
        exit_on_error (Optional[bool]): Override for halt-on-mismatch.
        search_path (Optional[Path]): Directory to start searching for TOML config.
        environ (Optional[Mapping]): Environment to read. Defaults to os.environ.

    Returns:
        RoundTripConfig: The fully resolved configuration object.
    """
    env = os.environ if environ is None else environ
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)
    base_dir = toml_dir or start_dir.resolve()

    def _path(key: str, anchor: Path) -> Optional[Path]:
      raw = toml_config.get(key)
      if raw is None:
        return None
      p = Path(raw)
      return p if p.is_absolute() else (anchor / p).resolve()

    # 1. Repository root
    final_root = repo_root or _path("repo_root", base_dir) or base_dir
    final_root = final_root.resolve()

    # 2. Build directory: CLI > environment > toml > <root>/build
    if build_dir:
      final_build = build_dir
    elif env.get(BUILD_DIR_ENV):
      final_build = Path(env[BUILD_DIR_ENV])
    else:
      final_build = _path("build_dir", final_root) or final_root / "build"

    # 3. Tooling
    final_splitter = splitter_script or _path("splitter_script", final_root)
    final_artifacts = artifacts_dir or _path("artifacts_dir", final_root)

    # 4. Halt-on-error
    if exit_on_error is not None:
      final_exit = exit_on_error
    else:
      final_exit = bool(toml_config.get("exit_on_error", False))

    optional: Dict[str, Any] = {}
    for key in ("corpus_dirs", "extension", "excluded_names", "json_indent"):
      if key in toml_config:
        optional[key] = toml_config[key]

    return cls(
      repo_root=final_root,
      build_dir=final_build,
      compiler_path=_path("compiler_path", final_root),
      splitter_script=final_splitter,
      artifacts_dir=final_artifacts,
      exit_on_error=final_exit,
      **optional,
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  if not tomllib:
    return {}, None

  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      if TOML_SECTION in tool_section:
        return tool_section[TOML_SECTION], parent

  return {}, None
