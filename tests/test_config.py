"""
Tests for RoundTripConfig resolution.

Priority: CLI arguments > environment > [tool.ast_roundtrip] in pyproject.toml > defaults.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from ast_roundtrip.config import BUILD_DIR_ENV, RoundTripConfig


def _write_toml(directory: Path, body: str) -> None:
  (directory / "pyproject.toml").write_text(body, encoding="utf-8")


def test_defaults_without_toml(tmp_path):
  config = RoundTripConfig.load(search_path=tmp_path, environ={})

  assert config.repo_root == tmp_path.resolve()
  assert config.build_dir == tmp_path.resolve() / "build"
  assert config.compiler == tmp_path.resolve() / "build" / "solc" / "solc"
  assert config.extension == ".sol"
  assert config.excluded_names == ["boost_filesystem_bug.sol"]
  assert config.json_indent == 4
  assert config.splitter_script is None
  assert config.exit_on_error is False
  assert config.resolved_corpus_dirs == [
    tmp_path.resolve() / "test/libsolidity/syntaxTests",
    tmp_path.resolve() / "test/libsolidity/ASTJSON",
  ]


def test_environment_overrides_build_dir(tmp_path):
  config = RoundTripConfig.load(search_path=tmp_path, environ={BUILD_DIR_ENV: "/opt/solc-build"})

  assert config.build_dir == Path("/opt/solc-build")
  assert config.compiler == Path("/opt/solc-build/solc/solc")


def test_cli_overrides_environment(tmp_path):
  config = RoundTripConfig.load(
    build_dir=Path("/cli/build"),
    search_path=tmp_path,
    environ={BUILD_DIR_ENV: "/env/build"},
  )

  assert config.build_dir == Path("/cli/build")


def test_toml_section_is_found_in_parent(tmp_path):
  _write_toml(
    tmp_path,
    """
[tool.ast_roundtrip]
corpus_dirs = ["tests/ast"]
excluded_names = ["skip.sol"]
extension = "sol"
json_indent = 2
splitter_script = "scripts/splitSources.py"
exit_on_error = true
""",
  )
  nested = tmp_path / "a" / "b"
  nested.mkdir(parents=True)

  config = RoundTripConfig.load(search_path=nested, environ={})

  root = tmp_path.resolve()
  assert config.repo_root == root
  assert config.resolved_corpus_dirs == [root / "tests/ast"]
  assert config.excluded_names == ["skip.sol"]
  assert config.extension == ".sol"
  assert config.json_indent == 2
  assert config.splitter_script == root / "scripts" / "splitSources.py"
  assert config.exit_on_error is True


def test_toml_without_section_is_skipped(tmp_path):
  _write_toml(tmp_path, '[tool.ast_roundtrip]\nbuild_dir = "out"\n')
  inner = tmp_path / "pkg"
  inner.mkdir()
  _write_toml(inner, '[project]\nname = "other"\n')

  config = RoundTripConfig.load(search_path=inner, environ={})

  assert config.build_dir == tmp_path.resolve() / "out"


def test_cli_exit_on_error_overrides_toml(tmp_path):
  _write_toml(tmp_path, "[tool.ast_roundtrip]\nexit_on_error = true\n")

  config = RoundTripConfig.load(exit_on_error=False, search_path=tmp_path, environ={})

  assert config.exit_on_error is False


def test_explicit_compiler_path(tmp_path):
  _write_toml(tmp_path, '[tool.ast_roundtrip]\ncompiler_path = "bin/solc"\n')

  config = RoundTripConfig.load(search_path=tmp_path, environ={BUILD_DIR_ENV: "/ignored"})

  assert config.compiler == tmp_path.resolve() / "bin" / "solc"


def test_invalid_values_rejected():
  with pytest.raises(ValidationError):
    RoundTripConfig(extension="  ")
  with pytest.raises(ValidationError):
    RoundTripConfig(json_indent=-1)
