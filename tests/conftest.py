"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- In-memory compiler double with per-file failure injection.
- Corpus builder writing source files under a temporary root.
- Captured stdout/stderr consoles.
"""

import io
import json
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

import pytest
from rich.console import Console

# Add src to path so we can import 'ast_roundtrip' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from ast_roundtrip.backends.base import CompilerInvoker, Invocation  # noqa: E402
from ast_roundtrip.utils.console import reset_console, set_console  # noqa: E402


def canonical(obj) -> str:
  return json.dumps(obj, indent=4, sort_keys=True) + "\n"


class FakeCompiler(CompilerInvoker):
  """
  Compiler double. Behaviour is selected by physical file name.

  Attributes:
      probed: File name lists passed to `compiles`.
      exported: File name lists passed to `export_ast`.
      imported: Number of import calls.
      workdirs: Working directories seen by `export_ast`.
  """

  def __init__(
    self,
    uncompilable: Iterable[str] = (),
    export_failures: Iterable[str] = (),
    import_failures: Iterable[str] = (),
    mismatches: Iterable[str] = (),
  ):
    self.uncompilable = set(uncompilable)
    self.export_failures = set(export_failures)
    self.import_failures = set(import_failures)
    self.mismatches = set(mismatches)
    self.probed: List[List[str]] = []
    self.exported: List[List[str]] = []
    self.imported = 0
    self.workdirs: List[Path] = []

  @staticmethod
  def _names(files: Sequence[Path]) -> List[str]:
    return [Path(f).name for f in files]

  def check_available(self) -> str:
    return "fakec, the fake compiler\nVersion: 0.0.0"

  def compiles(self, files: Sequence[Path], cwd: Path) -> bool:
    names = self._names(files)
    self.probed.append(names)
    return not self.uncompilable.intersection(names)

  def export_command(self, files: Sequence[Path]) -> List[str]:
    return ["fakec", "--export", *[str(f) for f in files]]

  def import_command(self) -> List[str]:
    return ["fakec", "--import"]

  def export_ast(self, files: Sequence[Path], cwd: Path) -> Invocation:
    names = self._names(files)
    self.exported.append(names)
    self.workdirs.append(cwd)
    cmd = self.export_command(files)
    if self.export_failures.intersection(names):
      return Invocation(cmd, 1, stdout="partial output", stderr="Internal compiler error: export crashed")
    return Invocation(cmd, 0, stdout=canonical({"sources": names}))

  def import_and_reexport_ast(self, json_text: str, cwd: Path) -> Invocation:
    self.imported += 1
    cmd = [*self.import_command(), "expected.json"]
    data = json.loads(json_text)
    names = data["sources"]
    if self.import_failures.intersection(names):
      return Invocation(cmd, 1, stdout="", stderr="Failed to import AST: missing field")
    if self.mismatches.intersection(names):
      data["id"] = 42
    return Invocation(cmd, 0, stdout=canonical(data))


class CapturedOutput:
  """Holds the in-memory stdout and stderr consoles injected for a test."""

  def __init__(self) -> None:
    self._out = io.StringIO()
    self._err = io.StringIO()
    self.out_console = Console(file=self._out, width=400, color_system=None, force_terminal=False)
    self.err_console = Console(file=self._err, width=400, color_system=None, force_terminal=False)

  @property
  def out(self) -> str:
    return self._out.getvalue()

  @property
  def err(self) -> str:
    return self._err.getvalue()


@pytest.fixture
def fake_compiler():
  """Factory for FakeCompiler instances."""
  return FakeCompiler


@pytest.fixture
def captured():
  """Routes both consoles (and logging) into memory for the duration of a test."""
  output = CapturedOutput()
  set_console(output.out_console, output.err_console)
  yield output
  reset_console()


@pytest.fixture
def make_corpus(tmp_path):
  """
  Writes a corpus of source files.

  Usage: ``root = make_corpus({"a.sol": "contract A {}", "sub/b.sol": b"\\xff"})``.
  Bytes values are written verbatim.
  """

  def _make(files: Dict[str, object], root: Optional[Path] = None) -> Path:
    base = root or tmp_path / "corpus"
    base.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
      path = base / name
      path.parent.mkdir(parents=True, exist_ok=True)
      if isinstance(content, bytes):
        path.write_bytes(content)
      else:
        path.write_text(content, encoding="utf-8")
    return base

  return _make
