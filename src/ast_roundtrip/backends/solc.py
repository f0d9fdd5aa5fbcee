"""
Solidity Compiler Backend.

Drives the ``solc`` binary through its two AST command forms:

- **export**: ``solc --combined-json ast --pretty-json --json-indent N <files>``
- **import**: ``solc --import-ast --combined-json ast --pretty-json --json-indent N expected.json``

Both forms emit canonical JSON (stable key order, fixed indentation), which
makes a byte-level comparison of the two exports meaningful.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Sequence

from ast_roundtrip.backends.base import EXPORTED_AST_FILE, CompilerInvoker, Invocation
from ast_roundtrip.core.errors import ToolUnavailableError

logger = logging.getLogger(__name__)


class SolcCompiler(CompilerInvoker):
  """
  Subprocess-backed compiler invoker.
  """

  def __init__(self, binary: Path, json_indent: int = 4):
    """
    Args:
        binary: Path to the ``solc`` executable.
        json_indent: Indentation passed to ``--json-indent``.
    """
    self.binary = binary
    self.json_indent = json_indent

  def _json_flags(self) -> List[str]:
    return ["--combined-json", "ast", "--pretty-json", "--json-indent", str(self.json_indent)]

  def export_command(self, files: Sequence[Path]) -> List[str]:
    return [str(self.binary), *self._json_flags(), *[str(f) for f in files]]

  def import_command(self) -> List[str]:
    return [str(self.binary), "--import-ast", *self._json_flags()]

  def check_available(self) -> str:
    """
    Verifies the compiler binary can be executed.

    Returns:
        str: The version banner printed by the compiler.

    Raises:
        ToolUnavailableError: If the binary is missing or exits non-zero.
    """
    result = self._run([str(self.binary), "--version"], cwd=None)
    if not result.success:
      raise ToolUnavailableError(f"Command {self.binary} --version not available or failed:\n{result.stderr}")
    return result.stdout.strip()

  def compiles(self, files: Sequence[Path], cwd: Path) -> bool:
    result = self._run([str(self.binary), "--bin", *[str(f) for f in files]], cwd=cwd)
    return result.success

  def export_ast(self, files: Sequence[Path], cwd: Path) -> Invocation:
    return self._run(self.export_command(files), cwd=cwd)

  def import_and_reexport_ast(self, json_text: str, cwd: Path) -> Invocation:
    """
    Re-imports a previously exported AST and exports it again.

    The JSON is written to ``expected.json`` inside ``cwd`` so that the
    reported import command can be rerun verbatim from that directory.

    Args:
        json_text: Output of a successful export.
        cwd: The entry's scratch directory.

    Returns:
        Invocation: Captured process result; stdout holds the re-exported AST.
    """
    (cwd / EXPORTED_AST_FILE).write_text(json_text, encoding="utf-8")
    return self._run([*self.import_command(), EXPORTED_AST_FILE], cwd=cwd)

  def _run(self, cmd: List[str], cwd) -> Invocation:
    logger.debug(f"Running {' '.join(cmd)}")
    try:
      proc = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)
    except OSError as e:
      return Invocation(command=cmd, returncode=127, stderr=str(e))
    return Invocation(command=cmd, returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)
