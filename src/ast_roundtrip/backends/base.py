"""
Backend Interfaces.

Defines the abstract capabilities the orchestrator consumes from external
tooling. Concrete backends wrap real processes; tests substitute in-memory
doubles without touching orchestration logic.

- `SourceSplitter`: maps a corpus entry to one or more physical source files.
- `CompilerInvoker`: probes compilability, exports AST JSON, and imports a
  previously exported AST JSON to export it again.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from ast_roundtrip.core.models import CorpusEntry, SplitResult

# File name the first export is stored under inside an entry's scratch directory.
EXPORTED_AST_FILE = "expected.json"


@dataclass
class Invocation:
  """
  Captured result of one compiler invocation.

  Attributes:
      command: The argument vector that was executed.
      returncode: Process exit status.
      stdout: Captured standard output (the AST JSON on success).
      stderr: Captured standard error.
  """

  command: List[str]
  returncode: int
  stdout: str = ""
  stderr: str = field(default="")

  @property
  def success(self) -> bool:
    return self.returncode == 0


class SourceSplitter(ABC):
  """
  Abstract source splitter.
  """

  @abstractmethod
  def split(self, entry: CorpusEntry, workdir: Path) -> SplitResult:
    """
    Resolves a corpus entry to its physical source files.

    Multi-file outputs are materialized inside ``workdir``.

    Args:
        entry (CorpusEntry): The entry to split.
        workdir (Path): Private scratch directory for this entry.

    Returns:
        SplitResult: SingleFile, MultiFile or DecodeError.

    Raises:
        SplitterFatalError: On any unrecoverable splitter failure.
    """
    pass


class CompilerInvoker(ABC):
  """
  Abstract compiler driver with the two round-trip command forms.
  """

  @abstractmethod
  def compiles(self, files: Sequence[Path], cwd: Path) -> bool:
    """Cheap precompilation probe. False classifies the entry as uncompilable."""
    pass

  @abstractmethod
  def export_ast(self, files: Sequence[Path], cwd: Path) -> Invocation:
    """Serializes the AST of ``files`` to canonical JSON on stdout."""
    pass

  @abstractmethod
  def import_and_reexport_ast(self, json_text: str, cwd: Path) -> Invocation:
    """Parses exported AST JSON and re-serializes it with the same canonicalization."""
    pass

  @abstractmethod
  def export_command(self, files: Sequence[Path]) -> List[str]:
    pass

  @abstractmethod
  def import_command(self) -> List[str]:
    pass
