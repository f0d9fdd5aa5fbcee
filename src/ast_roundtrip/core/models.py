"""
Data Model for the Round-Trip Orchestrator.

Defines the values that flow through the pipeline:

1.  **CorpusEntry**: One logical test case discovered on disk.
2.  **SplitResult**: How an entry maps to physical source files.
3.  **RoundTripOutcome**: The classification of one export/import/export attempt.
4.  **RunStatistics**: Counters owned by the aggregator for the whole run.

Variants are modelled as small dataclass hierarchies so callers can dispatch
with ``isinstance`` and each variant carries only the data it needs.
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List

from ast_roundtrip.enums import OutcomeKind


@dataclass(frozen=True)
class CorpusEntry:
  """A single source file discovered in a corpus root."""

  path: Path

  @property
  def name(self) -> str:
    return self.path.name

  def __str__(self) -> str:
    return str(self.path)


# --- Split Results ---


@dataclass(frozen=True)
class SplitResult:
  """Base split outcome."""

  pass


@dataclass(frozen=True)
class SingleFile(SplitResult):
  """The entry is a plain single-file test and is compiled as-is."""

  path: Path


@dataclass(frozen=True)
class MultiFile(SplitResult):
  """The entry encoded several sources, materialized in the workdir. Paths are relative to it."""

  paths: List[Path]


@dataclass(frozen=True)
class DecodeError(SplitResult):
  """The splitter could not decode the entry. Callers fall back to single-file mode."""

  diagnostic: str


# --- Round-Trip Outcomes ---


@dataclass
class RoundTripOutcome:
  """
  Base outcome of one comparison attempt.

  Attributes:
      entry: The corpus entry the outcome belongs to.
  """

  entry: CorpusEntry
  kind: OutcomeKind = field(init=False)


@dataclass
class Passed(RoundTripOutcome):
  kind: OutcomeKind = field(init=False, default=OutcomeKind.PASSED)


@dataclass
class SkippedUncompilable(RoundTripOutcome):
  kind: OutcomeKind = field(init=False, default=OutcomeKind.SKIPPED_UNCOMPILABLE)


@dataclass
class _Reproducible(RoundTripOutcome):
  """
  Outcome that must be reproducible by hand.

  Attributes:
      export_command: Argument vector of the export invocation.
      import_command: Argument vector of the import and re-export invocation.
      workdir: Directory the commands were run from.
  """

  export_command: List[str] = field(default_factory=list)
  import_command: List[str] = field(default_factory=list)
  workdir: Path = field(default_factory=Path.cwd)


@dataclass
class Mismatched(_Reproducible):
  """The re-exported AST differs from the first export."""

  diff: str = ""
  kind: OutcomeKind = field(init=False, default=OutcomeKind.MISMATCHED)


@dataclass
class ExportFailed(_Reproducible):
  """The first export invocation failed."""

  stderr: str = ""
  stdout: str = ""
  kind: OutcomeKind = field(init=False, default=OutcomeKind.EXPORT_FAILED)


@dataclass
class ImportFailed(_Reproducible):
  """The import and re-export invocation failed."""

  stderr: str = ""
  stdout: str = ""
  kind: OutcomeKind = field(init=False, default=OutcomeKind.IMPORT_FAILED)


@dataclass
class RunStatistics:
  """
  Counters for a whole run.

  Invariants: ``tested + uncompilable <= total_sources``, ``failed <= tested``,
  and no entry is processed once ``halted_early`` is set.
  """

  tested: int = 0
  failed: int = 0
  uncompilable: int = 0
  total_sources: int = 0
  exit_on_first_failure: bool = False
  halted_early: bool = False

  @property
  def processed(self) -> int:
    return self.tested + self.uncompilable

  def to_dict(self) -> Dict[str, Any]:
    return asdict(self)
