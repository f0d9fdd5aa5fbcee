"""
Result Aggregator.

Owns the `RunStatistics` of a run and translates each `RoundTripOutcome`
into counter updates, visible diagnostics and, where required, termination.

Policy:

- `Passed`: counted as tested.
- `Mismatched`: counted as tested and failed. The diff and the reproduction
  commands are printed. Halts the run only when ``exit_on_first_failure``
  is set.
- `ExportFailed` / `ImportFailed`: always fatal. The captured streams and the
  reproduction commands are printed and an `InvocationFailure` is raised.
- `SkippedUncompilable`: counted as uncompilable.
"""

from ast_roundtrip.core.errors import ExportFailure, ImportFailure
from ast_roundtrip.core.models import (
  ExportFailed,
  ImportFailed,
  Mismatched,
  Passed,
  RoundTripOutcome,
  RunStatistics,
  SkippedUncompilable,
)
from ast_roundtrip.utils.console import console, err_console, escape, log_error
from ast_roundtrip.utils.diffing import render_command

PASS_MARK = "✅"


def print_used_commands(outcome) -> None:
  """
  Prints the scratch directory and the two commands used for an entry.

  Args:
      outcome: A Mismatched, ExportFailed or ImportFailed outcome.
  """
  err_console.print(f"[error]Working directory used for this test: {escape(str(outcome.workdir))}[/error]")
  err_console.print("[error]Used commands for test:[/error]")
  err_console.print("[error]# export[/error]")
  err_console.print_raw(f"$ {render_command(outcome.export_command)}")
  err_console.print("[error]# import[/error]")
  err_console.print_raw(f"$ {render_command(outcome.import_command)}")


def print_stderr_stdout(message: str, stderr: str, stdout: str) -> None:
  err_console.print(f"[error]{escape(message)}[/error]")
  err_console.print("")
  err_console.print("[error]stderr:[/error]")
  err_console.print_raw(stderr, end="" if stderr.endswith("\n") else "\n")
  err_console.print("")
  err_console.print("[error]stdout:[/error]")
  err_console.print_raw(stdout, end="" if stdout.endswith("\n") else "\n")


class ResultAggregator:
  """
  Single owner of the run statistics.
  """

  def __init__(self, stats: RunStatistics):
    """
    Args:
        stats: The statistics to update. ``stats.exit_on_first_failure``
            controls whether a mismatch halts the run.
    """
    self.stats = stats
    self._aborted = False

  @property
  def halted(self) -> bool:
    return self.stats.halted_early

  @property
  def succeeded(self) -> bool:
    """True iff no entry failed and no fatal abort occurred."""
    return self.stats.failed == 0 and not self._aborted

  def abort(self) -> None:
    """Marks the run as fatally aborted. No further entries may be processed."""
    self._aborted = True
    self.stats.halted_early = True

  def record(self, outcome: RoundTripOutcome) -> bool:
    """
    Applies one outcome to the statistics.

    Args:
        outcome: Result of one entry.

    Returns:
        bool: True if the run must stop after this entry.

    Raises:
        ExportFailure: If the export phase failed.
        ImportFailure: If the import phase failed.
    """
    if isinstance(outcome, Passed):
      self.stats.tested += 1
      console.print(PASS_MARK, end="")

    elif isinstance(outcome, SkippedUncompilable):
      self.stats.uncompilable += 1

    elif isinstance(outcome, Mismatched):
      self.stats.tested += 1
      self.stats.failed += 1
      err_console.print("")
      log_error(f"AST reimport failed for {escape(str(outcome.entry))}")
      err_console.print_raw(outcome.diff)
      print_used_commands(outcome)
      if self.stats.exit_on_first_failure:
        self.stats.halted_early = True

    elif isinstance(outcome, ExportFailed):
      self.abort()
      print_stderr_stdout(f"ERROR: AST export failed for input file {outcome.entry}.", outcome.stderr, outcome.stdout)
      print_used_commands(outcome)
      raise ExportFailure(outcome)

    elif isinstance(outcome, ImportFailed):
      self.abort()
      print_stderr_stdout(f"ERROR: AST import failed for input file {outcome.entry}.", outcome.stderr, outcome.stdout)
      print_used_commands(outcome)
      raise ImportFailure(outcome)

    else:
      raise TypeError(f"Unknown outcome type: {type(outcome).__name__}")

    return self.stats.halted_early

  def summary(self) -> str:
    s = self.stats
    if s.failed == 0:
      return (
        f"SUCCESS: {s.tested} tests passed, {s.failed} failed, "
        f"{s.uncompilable} could not be compiled ({s.total_sources} sources total)."
      )
    return (
      f"FAILURE: Out of {s.total_sources} sources, {s.tested} tested, {s.failed} failed, "
      f"({s.uncompilable} could not be compiled)."
    )
