"""
Error taxonomy for the round-trip oracle.

Only a mismatch is a soft failure. Everything raised from here aborts the
whole run because it means the oracle's own tooling is broken.
"""

from typing import Optional

from ast_roundtrip.core.models import ExportFailed, ImportFailed


class RoundTripError(Exception):
  """Base class for errors that abort a run."""

  pass


class SplitterFatalError(RoundTripError):
  """
  Raised when the source splitter reports a status outside the known set.

  Attributes:
      status: The raw status reported, if any.
      output: Whatever the splitter printed.
  """

  def __init__(self, message: str, status: Optional[int] = None, output: str = ""):
    super().__init__(message)
    self.status = status
    self.output = output


class ToolUnavailableError(RoundTripError):
  """Raised when a required external binary cannot be executed."""

  pass


class InvocationFailure(RoundTripError):
  """A compiler invocation failed during the round trip."""

  def __init__(self, message: str, outcome):
    super().__init__(message)
    self.outcome = outcome


class ExportFailure(InvocationFailure):
  def __init__(self, outcome: ExportFailed):
    super().__init__(f"AST export failed for input file {outcome.entry}.", outcome)


class ImportFailure(InvocationFailure):
  def __init__(self, outcome: ImportFailed):
    super().__init__(f"AST import failed for input file {outcome.entry}.", outcome)
