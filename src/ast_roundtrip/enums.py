"""
Enumerations for ast-roundtrip.

This module defines the closed sets of states used across the orchestrator:
splitter exit statuses, round-trip outcome kinds and the supported test types.
"""

from enum import Enum, IntEnum


class SplitStatus(IntEnum):
  """
  Exit statuses understood from a source splitter.

  Any status outside this set is an unrecoverable tooling failure.
  """

  MULTI_FILE = 0
  SINGLE_FILE = 1
  DECODE_ERROR = 2


class OutcomeKind(str, Enum):
  """
  Classification of a single round-trip attempt.
  """

  PASSED = "passed"
  MISMATCHED = "mismatched"
  EXPORT_FAILED = "export_failed"
  IMPORT_FAILED = "import_failed"
  SKIPPED_UNCOMPILABLE = "skipped_uncompilable"


class ImportTestType(str, Enum):
  """
  Import test types selectable from the command line.
  """

  AST = "ast"
