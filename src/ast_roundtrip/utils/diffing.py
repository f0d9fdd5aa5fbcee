"""
Text Diff and Command Rendering.

Helpers used when reporting a round-trip failure: a unified diff of the two
exported AST texts, and shell-quoted renderings of the commands needed to
reproduce the failure manually.
"""

import difflib
import shlex
from typing import Iterable, Tuple


def diff_texts(
  expected: str,
  obtained: str,
  fromfile: str = "expected.json",
  tofile: str = "obtained.json",
) -> Tuple[str, bool]:
  """
  Compares two serialized texts for exact equality and renders a unified diff.

  Equality is byte-for-byte on the canonical serialization: whitespace-only
  differences count as differences.

  Args:
      expected: Text of the first export.
      obtained: Text of the re-export.
      fromfile: Label for the expected side.
      tofile: Label for the obtained side.

  Returns:
      tuple: (diff_text, has_changed). ``diff_text`` is empty when equal.
  """
  if expected == obtained:
    return "", False

  lines = difflib.unified_diff(
    expected.splitlines(keepends=True),
    obtained.splitlines(keepends=True),
    fromfile=fromfile,
    tofile=tofile,
  )
  return "".join(lines), True


def render_command(argv: Iterable[str]) -> str:
  """Joins an argument vector into a copy-pasteable shell command."""
  return shlex.join([str(a) for a in argv])
