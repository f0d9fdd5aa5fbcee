"""
Round-Trip Comparator.

Executes the two-phase round trip for one corpus entry resolved to a concrete
file set and classifies the outcome:

1.  **Export**: serialize the AST of the files. Failure -> `ExportFailed`.
2.  **Import**: parse the exported JSON back and re-export it.
    Failure -> `ImportFailed`.
3.  **Compare**: exact equality of both texts. Equal -> `Passed`,
    otherwise `Mismatched` carrying a unified diff.

Keeping export and import failures apart tells whether a defect lives in the
serializer or in the reimport path.
"""

from pathlib import Path
from typing import Sequence

from ast_roundtrip.backends.base import EXPORTED_AST_FILE, CompilerInvoker
from ast_roundtrip.core.models import (
  CorpusEntry,
  ExportFailed,
  ImportFailed,
  Mismatched,
  Passed,
  RoundTripOutcome,
  SkippedUncompilable,
)
from ast_roundtrip.utils.diffing import diff_texts

EXPECTED_FILE = EXPORTED_AST_FILE
OBTAINED_FILE = "obtained.json"


class RoundTripComparator:
  """
  Classifies the export -> import -> export round trip of a file set.
  """

  def __init__(self, compiler: CompilerInvoker):
    self.compiler = compiler

  def check(self, entry: CorpusEntry, files: Sequence[Path], workdir: Path) -> RoundTripOutcome:
    """
    Runs the precompilation probe, then the round trip.

    Args:
        entry: The corpus entry under test.
        files: Physical source files of the entry.
        workdir: The entry's scratch directory; compiler processes run here.

    Returns:
        RoundTripOutcome: `SkippedUncompilable` if the compiler rejects the
        input, otherwise the result of `compare`.
    """
    if not self.compiler.compiles(files, workdir):
      return SkippedUncompilable(entry)
    return self.compare(entry, files, workdir)

  def compare(self, entry: CorpusEntry, files: Sequence[Path], workdir: Path) -> RoundTripOutcome:
    """
    Executes export, import and comparison.

    Both exported texts are kept in ``workdir`` as ``expected.json`` and
    ``obtained.json`` so the reported commands reproduce the failure.

    Args:
        entry: The corpus entry under test.
        files: Physical source files of the entry.
        workdir: The entry's scratch directory.

    Returns:
        RoundTripOutcome: Passed, Mismatched, ExportFailed or ImportFailed.
    """
    repro = dict(
      export_command=self.compiler.export_command(files),
      import_command=[*self.compiler.import_command(), EXPECTED_FILE],
      workdir=workdir,
    )

    exported = self.compiler.export_ast(files, workdir)
    (workdir / EXPECTED_FILE).write_text(exported.stdout, encoding="utf-8")
    if not exported.success:
      return ExportFailed(entry, stderr=exported.stderr, stdout=exported.stdout, **repro)

    reexported = self.compiler.import_and_reexport_ast(exported.stdout, workdir)
    (workdir / OBTAINED_FILE).write_text(reexported.stdout, encoding="utf-8")
    if not reexported.success:
      return ImportFailed(entry, stderr=reexported.stderr, stdout=reexported.stdout, **repro)

    diff, changed = diff_texts(exported.stdout, reexported.stdout, EXPECTED_FILE, OBTAINED_FILE)
    if changed:
      return Mismatched(entry, diff=diff, **repro)
    return Passed(entry)
