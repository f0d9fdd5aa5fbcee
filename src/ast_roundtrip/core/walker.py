"""
Corpus Walker.

Discovers corpus entries under the configured roots and drives each one
through the pipeline::

    split -> precompilation probe -> round trip -> aggregate

Entries are processed one at a time, each inside its own scratch directory
which is removed on every exit path. A decode error from the splitter
degrades the entry to single-file mode; any other splitter failure aborts the
whole run.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ast_roundtrip.backends.base import SourceSplitter
from ast_roundtrip.core.aggregator import ResultAggregator
from ast_roundtrip.core.comparator import RoundTripComparator
from ast_roundtrip.core.errors import RoundTripError
from ast_roundtrip.core.models import (
  CorpusEntry,
  DecodeError,
  Mismatched,
  MultiFile,
  RoundTripOutcome,
  RunStatistics,
  SingleFile,
  SplitResult,
)
from ast_roundtrip.utils.console import console, err_console, escape, log_info, log_warning

PROGRESS_MARK = "·"


def discover(roots: Sequence[Path], extension: str, excluded_names: Iterable[str] = ()) -> List[CorpusEntry]:
  """
  Finds every corpus file under the given roots.

  Roots are visited in the order given and files are sorted within a root,
  so the order is stable for a given tree. A file reachable from two roots
  is visited once.

  Args:
      roots: Directories to search recursively.
      extension: File suffix to match (e.g. ``.sol``).
      excluded_names: File names removed from the corpus wherever they appear.

  Returns:
      List[CorpusEntry]: The entries to process.
  """
  excluded = set(excluded_names)
  seen = set()
  entries = []
  for root in roots:
    if not root.is_dir():
      log_warning(f"Corpus directory not found: [path]{escape(str(root))}[/path]")
      continue
    for path in sorted(root.rglob(f"*{extension}")):
      if not path.is_file() or path.name in excluded:
        continue
      resolved = path.resolve()
      if resolved in seen:
        continue
      seen.add(resolved)
      entries.append(CorpusEntry(resolved))
  return entries


class CorpusWalker:
  """
  Sequential driver of the round-trip pipeline over a corpus.
  """

  def __init__(
    self,
    splitter: SourceSplitter,
    comparator: RoundTripComparator,
    aggregator: ResultAggregator,
    artifacts_dir: Optional[Path] = None,
  ):
    """
    Args:
        splitter: Maps entries to physical source files.
        comparator: Runs the probe and the round trip.
        aggregator: Owner of the run statistics.
        artifacts_dir: If set, scratch directories of failing entries are
            copied here before removal.
    """
    self.splitter = splitter
    self.comparator = comparator
    self.aggregator = aggregator
    self.artifacts_dir = artifacts_dir

  @property
  def stats(self) -> RunStatistics:
    return self.aggregator.stats

  def run(self, entries: Sequence[CorpusEntry], label: str = "source") -> RunStatistics:
    """
    Processes entries in order until the corpus is exhausted or the run halts.

    Args:
        entries: Corpus entries, typically from `discover`.
        label: Noun used in the opening progress line.

    Returns:
        RunStatistics: The final statistics.

    Raises:
        RoundTripError: On a splitter failure or a failed compiler invocation.
    """
    self.stats.total_sources = len(entries)
    console.print(f"Looking at {len(entries)} {label} files...")

    for index, entry in enumerate(entries):
      console.print(PROGRESS_MARK, end="")

      with tempfile.TemporaryDirectory(prefix="ast-roundtrip-") as tmp:
        workdir = Path(tmp)
        try:
          outcome = self._process(entry, workdir)
          stop = self.aggregator.record(outcome)
        except RoundTripError:
          self.aggregator.abort()
          self._preserve(index, entry, workdir)
          raise
        if isinstance(outcome, Mismatched):
          self._preserve(index, entry, workdir)

      if stop:
        break

    console.print("")
    return self.stats

  def _process(self, entry: CorpusEntry, workdir: Path) -> RoundTripOutcome:
    files = self._resolve_files(entry, self.splitter.split(entry, workdir))
    return self.comparator.check(entry, files, workdir)

  def _resolve_files(self, entry: CorpusEntry, result: SplitResult) -> List[Path]:
    if isinstance(result, MultiFile):
      return list(result.paths)
    if isinstance(result, SingleFile):
      return [result.path]
    if isinstance(result, DecodeError):
      # Tests with deliberately invalid UTF-8 are still compiled as a whole.
      err_console.print_raw(f"\n\n{result.diagnostic}\n\n")
      return [entry.path]
    raise TypeError(f"Unknown split result: {type(result).__name__}")

  def _preserve(self, index: int, entry: CorpusEntry, workdir: Path) -> None:
    if self.artifacts_dir is None:
      return
    target = self.artifacts_dir / f"{index:05d}_{entry.path.stem}"
    try:
      shutil.copytree(workdir, target, dirs_exist_ok=True)
    except OSError as e:
      log_warning(f"Could not preserve artifacts for {escape(entry.name)}: {escape(str(e))}")
      return
    log_info(f"Artifacts for {escape(entry.name)} preserved in [path]{escape(str(target))}[/path]")
