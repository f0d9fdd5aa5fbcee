"""
Source Splitters.

A corpus file may encode several physical sources separated by marker lines::

    ==== Source: a.sol ====
    contract A {}
    ==== Source: lib/b.sol ====
    import "a.sol";

Two implementations are provided:

1.  `MarkerSplitter`: parses the markers in-process and writes each section
    into the scratch directory.
2.  `ScriptSplitter`: delegates to an external splitter script and maps its
    exit status (0 = multi-file, 1 = single-file, 2 = decode error, anything
    else = fatal).
"""

import logging
import subprocess
import sys
from pathlib import Path
from typing import List, Tuple

from ast_roundtrip.backends.base import SourceSplitter
from ast_roundtrip.core.errors import SplitterFatalError
from ast_roundtrip.core.models import CorpusEntry, DecodeError, MultiFile, SingleFile, SplitResult
from ast_roundtrip.enums import SplitStatus

SOURCE_MARKER = "==== Source:"
_MARKER_END = "===="

logger = logging.getLogger(__name__)


def _split_lines(text: str) -> List[str]:
  """
  Splits text on LF only, keeping each terminator with its line.

  ``str.splitlines`` also breaks on CR, form feeds and Unicode separators,
  which would alter the sources handed to the compiler.
  """
  lines = [line + "\n" for line in text.split("\n")]
  lines[-1] = lines[-1][:-1]
  if not lines[-1]:
    lines.pop()
  return lines


def result_from_status(entry: CorpusEntry, status: int, output: str) -> SplitResult:
  """
  Maps a raw splitter exit status onto a SplitResult.

  Args:
      entry: The entry that was split.
      status: Exit status reported by the splitter.
      output: Splitter output. For multi-file results, a space-delimited list
          of paths relative to the directory the splitter ran in.

  Returns:
      SplitResult: The matching variant.

  Raises:
      SplitterFatalError: If the status is not a known SplitStatus.
  """
  try:
    kind = SplitStatus(status)
  except ValueError:
    raise SplitterFatalError(
      f"Got unexpected return code {status} from splitter for {entry}. Aborting.",
      status=status,
      output=output,
    )

  if kind is SplitStatus.MULTI_FILE:
    paths = [Path(name) for name in output.split()]
    if not paths:
      raise SplitterFatalError(f"Splitter reported multiple sources for {entry} but listed none.", status, output)
    return MultiFile(paths)
  if kind is SplitStatus.SINGLE_FILE:
    return SingleFile(entry.path)
  return DecodeError(output.strip())


class ScriptSplitter(SourceSplitter):
  """
  Runs an external splitter script in the entry's scratch directory.
  """

  def __init__(self, script: Path, interpreter: str = sys.executable):
    """
    Args:
        script: Path to the splitter script.
        interpreter: Executable used to run it.
    """
    self.script = script
    self.interpreter = interpreter

  def split(self, entry: CorpusEntry, workdir: Path) -> SplitResult:
    cmd = [self.interpreter, str(self.script), str(entry.path)]
    try:
      proc = subprocess.run(cmd, cwd=workdir, capture_output=True, text=True)
    except OSError as e:
      raise SplitterFatalError(f"Could not run splitter {self.script}: {e}")
    if proc.stderr:
      logger.warning(proc.stderr.rstrip(), extra={"markup": False})
    return result_from_status(entry, proc.returncode, proc.stdout)


class MarkerSplitter(SourceSplitter):
  """
  In-process splitter for files using ``==== Source: <name> ====`` markers.
  """

  def split(self, entry: CorpusEntry, workdir: Path) -> SplitResult:
    """
    Writes each marked section of ``entry`` into ``workdir``.

    A file whose first line is not a source marker is a single-file test.
    Sections sharing a name are appended to the same file. Section bodies
    are written byte for byte, line terminators included.

    Args:
        entry: Corpus entry to split.
        workdir: Scratch directory receiving the sources.

    Returns:
        SplitResult: MultiFile with the created sources in marker order
        (paths relative to ``workdir``),
        SingleFile, or DecodeError if the file is not valid UTF-8.
    """
    try:
      with open(entry.path, "r", encoding="utf-8", newline="") as f:
        lines = _split_lines(f.read())
    except UnicodeDecodeError as e:
      return DecodeError(
        f"UnicodeDecodeError in '{entry}': {e}\n"
        "This is expected for some tests containing invalid utf8 sequences. Exception will be ignored."
      )

    if not lines or not lines[0].startswith(SOURCE_MARKER):
      return SingleFile(entry.path)

    sections: List[Tuple[str, List[str]]] = []
    for line in lines:
      if line.startswith(SOURCE_MARKER):
        sections.append((self._source_name(line), []))
      else:
        sections[-1][1].append(line)

    root = workdir.resolve()
    created: List[str] = []
    for name, body in sections:
      target = (root / name).resolve()
      if not name or root not in target.parents:
        raise SplitterFatalError(f"Invalid source name '{name}' in {entry}.")
      target.parent.mkdir(parents=True, exist_ok=True)
      with open(target, "a", encoding="utf-8", newline="") as f:
        f.write("".join(body))
      if name not in created:
        created.append(name)

    logger.debug(f"Split {entry} into {len(created)} sources")
    return MultiFile([Path(name) for name in created])

  @staticmethod
  def _source_name(line: str) -> str:
    name = line[len(SOURCE_MARKER) :].strip()
    if name.endswith(_MARKER_END):
      name = name[: -len(_MARKER_END)].rstrip()
    return name
