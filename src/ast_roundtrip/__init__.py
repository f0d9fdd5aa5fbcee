"""
ast-roundtrip Package.

A correctness oracle for compiler AST serialization. Every corpus file is
exported to AST JSON, imported back and exported again; the two exports must
be byte-identical.

Usage
-----

Command Line
^^^^^^^^^^^^

.. code-block:: bash

    ast-roundtrip ast --exit-on-error

Programmatic
^^^^^^^^^^^^

.. code-block:: python

    from pathlib import Path
    from ast_roundtrip import run_roundtrip

    stats = run_roundtrip(
        roots=[Path("test/libsolidity/ASTJSON")],
        compiler=Path("build/solc/solc"),
    )
    print(stats.tested, stats.failed)
"""

from pathlib import Path
from typing import Iterable, Optional, Sequence

from ast_roundtrip.backends.base import CompilerInvoker, SourceSplitter
from ast_roundtrip.backends.solc import SolcCompiler
from ast_roundtrip.backends.splitter import MarkerSplitter
from ast_roundtrip.config import RoundTripConfig, DEFAULT_EXCLUDED
from ast_roundtrip.core.aggregator import ResultAggregator
from ast_roundtrip.core.comparator import RoundTripComparator
from ast_roundtrip.core.models import RunStatistics
from ast_roundtrip.core.walker import CorpusWalker, discover

__version__ = "0.1.0"


def run_roundtrip(
  roots: Sequence[Path],
  compiler: Optional[Path] = None,
  invoker: Optional[CompilerInvoker] = None,
  splitter: Optional[SourceSplitter] = None,
  extension: str = ".sol",
  excluded_names: Iterable[str] = DEFAULT_EXCLUDED,
  exit_on_first_failure: bool = False,
) -> RunStatistics:
  """
  Runs the round-trip oracle over a corpus.

  Args:
      roots (Sequence[Path]): Corpus directories.
      compiler (Path, optional): Path to ``solc``. Ignored when ``invoker`` is given.
      invoker (CompilerInvoker, optional): Custom compiler backend.
      splitter (SourceSplitter, optional): Custom splitter. Defaults to the marker splitter.
      extension (str): Suffix of corpus files.
      excluded_names (Iterable[str]): File names skipped wherever they appear.
      exit_on_first_failure (bool): Halt on the first mismatch.

  Returns:
      RunStatistics: Final counters.

  Raises:
      ValueError: If neither ``compiler`` nor ``invoker`` is given.
      RoundTripError: On a splitter failure or a failed compiler invocation.
  """
  if invoker is None:
    if compiler is None:
      raise ValueError("Either a compiler path or a CompilerInvoker is required")
    invoker = SolcCompiler(compiler)

  aggregator = ResultAggregator(RunStatistics(exit_on_first_failure=exit_on_first_failure))
  walker = CorpusWalker(splitter or MarkerSplitter(), RoundTripComparator(invoker), aggregator)
  return walker.run(discover(roots, extension, excluded_names), label=extension)


__all__ = [
  "RoundTripConfig",
  "RunStatistics",
  "run_roundtrip",
  "__version__",
]
