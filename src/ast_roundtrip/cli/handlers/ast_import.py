"""CLI handler for the AST import/export round-trip test."""

import json
from pathlib import Path
from typing import Optional

from ast_roundtrip.backends.base import SourceSplitter
from ast_roundtrip.backends.solc import SolcCompiler
from ast_roundtrip.backends.splitter import MarkerSplitter, ScriptSplitter
from ast_roundtrip.config import RoundTripConfig
from ast_roundtrip.core.aggregator import ResultAggregator
from ast_roundtrip.core.comparator import RoundTripComparator
from ast_roundtrip.core.errors import RoundTripError, SplitterFatalError
from ast_roundtrip.core.models import RunStatistics
from ast_roundtrip.core.walker import CorpusWalker, discover
from ast_roundtrip.utils.console import console, err_console, escape, log_error, log_info, log_success


def build_splitter(config: RoundTripConfig) -> SourceSplitter:
  if config.splitter_script:
    return ScriptSplitter(config.splitter_script)
  return MarkerSplitter()


def handle_ast(
  exit_on_error: bool,
  build_dir: Optional[Path] = None,
  repo_root: Optional[Path] = None,
  splitter_script: Optional[Path] = None,
  artifacts_dir: Optional[Path] = None,
  json_report: Optional[Path] = None,
) -> int:
  """
  Handles the 'ast' command: export, reimport and re-export every corpus file.

  Args:
      exit_on_error: Halt on the first AST mismatch.
      build_dir: Override for the build directory.
      repo_root: Override for the repository root.
      splitter_script: External splitter to use instead of the built-in one.
      artifacts_dir: Directory to keep scratch directories of failing entries.
      json_report: Optional path receiving the final statistics as JSON.

  Returns:
      int: 0 on full success, 1 otherwise.
  """
  config = RoundTripConfig.load(
    repo_root=repo_root,
    build_dir=build_dir,
    splitter_script=splitter_script,
    artifacts_dir=artifacts_dir,
    exit_on_error=exit_on_error or None,
  )

  compiler = SolcCompiler(config.compiler, json_indent=config.json_indent)
  stats = RunStatistics(exit_on_first_failure=config.exit_on_error)
  aggregator = ResultAggregator(stats)

  try:
    version = compiler.check_available()
    log_info(f"Using compiler [path]{escape(str(config.compiler))}[/path] ({escape(version.splitlines()[-1] if version else '?')})")

    entries = discover(config.resolved_corpus_dirs, config.extension, config.excluded_names)
    walker = CorpusWalker(build_splitter(config), RoundTripComparator(compiler), aggregator, config.artifacts_dir)
    walker.run(entries, label=config.extension)
  except SplitterFatalError as e:
    aggregator.abort()
    err_console.print("")
    log_error(escape(str(e)))
    if e.output:
      err_console.print_raw(f"\n\n{e.output}\n\n")
  except RoundTripError as e:
    aggregator.abort()
    log_error(escape(str(e)))

  if json_report:
    _write_report(json_report, stats, aggregator.succeeded)

  # A fatal abort leaves the counters incomplete, so no summary is printed.
  if not aggregator.succeeded and not stats.failed:
    return 1

  console.print(aggregator.summary(), markup=False, highlight=False)
  return 0 if aggregator.succeeded else 1


def _write_report(path: Path, stats: RunStatistics, succeeded: bool) -> None:
  path.parent.mkdir(parents=True, exist_ok=True)
  with open(path, "wt", encoding="utf-8") as f:
    json.dump({**stats.to_dict(), "succeeded": succeeded}, f, indent=2, sort_keys=True)
  log_success(f"Round-trip report saved to [path]{escape(str(path))}[/path]")
