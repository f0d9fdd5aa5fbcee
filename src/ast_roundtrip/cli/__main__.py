"""
Main Entry Point for the ast-roundtrip CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `ast_roundtrip.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ast_roundtrip.cli import commands
from ast_roundtrip.enums import ImportTestType
from ast_roundtrip import __version__


def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
    prog="ast-roundtrip",
    description="Round-trip oracle for compiler AST import/export",
  )
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: AST ---
  cmd_ast = subparsers.add_parser(
    ImportTestType.AST.value,
    help="Export each corpus file to AST JSON, reimport it and require identical output",
  )
  cmd_ast.add_argument(
    "--exit-on-error",
    action="store_true",
    help="Stop at the first AST mismatch instead of tallying all failures",
  )
  cmd_ast.add_argument(
    "--build-dir",
    type=Path,
    default=None,
    help="Build output directory containing solc/solc (default: $SOLIDITY_BUILD_DIR or <repo>/build)",
  )
  cmd_ast.add_argument("--repo-root", type=Path, default=None, help="Compiler source tree (default: from toml or cwd)")
  cmd_ast.add_argument(
    "--splitter-script",
    type=Path,
    default=None,
    help="External script splitting multi-source test files (default: built-in splitter)",
  )
  cmd_ast.add_argument(
    "--artifacts-dir",
    type=Path,
    default=None,
    help="Keep the working files of failing tests in this directory",
  )
  cmd_ast.add_argument("--json-report", type=Path, default=None, help="Save run statistics to a JSON file")

  return parser


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = build_parser()
  args = parser.parse_args(argv)

  # argparse restricts the command to ImportTestType.AST
  return commands.handle_ast(
    args.exit_on_error,
    build_dir=args.build_dir,
    repo_root=args.repo_root,
    splitter_script=args.splitter_script,
    artifacts_dir=args.artifacts_dir,
    json_report=args.json_report,
  )


if __name__ == "__main__":
  sys.exit(main())
