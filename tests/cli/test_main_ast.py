"""
Tests for CLI 'ast' Command argument handling.

Verifies that:
1.  Arguments are parsed and forwarded to the handler.
2.  Invalid invocations exit with argparse's usage error.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from ast_roundtrip.cli.__main__ import main


@patch("ast_roundtrip.cli.commands.handle_ast")
def test_ast_defaults(mock_handle):
  mock_handle.return_value = 0

  assert main(["ast"]) == 0

  mock_handle.assert_called_once()
  args, kwargs = mock_handle.call_args
  assert args == (False,)
  assert kwargs == {
    "build_dir": None,
    "repo_root": None,
    "splitter_script": None,
    "artifacts_dir": None,
    "json_report": None,
  }


@patch("ast_roundtrip.cli.commands.handle_ast")
def test_ast_all_flags(mock_handle):
  mock_handle.return_value = 1

  code = main(
    [
      "ast",
      "--exit-on-error",
      "--build-dir",
      "out",
      "--repo-root",
      "/src/solidity",
      "--splitter-script",
      "scripts/splitSources.py",
      "--artifacts-dir",
      "failed",
      "--json-report",
      "report.json",
    ]
  )

  assert code == 1
  args, kwargs = mock_handle.call_args
  assert args == (True,)
  assert kwargs["build_dir"] == Path("out")
  assert kwargs["repo_root"] == Path("/src/solidity")
  assert kwargs["splitter_script"] == Path("scripts/splitSources.py")
  assert kwargs["artifacts_dir"] == Path("failed")
  assert kwargs["json_report"] == Path("report.json")


@pytest.mark.parametrize("argv", [[], ["evm"], ["ast", "--unknown"]])
def test_invalid_invocations(argv):
  with pytest.raises(SystemExit) as exc:
    main(argv)
  assert exc.value.code == 2
