"""
Tests for Centralized Logging Utility and Injection Mechanics.

Verifies:
1. Singleton Proxy correctness.
2. Injection capabilities (`set_console`) for both streams.
3. Standard logging wrappers route to the error stream.
4. Raw printing leaves markup-like text untouched.
"""

import io

import pytest
from rich.console import Console

from ast_roundtrip.utils.console import (
  console,
  err_console,
  get_console,
  log_error,
  log_info,
  log_success,
  log_warning,
  reset_console,
  set_console,
)


def _recording_console() -> Console:
  return Console(record=True, file=io.StringIO(), width=200)


@pytest.fixture(autouse=True)
def cleanup_console():
  """Ensures consoles are reset to the standard streams after every test."""
  reset_console()
  yield
  reset_console()


def test_console_singleton_proxy():
  assert callable(console.print)
  assert hasattr(console, "export_text")
  assert isinstance(get_console(), Console)
  assert err_console.backend.stderr is True


def test_logging_goes_to_error_console():
  out = _recording_console()
  err = _recording_console()
  set_console(out, err)

  log_info("Captured Info")
  log_warning("Captured Warning")
  log_error("Captured Error")
  log_success("Captured Success")

  err_text = err.export_text()
  assert "Captured Info" in err_text
  assert "Captured Warning" in err_text
  assert "Captured Error" in err_text
  assert "Captured Success" in err_text
  assert "Captured" not in out.export_text()


def test_single_console_injection_covers_both_streams():
  capture = _recording_console()
  set_console(capture)

  console.print("progress")
  log_info("diagnostic")

  text = capture.export_text()
  assert "progress" in text
  assert "diagnostic" in text


def test_print_raw_preserves_brackets():
  capture = _recording_console()
  set_console(capture)

  err_console.print_raw('"nodes": [bold] [/x]')

  assert '"nodes": [bold] [/x]' in capture.export_text()


def test_reset_functionality():
  temp = Console()
  set_console(temp)
  assert get_console() is temp

  reset_console()

  assert get_console() is not temp
  assert isinstance(get_console(), Console)


def test_logging_wrappers_use_stderr(capsys):
  reset_console()

  log_error("ErrorText")

  captured = capsys.readouterr()
  assert "ErrorText" in captured.err
  assert "ErrorText" not in captured.out


def test_proxy_getattr_delegation():
  assert isinstance(console.width, int)
  assert console.width > 0
