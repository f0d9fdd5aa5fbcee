"""
Central Logging and Console Utilities.

This module unifies the application's output using the Python standard
`logging` library, backed by `rich` for formatting.

The oracle writes to two streams:

1.  **Standard output**: progress indicators and the final summary line
    (``console``).
2.  **Standard error**: diagnostics, captured tool output, diffs and
    reproduction commands (``err_console``). The logging handler is bound to
    this stream.

Both are Proxies around a Rich Console so the destination can be swapped at
runtime via `set_console` (e.g. to an in-memory buffer in tests).

Attributes:
    console (_ConsoleProxy): Stable reference to the active stdout console.
    err_console (_ConsoleProxy): Stable reference to the active stderr console.
"""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.theme import Theme

# --- Constants & Configuration ---

# Custom logging level for Success (higher than INFO, lower than WARNING)
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)


class _ConsoleProxy:
  """
  A Proxy wrapper around `rich.console.Console`.

  All printing operations are forwarded to the 'backend' Console. The proxy
  flagged as the logging target also reconfigures the root logger's
  RichHandler whenever its backend changes.

  Attributes:
      _backend (Console): The active Rich Console instance.
      _stderr (bool): Whether the default backend writes to standard error.
      _logging_target (bool): Whether logging records are routed here.
  """

  def __init__(self, stderr: bool = False, logging_target: bool = False) -> None:
    self._stderr = stderr
    self._logging_target = logging_target
    self._backend: Console = self._default_console()
    self._configure_logging()

  def _default_console(self) -> Console:
    return Console(theme=_THEME, stderr=self._stderr)

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new Console backend and updates logging handlers.

    Args:
        new_console (Console): The new Rich Console instance to use.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    """Resets the proxy to a fresh console on its default stream."""
    self._backend = self._default_console()
    self._configure_logging()

  @property
  def backend(self) -> Console:
    return self._backend

  def _configure_logging(self) -> None:
    """
    Directs the standard logging library to the current backend console.
    No-op for proxies that are not the logging target.
    """
    if not self._logging_target:
      return

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
      if isinstance(handler, RichHandler):
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      omit_repeated_times=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )

    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def print_raw(self, text: str, end: str = "\n") -> None:
    """
    Prints text verbatim, without markup, highlighting or wrapping.

    Used for captured tool output and diffs, which may contain square
    brackets that Rich would otherwise interpret as markup.

    Args:
        text (str): The text to emit.
        end (str): Line terminator.
    """
    self._backend.print(text, end=end, markup=False, highlight=False, soft_wrap=True)

  def export_text(self, **kwargs: Any) -> str:
    """
    Forwards `export_text` (useful for log capturing).

    Args:
        **kwargs: Options passed to console.export_text.

    Returns:
        str: The captured text output.
    """
    return self._backend.export_text(**kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


# Singletons exposed to the application.
console = _ConsoleProxy()
err_console = _ConsoleProxy(stderr=True, logging_target=True)


def set_console(new_console: Console, new_err_console: Optional[Console] = None) -> None:
  """
  Global helper to inject specific console instances.

  Args:
      new_console (Console): Replacement for the stdout console.
      new_err_console (Optional[Console]): Replacement for the stderr console.
          Defaults to the same instance as ``new_console``.
  """
  console.set_backend(new_console)
  err_console.set_backend(new_err_console or new_console)


def reset_console() -> None:
  """Global helper to reset logging and both consoles to their standard streams."""
  console.reset()
  err_console.reset()


def get_console() -> Console:
  return console.backend


def log_info(msg: str) -> None:
  """
  Logs an informational message via standard logging.

  Args:
      msg (str): The message content. Can include rich markup like [bold].
  """
  logging.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  logging.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  logging.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """
  Logs an error message via standard logging.

  Args:
      msg (str): The message content.
  """
  logging.error(f"❌ {msg}", extra={"markup": True})


__all__ = [
  "console",
  "err_console",
  "escape",
  "get_console",
  "log_error",
  "log_info",
  "log_success",
  "log_warning",
  "reset_console",
  "set_console",
]
