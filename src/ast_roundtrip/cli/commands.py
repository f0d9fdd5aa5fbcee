"""
CLI Command Handlers Facade.

Re-exports handlers from `ast_roundtrip.cli.handlers` so the entry point and
tests patch a single module.
"""

from ast_roundtrip.cli.handlers.ast_import import handle_ast, build_splitter

__all__ = [
  "build_splitter",
  "handle_ast",
]
