from .ast_import import handle_ast, build_splitter

__all__ = [
  "build_splitter",
  "handle_ast",
]
