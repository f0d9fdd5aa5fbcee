"""
Entry point for module execution (``python -m ast_roundtrip``).

This module delegates execution to the CLI handler in ``ast_roundtrip.cli.__main__``.
"""

import sys
from ast_roundtrip.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
