"""
Backends Package.

Interfaces and implementations of the external tooling the oracle drives:
the source splitter and the compiler.
"""
