"""FJSON document values, wire protocol errors, SQL condition helpers and a command table."""

__version__ = "0.1.0"
__all__ = ["values", "numbers", "scalars", "fjson", "errors", "where", "commands"]