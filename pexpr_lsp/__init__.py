"""pexpr Language Server and REPL integration package.

This package provides:
- A pygls-based Language Server for pexpr expressions.
- A static indexer that scans documents for def forms and call sites without evaluation.
- A simple TCP REPL server to evaluate code via the existing Interpreter.

Note: The LSP does not evaluate user buffers; it builds a static index from text.
"""

__all__ = [
    "server",
    "indexer",
    "repl_server",
]
