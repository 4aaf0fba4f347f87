"""
Lovelace Command-Line Interface
===============================

This package provides the command-line tools of the Lovelace toolchain:

- **lovlex**: token listing with category labels
- **lovparse**: syntax check
- **lovdiagram**: AST diagram as an indented tree or Graphviz DOT
- **lovc**: Lovelace to C transpiler

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

import logging

__all__ = ["lovlex", "lovparse", "lovdiagram", "lovc", "setup_logging"]


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )
