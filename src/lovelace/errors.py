"""
Lovelace Toolchain Error Hierarchy
==================================

This module defines the exception hierarchy for the Lovelace toolchain.
All exceptions inherit from LovelaceError, allowing callers to catch all
toolchain errors with a single except clause if desired.

Exception Hierarchy
-------------------
LovelaceError (base)
├── FileAccessError - source file missing/unreadable, output unwritable
├── LexicalError - scanner rejects the input text
├── LovelaceSyntaxError - parser rejects the token sequence
├── UnsupportedNodeError - transpiler meets a node variant it cannot lower
└── NestingDepthError - nesting too deep for the recursive stages

Every error is terminal: the toolchain performs no recovery or retry,
reports the failure, and produces no output artifact.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional, Sequence


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Base Exception Class
# =============================================================================

class LovelaceError(Exception):
    """
    Base exception for all Lovelace toolchain errors.

    Provides source location tracking, source line context and an
    optional hint, formatted into a single compiler-style message.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        return self.location.line if self.location else None

    @property
    def column(self) -> Optional[int]:
        return self.location.column if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.lov:3:14: error: unexpected token ';'
                print (x;
                        ^
            hint: expected ')'
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# File Access
# =============================================================================

class FileAccessError(LovelaceError):
    """
    Source file missing or unreadable, or output file not writable.

    Attributes:
        path: The offending file path
    """

    def __init__(self, path: str, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"cannot access '{self.path}': {reason}")


# =============================================================================
# Lexical and Syntax Errors
# =============================================================================

class LexicalError(LovelaceError):
    """
    The scanner rejected the input.

    Examples:
        - Character outside the Lovelace alphabet ('@', '%', ...)
        - A lone '&' or '|' (only '&&' and '||' exist)
        - ':' not followed by '=' (only ':=' exists)
        - Exponent marker without digits ('1e')
        - Number too large for a double ('1e400')
    """
    pass


class LovelaceSyntaxError(LovelaceError):
    """
    The parser rejected the token sequence.

    Carries the position of the offending token and a description of
    the continuations the grammar would have accepted there.

    Attributes:
        found: Text of the offending token
        expected: Human-readable descriptions of acceptable tokens
    """

    def __init__(
        self,
        found: str,
        expected: Sequence[str],
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = tuple(expected)

        hint = None
        if self.expected:
            if len(self.expected) == 1:
                hint = f"expected {self.expected[0]}"
            else:
                hint = f"expected one of: {', '.join(self.expected)}"

        super().__init__(
            f"unexpected {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Code Generation Errors
# =============================================================================

class UnsupportedNodeError(LovelaceError):
    """
    The transpiler met a tree-node variant it does not lower.

    Unreachable for trees built by the parser; it guards against
    node types added to the AST without a matching translation rule.

    Attributes:
        node: The node that could not be lowered
    """

    def __init__(self, node: object, context: str = "node"):
        self.node = node
        location = getattr(node, "location", None)
        super().__init__(
            f"unsupported {context} '{type(node).__name__}'",
            location=location,
            hint="no translation rule exists for this node type",
        )


class NestingDepthError(LovelaceError):
    """
    The program nests blocks or parentheses deeper than the toolchain's
    recursive stages can follow.

    Long operator chains are handled iteratively; this is raised only for
    genuinely deep nesting such as hundreds of levels of parentheses.
    """

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(
            f"{filename}: program is nested too deeply to process",
            hint="split deeply nested expressions or blocks into smaller steps",
        )
