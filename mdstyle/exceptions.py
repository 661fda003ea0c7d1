"""Package-specific exception types."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tokens import Token


class ParseError(ValueError):
    """Base class for parsing-related errors.

    Raised directly for structural problems in a token list (for example a
    list that does not end in an end-of-input token).
    """


class LexError(ParseError):
    """Raised when the lexer meets a byte outside the recognized set.

    Args:
        token: The illegal token that stopped the scan.
        offset: Zero-based byte offset of the offending byte in the input.
        line_number: One-based line of the offending byte.
        column: One-based column of the offending byte.
    """

    def __init__(self, token: Token, offset: int, line_number: int, column: int):
        self.token = token
        self.offset = offset
        self.line_number = line_number
        self.column = column
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Line {self.line_number}, column {self.column}: unexpected {self.token}"


class StyleTableError(ValueError):
    """Raised when a style table mapping names an unknown category or style."""
