"""Token model produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    """Lexical categories recognized by the lexer.

    Attributes:
        HEADING: Run of ``#`` characters; carries the run length as ``depth``.
        WORD: Maximal run of word characters; carries ``text``.
        WHITESPACE: A single space.
        TAB: A single tab.
        EOL: End of a line.
        EOF: End of input. Always the last token of a list; an embedded NUL
            byte also yields one.
        ILLEGAL: Byte outside the recognized set; carries ``byte``.
    """

    HEADING = auto()
    WORD = auto()

    WHITESPACE = auto()
    TAB = auto()

    EOL = auto()
    EOF = auto()

    LEFT_SQUARE = auto()
    RIGHT_SQUARE = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_ANGLE = auto()
    RIGHT_ANGLE = auto()

    DOT = auto()
    DASH = auto()
    EQUALS = auto()
    PLUS = auto()
    ASTERISK = auto()
    UNDERSCORE = auto()
    BACKTICK = auto()
    BACKSLASH = auto()
    SLASH = auto()
    COLON = auto()
    SEMICOLON = auto()

    ILLEGAL = auto()


# Single-byte punctuation tokens
PUNCTUATION: dict[int, TokenKind] = {
    ord("["): TokenKind.LEFT_SQUARE,
    ord("]"): TokenKind.RIGHT_SQUARE,
    ord("("): TokenKind.LEFT_PAREN,
    ord(")"): TokenKind.RIGHT_PAREN,
    ord("<"): TokenKind.LEFT_ANGLE,
    ord(">"): TokenKind.RIGHT_ANGLE,
    ord("."): TokenKind.DOT,
    ord("-"): TokenKind.DASH,
    ord("="): TokenKind.EQUALS,
    ord("+"): TokenKind.PLUS,
    ord("*"): TokenKind.ASTERISK,
    ord("_"): TokenKind.UNDERSCORE,
    ord("`"): TokenKind.BACKTICK,
    ord("\\"): TokenKind.BACKSLASH,
    ord("/"): TokenKind.SLASH,
    ord(":"): TokenKind.COLON,
    ord(";"): TokenKind.SEMICOLON,
}

_LITERALS: dict[TokenKind, str] = {kind: chr(byte) for byte, kind in PUNCTUATION.items()}
_LITERALS.update(
    {
        TokenKind.WHITESPACE: " ",
        TokenKind.TAB: "\t",
        TokenKind.EOL: "\n",
        TokenKind.EOF: "",
    }
)


@dataclass(frozen=True)
class Token:
    """A single lexical unit.

    Only the payload field matching ``kind`` is meaningful: ``depth`` for
    headings, ``text`` for word runs and ``byte`` for illegal bytes.

    Examples:
        Token.heading(2)
        Token.word("title")
        Token(TokenKind.DASH)
    """

    kind: TokenKind
    depth: int = 0
    text: str = ""
    byte: int = 0

    @classmethod
    def heading(cls, depth: int) -> Token:
        if depth < 1:
            raise ValueError(f"heading depth must be positive, got {depth}")
        return cls(TokenKind.HEADING, depth=depth)

    @classmethod
    def word(cls, text: str) -> Token:
        return cls(TokenKind.WORD, text=text)

    @classmethod
    def illegal(cls, byte: int) -> Token:
        return cls(TokenKind.ILLEGAL, byte=byte)

    def is_end(self) -> bool:
        """Return True for tokens that close a line."""
        return self.kind is TokenKind.EOL or self.kind is TokenKind.EOF

    def literal(self) -> str:
        """Return the source text this token was scanned from."""
        if self.kind is TokenKind.HEADING:
            return "#" * self.depth
        if self.kind is TokenKind.WORD:
            return self.text
        if self.kind is TokenKind.ILLEGAL:
            return chr(self.byte)
        return _LITERALS[self.kind]

    def __str__(self) -> str:
        name = self.kind.name.lower()
        if self.kind is TokenKind.HEADING:
            return f"{name}({self.depth})"
        if self.kind is TokenKind.WORD:
            return f"{name}({self.text!r})"
        if self.kind is TokenKind.ILLEGAL:
            return f"{name}(0x{self.byte:02x})"
        return name
