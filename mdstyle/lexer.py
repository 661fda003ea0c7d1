"""Single-pass byte lexer."""

from __future__ import annotations

from .constants import HEADING_MARKER, NEWLINE, NUL, SPACE, TAB, WORD_CHARS
from .exceptions import LexError
from .logger import get_logger
from .tokens import PUNCTUATION, Token, TokenKind

logger = get_logger(__name__)

_SIMPLE_TOKENS: dict[int, TokenKind] = {
    SPACE: TokenKind.WHITESPACE,
    TAB: TokenKind.TAB,
    NEWLINE: TokenKind.EOL,
    NUL: TokenKind.EOF,
    **PUNCTUATION,
}


class Lexer:
    """Byte-cursor state machine that turns text into a list of tokens.

    The cursor is made of two indices: ``position`` points at the current
    byte ``ch`` and ``read_position`` at the next one. Both only move
    forward. Reading past the end of the buffer yields the NUL sentinel.
    A NUL byte inside the buffer is scanned as an end-of-input token and
    scanning carries on, so the bytes after it are still tokenized.

    A `Lexer` holds per-call state; create one per thread or use
    `tokenize`, which builds a fresh instance for every call.

    Examples:
        Lexer().tokenize("# Title")
    """

    def __init__(self) -> None:
        self.position = 0
        self.read_position = 0
        self.ch = NUL
        self._input = b""

    def tokenize(self, data: str | bytes) -> list[Token]:
        """Scan `data` and return its tokens, ending with an EOF token.

        Args:
            data: Text to scan. Strings are encoded as UTF-8 first.

        Returns:
            list[Token]: Tokens in source order.

        Raises:
            LexError: If a byte outside the recognized set is found.
        """
        raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)

        # The leading newline puts position zero on a line boundary.
        self._input = b"\n" + raw
        self.position = 0
        self.read_position = 0
        self.ch = NUL
        self._read_char()
        self._read_char()

        tokens: list[Token] = []
        while self.position < len(self._input):
            tokens.append(self._next_token())
        tokens.append(Token(TokenKind.EOF))

        logger.debug("Lexed %d tokens from %d bytes", len(tokens), len(raw))
        return tokens

    def _next_token(self) -> Token:
        if self.ch == HEADING_MARKER:
            return self._read_heading()
        if self.ch in WORD_CHARS:
            return self._read_word()

        kind = _SIMPLE_TOKENS.get(self.ch)
        if kind is None:
            raise self._illegal(Token.illegal(self.ch))

        self._read_char()
        return Token(kind)

    def _read_char(self) -> None:
        if self.read_position >= len(self._input):
            self.ch = NUL
        else:
            self.ch = self._input[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def _read_heading(self) -> Token:
        start = self.position
        while self.ch == HEADING_MARKER:
            self._read_char()
        return Token.heading(self.position - start)

    def _read_word(self) -> Token:
        start = self.position
        while self.ch in WORD_CHARS:
            self._read_char()
        return Token.word(self._input[start : self.position].decode("ascii"))

    def _illegal(self, token: Token) -> LexError:
        # Offsets exclude the synthetic leading newline.
        line_number = self._input.count(b"\n", 1, self.position) + 1
        column = self.position - self._input.rfind(b"\n", 0, self.position)
        return LexError(token, self.position - 1, line_number, column)


def tokenize(data: str | bytes) -> list[Token]:
    """Tokenize `data` with a fresh `Lexer`.

    Examples:
        tokenize("####x")  # [heading(4), word('x'), eof]
    """
    return Lexer().tokenize(data)
