"""Line-oriented parser turning tokens into styled lines."""

from __future__ import annotations

from collections.abc import Callable

from rich.segment import Segment
from rich.style import Style

from .config import MdStyleConfig
from .exceptions import ParseError
from .lexer import tokenize
from .logger import get_logger
from .models import Line, ParserContext
from .styles import DEFAULT_STYLE_TABLE, StyleTable
from .tokens import Token, TokenKind

logger = get_logger(__name__)

# Markers that may repeat to form a horizontal rule or a stronger delimiter.
RUN_MARKERS = frozenset(
    {TokenKind.DASH, TokenKind.EQUALS, TokenKind.UNDERSCORE, TokenKind.ASTERISK}
)

# Single-character tokens and the style table category they are drawn with.
PUNCTUATION_CATEGORIES: dict[TokenKind, str] = {
    TokenKind.LEFT_SQUARE: "link_label",
    TokenKind.RIGHT_SQUARE: "link_label",
    TokenKind.LEFT_PAREN: "link",
    TokenKind.RIGHT_PAREN: "link",
    TokenKind.LEFT_ANGLE: "quote",
    TokenKind.RIGHT_ANGLE: "quote",
    TokenKind.BACKTICK: "code",
    TokenKind.PLUS: "list_marker",
    TokenKind.DOT: "text",
    TokenKind.BACKSLASH: "text",
    TokenKind.SLASH: "text",
    TokenKind.COLON: "text",
    TokenKind.SEMICOLON: "text",
}

LINE_END_KINDS = frozenset({TokenKind.EOL, TokenKind.EOF})

Handler = Callable[[Token, ParserContext], list[Segment]]


class Parser:
    """Group tokens into lines and map each token to a styled segment.

    The parser walks the token list once with a cursor that supports
    `advance` and `peek`. Each line is parsed independently; the only state
    carried while a line is built is a `ParserContext`.

    Runs of ``-``, ``=``, ``_`` or ``*`` are gathered with one token of
    lookahead. A run of at least ``rule_min_length`` markers that starts a
    line and ends it is a horizontal rule; any other run yields one segment
    per marker. For ``*`` and ``_`` a run of two or more is drawn with the
    bold style, a lone marker with the italic style.

    Args:
        style_table: Styles to apply. Defaults to the table built from
            `config`, or `DEFAULT_STYLE_TABLE`.
        config: Parsing options (rule length, tab width).

    Examples:
        Parser().parse(tokenize("# Title"))
    """

    def __init__(
        self, style_table: StyleTable | None = None, config: MdStyleConfig | None = None
    ) -> None:
        config = config or MdStyleConfig()
        if style_table is None:
            style_table = config.style_table() if config.styles else DEFAULT_STYLE_TABLE
        self.style_table = style_table
        self.rule_min_length = config.rule_min_length
        self.tab_width = config.tab_width

        self.position = 0
        self._tokens: list[Token] = []
        self._handlers: dict[TokenKind, Handler] = {
            TokenKind.HEADING: self._heading,
            TokenKind.WORD: self._word,
            TokenKind.WHITESPACE: self._whitespace,
            TokenKind.TAB: self._tab,
            TokenKind.EOF: self._embedded_end,
            TokenKind.ILLEGAL: self._illegal,
            **{kind: self._marker_run for kind in RUN_MARKERS},
            **{kind: self._punctuation for kind in PUNCTUATION_CATEGORIES},
        }

    def handled_kinds(self) -> frozenset[TokenKind]:
        """Token kinds with a dedicated mapping, including line ends."""
        return frozenset(self._handlers) | LINE_END_KINDS

    def parse(self, tokens: list[Token]) -> list[Line]:
        """Parse `tokens` into lines of styled segments.

        Args:
            tokens: Token list ending with an EOF token.

        Returns:
            list[Line]: One line per EOL token plus the trailing line.

        Raises:
            ParseError: If `tokens` is empty or does not end with EOF.
        """
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            raise ParseError("Token list must end with an end-of-input token")

        self._tokens = tokens
        self.position = 0
        ctx = ParserContext()
        lines: list[Line] = []
        line: Line = []

        while (token := self.advance()) is not None:
            if token.kind is TokenKind.EOL or self.peek() is None:
                lines.append(line)
                line = []
                ctx.next_line()
                continue

            line.extend(self._map(token, ctx))
            ctx.at_line_start = False

        logger.debug("Parsed %d tokens into %d lines", len(tokens), len(lines))
        return lines

    def advance(self) -> Token | None:
        """Consume and return the next token, or None when exhausted."""
        if self.position >= len(self._tokens):
            return None
        token = self._tokens[self.position]
        self.position += 1
        return token

    def peek(self) -> Token | None:
        """Return the next token without consuming it."""
        if self.position >= len(self._tokens):
            return None
        return self._tokens[self.position]

    def _map(self, token: Token, ctx: ParserContext) -> list[Segment]:
        handler = self._handlers.get(token.kind)
        if handler is None:
            return [Segment(f"<unmapped {token}>", self.style_table.diagnostic)]
        return handler(token, ctx)

    def _heading(self, token: Token, ctx: ParserContext) -> list[Segment]:
        text = token.literal()
        following = self.peek()
        if following is not None and following.kind is TokenKind.WHITESPACE:
            self.advance()
            text += " "
        return [Segment(text, self.style_table.heading_style(token.depth))]

    def _word(self, token: Token, ctx: ParserContext) -> list[Segment]:
        return [Segment(token.text, self.style_table.text)]

    def _whitespace(self, token: Token, ctx: ParserContext) -> list[Segment]:
        return [Segment(" ")]

    def _tab(self, token: Token, ctx: ParserContext) -> list[Segment]:
        return [Segment(" " * self.tab_width)]

    def _illegal(self, token: Token, ctx: ParserContext) -> list[Segment]:
        return [Segment(token.literal(), self.style_table.diagnostic)]

    def _embedded_end(self, token: Token, ctx: ParserContext) -> list[Segment]:
        # A NUL byte inside the buffer; the line it sits on stays open.
        return [Segment("\x00", self.style_table.diagnostic)]

    def _punctuation(self, token: Token, ctx: ParserContext) -> list[Segment]:
        style = getattr(self.style_table, PUNCTUATION_CATEGORIES[token.kind])
        return [Segment(token.literal(), style)]

    def _marker_run(self, token: Token, ctx: ParserContext) -> list[Segment]:
        count = 1
        while (following := self.peek()) is not None and following.kind is token.kind:
            self.advance()
            count += 1

        literal = token.literal()
        if count >= self.rule_min_length and ctx.at_line_start and self._line_ends_next():
            return [Segment(literal * count, self.style_table.rule)]

        style = self._marker_style(token.kind, count)
        return [Segment(literal, style) for _ in range(count)]

    def _line_ends_next(self) -> bool:
        following = self.peek()
        if following is None or following.kind is TokenKind.EOL:
            return True
        return following.kind is TokenKind.EOF and self.position == len(self._tokens) - 1

    def _marker_style(self, kind: TokenKind, count: int) -> Style:
        if kind is TokenKind.DASH:
            return self.style_table.list_marker
        if kind is TokenKind.EQUALS:
            return self.style_table.text
        return self.style_table.bold if count >= 2 else self.style_table.italic


def parse_markdown(
    content: str | bytes,
    style_table: StyleTable | None = None,
    config: MdStyleConfig | None = None,
) -> list[Line]:
    """Lex and parse Markdown content into styled lines.

    Args:
        content: The markdown content to parse.
        style_table: Styles to apply; see `Parser`.
        config: Parsing options; defaults to a new `MdStyleConfig`.

    Returns:
        list[Line]: Styled lines, one per input line.

    Raises:
        LexError: If the content contains a byte outside the recognized set.

    Examples:
        parse_markdown("# Title\\nbody")
    """
    return Parser(style_table, config).parse(tokenize(content))
