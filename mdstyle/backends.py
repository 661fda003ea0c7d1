"""Interchangeable parser backends sharing one contract.

Every backend takes a text buffer and returns a list of styled lines drawn
with a `StyleTable`, so callers do not depend on which one produced them.

- ``tokens``: the built-in lexer and parser.
- ``markdown-it``: delegates structure to `markdown-it-py` and only maps its
  token stream onto the style table. Each input line is parsed on its own,
  so constructs spanning lines are not recognized.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from markdown_it import MarkdownIt
from markdown_it.token import Token as MdToken
from rich.segment import Segment
from rich.style import Style

from .config import MdStyleConfig
from .constants import BACKEND_NAMES
from .exceptions import ParseError
from .lexer import tokenize
from .logger import get_logger
from .models import Line
from .parser import Parser
from .styles import DEFAULT_STYLE_TABLE, StyleTable

logger = get_logger(__name__)


class Backend(Protocol):
    """Parse a text buffer into styled lines."""

    name: str
    style_table: StyleTable

    def parse(self, content: str | bytes) -> list[Line]: ...


class TokenBackend:
    """Backend running the built-in lexer and parser."""

    name = "tokens"

    def __init__(
        self, style_table: StyleTable | None = None, config: MdStyleConfig | None = None
    ) -> None:
        self._parser = Parser(style_table, config)

    @property
    def style_table(self) -> StyleTable:
        return self._parser.style_table

    def parse(self, content: str | bytes) -> list[Line]:
        return self._parser.parse(tokenize(content))


class MarkdownItBackend:
    """Backend mapping `markdown-it-py` tokens onto the style table.

    Block tokens contribute prefix segments (heading markers, list bullets,
    quote markers); inline children are styled with a stack so that text
    inside ``**strong**`` or ``*em*`` picks up the bold or italic style on top
    of the plain text style. Token types without a mapping yield a diagnostic
    segment naming the type.

    Args:
        style_table: Styles to apply. Defaults to the table built from
            `config`, or `DEFAULT_STYLE_TABLE`.
        config: Options; only ``tab_width`` and ``styles`` are used.
    """

    name = "markdown-it"

    def __init__(
        self, style_table: StyleTable | None = None, config: MdStyleConfig | None = None
    ) -> None:
        config = config or MdStyleConfig()
        if style_table is None:
            style_table = config.style_table() if config.styles else DEFAULT_STYLE_TABLE
        self.style_table = style_table
        self.tab_width = config.tab_width
        self._md = MarkdownIt("commonmark")

        self._block_handlers: dict[str, Callable[[MdToken], list[Segment]]] = {
            "heading_open": self._heading_open,
            "list_item_open": self._list_item_open,
            "blockquote_open": self._blockquote_open,
            "hr": self._hr,
            "fence": self._fence,
            "code_block": self._code_block,
            "html_block": self._html_block,
        }

    def parse(self, content: str | bytes) -> list[Line]:
        if isinstance(content, bytes):
            try:
                content = content.decode("utf-8")
            except UnicodeDecodeError as error:
                raise ParseError(f"Invalid UTF-8 sequence: {error}") from error

        lines = [self.parse_line(line) for line in content.split("\n")]
        logger.debug("markdown-it backend produced %d lines", len(lines))
        return lines

    def parse_line(self, line: str) -> Line:
        """Parse a single line of Markdown into styled segments."""
        segments: Line = []
        for token in self._md.parse(line.expandtabs(self.tab_width)):
            if token.type == "inline":
                segments.extend(self._inline(token.children or []))
                continue
            handler = self._block_handlers.get(token.type)
            if handler is not None:
                segments.extend(handler(token))
            elif token.nesting == 0:
                segments.append(self._unmapped(token))
        return segments

    def _heading_open(self, token: MdToken) -> list[Segment]:
        level = int(token.tag[1:])
        return [Segment(f"{'#' * level} ", self.style_table.heading_style(level))]

    def _list_item_open(self, token: MdToken) -> list[Segment]:
        if token.info:
            marker = f"{token.info}{token.markup} "
        else:
            marker = "• "
        return [Segment(marker, self.style_table.list_marker)]

    def _blockquote_open(self, token: MdToken) -> list[Segment]:
        return [Segment("> ", self.style_table.quote)]

    def _hr(self, token: MdToken) -> list[Segment]:
        return [Segment(token.markup, self.style_table.rule)]

    def _fence(self, token: MdToken) -> list[Segment]:
        text = f"{token.markup}{token.info}"
        body = token.content.rstrip("\n")
        if body:
            text = f"{text} {body}"
        return [Segment(text, self.style_table.code + self.style_table.bold)]

    def _code_block(self, token: MdToken) -> list[Segment]:
        return [Segment(token.content.rstrip("\n"), self.style_table.code)]

    def _html_block(self, token: MdToken) -> list[Segment]:
        return [Segment(token.content.rstrip("\n"), self.style_table.code)]

    def _inline(self, children: list[MdToken]) -> list[Segment]:
        table = self.style_table
        segments: list[Segment] = []
        stack: list[Style] = [table.text]
        hrefs: list[str] = []

        for child in children:
            kind = child.type
            if kind in ("text", "text_special", "html_inline"):
                segments.append(Segment(child.content, stack[-1]))
            elif kind == "strong_open":
                stack.append(stack[-1] + table.bold)
            elif kind == "em_open":
                stack.append(stack[-1] + table.italic)
            elif kind in ("strong_close", "em_close"):
                stack.pop()
            elif kind == "code_inline":
                segments.append(
                    Segment(f"{child.markup}{child.content}{child.markup}", table.code)
                )
            elif kind == "link_open":
                hrefs.append(str(child.attrs.get("href", "")))
                segments.append(Segment("[", table.link_label))
                stack.append(table.link_label)
            elif kind == "link_close":
                stack.pop()
                segments.append(Segment("]", table.link_label))
                segments.append(Segment(f"({hrefs.pop()})", table.link))
            elif kind == "image":
                segments.append(Segment(f"![{child.content}]", table.link_label))
                segments.append(Segment(f"({child.attrs.get('src', '')})", table.link))
            elif kind in ("softbreak", "hardbreak"):
                segments.append(Segment(" "))
            else:
                segments.append(self._unmapped(child))

        return segments

    def _unmapped(self, token: MdToken) -> Segment:
        return Segment(f"<unmapped {token.type}>", self.style_table.diagnostic)


_BACKENDS: dict[str, type[TokenBackend] | type[MarkdownItBackend]] = {
    TokenBackend.name: TokenBackend,
    MarkdownItBackend.name: MarkdownItBackend,
}


def get_backend(
    name: str, style_table: StyleTable | None = None, config: MdStyleConfig | None = None
) -> Backend:
    """Instantiate the backend registered under `name`.

    Raises:
        ValueError: If `name` is not a known backend.

    Examples:
        get_backend("markdown-it").parse("**bold**")
    """
    try:
        backend_class = _BACKENDS[name]
    except KeyError as error:
        raise ValueError(
            f"Unknown backend `{name}`. Expected one of: {', '.join(BACKEND_NAMES)}"
        ) from error
    logger.debug("Using %s backend", name)
    return backend_class(style_table, config)
