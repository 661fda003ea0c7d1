"""Helpers that turn styled lines into terminal output."""

from __future__ import annotations

from rich.segment import Segment
from rich.text import Text

from .backends import Backend
from .exceptions import LexError
from .logger import get_logger
from .models import Line
from .styles import DEFAULT_STYLE_TABLE, StyleTable

logger = get_logger(__name__)


def to_text(lines: list[Line]) -> Text:
    """Join styled lines into a single `rich` `Text`, one row per line.

    Examples:
        Console().print(to_text(parse_markdown("# Title")))
    """
    text = Text(end="")
    for index, line in enumerate(lines):
        if index:
            text.append("\n")
        for segment in line:
            text.append(segment.text, style=segment.style)
    return text


def plain_lines(content: str, style_table: StyleTable | None = None) -> list[Line]:
    """Split raw content into unstyled lines drawn with the text style."""
    style = (style_table or DEFAULT_STYLE_TABLE).text
    return [[Segment(line, style)] if line else [] for line in content.split("\n")]


def parse_lenient(content: str, backend: Backend) -> list[Line]:
    """Parse `content`, degrading to plain text where lexing fails.

    The whole document is parsed first. When it contains a byte the lexer
    rejects, each line is parsed on its own and lines that still fail are
    kept as plain text, so one bad line does not strip styles from the rest.

    Args:
        content: The markdown content to parse.
        backend: Backend used for both passes.

    Returns:
        list[Line]: One line per input line.

    Examples:
        parse_lenient("# Title\\nHello!", get_backend("tokens"))
    """
    try:
        return backend.parse(content)
    except LexError as error:
        logger.warning("Falling back to line-by-line parsing: %s", error)

    lines: list[Line] = []
    for line_number, raw_line in enumerate(content.split("\n"), start=1):
        try:
            lines.extend(backend.parse(raw_line))
        except LexError as error:
            logger.warning("Line %d rendered without styles: %s", line_number, error)
            lines.extend(plain_lines(raw_line, backend.style_table))
    return lines
