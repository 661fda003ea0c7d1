"""Data models for mdstyle."""

from __future__ import annotations

from dataclasses import dataclass

from rich.segment import Segment

# One rendered input line: styled segments in display order.
Line = list[Segment]


@dataclass
class ParserContext:
    """Per-line state carried alongside the token cursor.

    Attributes:
        at_line_start: True until the first token of the current line has
            been consumed.
        line_number: Zero-based index of the line being built.
    """

    at_line_start: bool = True
    line_number: int = 0

    def next_line(self) -> None:
        self.at_line_start = True
        self.line_number += 1
