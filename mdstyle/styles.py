"""Style table mapping semantic categories to terminal attributes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace

from rich.errors import StyleSyntaxError
from rich.style import Style

from .exceptions import StyleTableError


@dataclass(frozen=True)
class StyleTable:
    """Visual attributes for every category the parsers emit.

    Attributes:
        heading: Fallback for heading markers deeper than six.
        h1: Level-one heading marker. ``h2`` to ``h6`` follow the same pattern.
        list_marker: ``-`` and ``+`` markers.
        text: Word runs and plain punctuation.
        bold: Doubled emphasis markers and strong text.
        italic: Single emphasis markers and emphasized text.
        code: Backticks and inline code.
        quote: Angle brackets and block quote markers.
        rule: Horizontal rules.
        link: Parentheses around link destinations.
        link_label: Square brackets around link labels.
        diagnostic: Segments produced for tokens the parser cannot map.

    Examples:
        StyleTable(h1=Style(color="red", bold=True))
        StyleTable.from_mapping({"h1": "bold red"})
    """

    heading: Style = Style(color="cyan")
    h1: Style = Style(color="magenta")
    h2: Style = Style(color="magenta")
    h3: Style = Style(color="bright_yellow")
    h4: Style = Style(color="bright_yellow")
    h5: Style = Style(color="bright_green")
    h6: Style = Style(color="bright_cyan")

    list_marker: Style = Style(color="bright_red")
    text: Style = Style(color="bright_white")

    bold: Style = Style(bold=True)
    italic: Style = Style(italic=True)
    code: Style = Style(color="white", bgcolor="black")
    quote: Style = Style(color="white", bgcolor="black")
    rule: Style = Style(color="white", bgcolor="red")

    link: Style = Style(color="blue")
    link_label: Style = Style(color="red")

    diagnostic: Style = Style(color="red", bold=True)

    def heading_style(self, depth: int) -> Style:
        """Return the style for a heading marker of `depth` characters."""
        if 1 <= depth <= 6:
            return getattr(self, f"h{depth}")
        return self.heading

    @classmethod
    def categories(cls) -> tuple[str, ...]:
        return tuple(field.name for field in fields(cls))

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, str | Style], base: StyleTable | None = None
    ) -> StyleTable:
        """Build a table by overriding `base` with styles from `mapping`.

        Args:
            mapping: Category names mapped to `rich` style strings (such as
                ``"bold magenta on black"``) or `Style` instances.
            base: Table providing the categories missing from `mapping`.
                Defaults to `DEFAULT_STYLE_TABLE`.

        Returns:
            StyleTable: New table with the overrides applied.

        Raises:
            StyleTableError: If a category is unknown or a style string
                cannot be parsed.

        Examples:
            StyleTable.from_mapping({"rule": "dim", "link": "underline blue"})
        """
        base = base or DEFAULT_STYLE_TABLE
        known = cls.categories()
        changes: dict[str, Style] = {}

        for category, value in mapping.items():
            if category not in known:
                raise StyleTableError(
                    f"Unknown style category `{category}`. Expected one of: {', '.join(known)}"
                )
            if isinstance(value, Style):
                changes[category] = value
                continue
            if not isinstance(value, str):
                raise StyleTableError(f"Style for `{category}` must be a string")
            try:
                changes[category] = Style.parse(value)
            except StyleSyntaxError as error:
                raise StyleTableError(f"Invalid style for `{category}`: {error}") from error

        return replace(base, **changes) if changes else base


DEFAULT_STYLE_TABLE = StyleTable()
