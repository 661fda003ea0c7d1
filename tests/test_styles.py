from dataclasses import FrozenInstanceError

import pytest
from rich.style import Style

from mdstyle.exceptions import StyleTableError
from mdstyle.styles import DEFAULT_STYLE_TABLE, StyleTable


@pytest.mark.parametrize("depth", range(1, 7))
def test_heading_style_per_level(depth: int):
    table = StyleTable()

    assert table.heading_style(depth) == getattr(table, f"h{depth}")


@pytest.mark.parametrize("depth", [0, 7, 100])
def test_heading_style_falls_back_to_generic(depth: int):
    assert DEFAULT_STYLE_TABLE.heading_style(depth) == DEFAULT_STYLE_TABLE.heading


def test_categories_cover_every_field():
    assert StyleTable.categories()[:7] == ("heading", "h1", "h2", "h3", "h4", "h5", "h6")
    assert {"list_marker", "code", "quote", "rule", "link", "link_label"} <= set(
        StyleTable.categories()
    )


def test_from_mapping_overrides_categories():
    table = StyleTable.from_mapping({"h1": "bold red", "rule": Style(dim=True)})

    assert table.h1 == Style.parse("bold red")
    assert table.rule == Style(dim=True)
    assert table.h2 == DEFAULT_STYLE_TABLE.h2


def test_from_mapping_uses_base_table():
    base = StyleTable(text=Style(color="green"))

    table = StyleTable.from_mapping({"h1": "blue"}, base=base)

    assert table.text == Style(color="green")


def test_from_mapping_without_changes_returns_base():
    assert StyleTable.from_mapping({}) is DEFAULT_STYLE_TABLE


def test_from_mapping_rejects_unknown_category():
    with pytest.raises(StyleTableError, match="Unknown style category `h7`"):
        StyleTable.from_mapping({"h7": "bold"})


def test_from_mapping_rejects_invalid_style():
    with pytest.raises(StyleTableError, match="Invalid style for `h1`"):
        StyleTable.from_mapping({"h1": "notacolor"})


def test_from_mapping_rejects_non_string_values():
    with pytest.raises(StyleTableError):
        StyleTable.from_mapping({"h1": 3})


def test_style_table_is_frozen():
    with pytest.raises(FrozenInstanceError):
        DEFAULT_STYLE_TABLE.h1 = Style(color="red")
