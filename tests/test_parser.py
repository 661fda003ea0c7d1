from __future__ import annotations

import pytest
from rich.segment import Segment
from rich.style import Style

from mdstyle.config import MdStyleConfig
from mdstyle.exceptions import LexError, ParseError
from mdstyle.lexer import tokenize
from mdstyle.parser import Parser, parse_markdown
from mdstyle.styles import StyleTable
from mdstyle.tokens import Token, TokenKind

SPACE = Segment(" ")


def _texts(lines):
    return ["".join(segment.text for segment in line) for line in lines]


def test_heading_then_body(table):
    lines = parse_markdown("# Title\nbody")

    assert lines == [
        [Segment("# ", table.h1), Segment("Title", table.text)],
        [Segment("body", table.text)],
    ]


def test_list_item(table):
    (line,) = parse_markdown("- item")

    assert line == [Segment("-", table.list_marker), SPACE, Segment("item", table.text)]


@pytest.mark.parametrize("depth", range(1, 7))
def test_heading_levels(table, depth: int):
    (line,) = parse_markdown(f"{'#' * depth} x")

    assert line[0] == Segment("#" * depth + " ", getattr(table, f"h{depth}"))


def test_deep_heading_uses_generic_style(table):
    (line,) = parse_markdown("####### x")

    assert line[0] == Segment("####### ", table.heading)


def test_heading_without_separator(table):
    (line,) = parse_markdown("#tag")

    assert line == [Segment("#", table.h1), Segment("tag", table.text)]


def test_heading_consumes_only_one_space(table):
    (line,) = parse_markdown("#  x")

    assert line == [Segment("# ", table.h1), SPACE, Segment("x", table.text)]


def test_line_count_matches_newlines():
    assert parse_markdown("") == [[]]
    assert len(parse_markdown("a\n\nb\n")) == 4
    assert parse_markdown("\n") == [[], []]


@pytest.mark.parametrize("marker", ["-", "=", "_", "*"])
def test_full_line_run_is_a_rule(table, marker: str):
    lines = parse_markdown(f"{marker * 3}\ntext")

    assert lines == [[Segment(marker * 3, table.rule)], [Segment("text", table.text)]]


def test_long_rule_is_one_segment(table):
    assert parse_markdown("=" * 20) == [[Segment("=" * 20, table.rule)]]


def test_short_run_is_emitted_per_marker(table):
    (line,) = parse_markdown("--")

    assert line == [Segment("-", table.list_marker), Segment("-", table.list_marker)]


def test_run_after_text_is_not_a_rule(table):
    (line,) = parse_markdown("a ---")

    assert line == [Segment("a", table.text), SPACE] + [Segment("-", table.list_marker)] * 3


def test_run_followed_by_text_is_not_a_rule(table):
    (line,) = parse_markdown("=== x")

    assert line[:3] == [Segment("=", table.text)] * 3
    assert line[3:] == [SPACE, Segment("x", table.text)]


def test_doubled_emphasis_markers_are_bold(table):
    (line,) = parse_markdown("**bold**")

    assert line == [
        Segment("*", table.bold),
        Segment("*", table.bold),
        Segment("bold", table.text),
        Segment("*", table.bold),
        Segment("*", table.bold),
    ]


def test_single_emphasis_markers_are_italic(table):
    (line,) = parse_markdown("_a_")

    assert line == [Segment("_", table.italic), Segment("a", table.text), Segment("_", table.italic)]


def test_rule_length_is_configurable(table):
    config = MdStyleConfig(rule_min_length=4)

    assert parse_markdown("---", config=config) == [[Segment("-", table.list_marker)] * 3]
    assert parse_markdown("----", config=config) == [[Segment("----", table.rule)]]


def test_link_and_code_punctuation(table):
    (line,) = parse_markdown("[a](b) `c`")

    assert line == [
        Segment("[", table.link_label),
        Segment("a", table.text),
        Segment("]", table.link_label),
        Segment("(", table.link),
        Segment("b", table.text),
        Segment(")", table.link),
        SPACE,
        Segment("`", table.code),
        Segment("c", table.text),
        Segment("`", table.code),
    ]


def test_quote_marker(table):
    (line,) = parse_markdown("> q")

    assert line == [Segment(">", table.quote), SPACE, Segment("q", table.text)]


def test_plain_punctuation(table):
    (line,) = parse_markdown(":;/.\\")

    assert line == [Segment(character, table.text) for character in ":;/.\\"]


def test_plus_is_a_list_marker(table):
    assert parse_markdown("+")[0] == [Segment("+", table.list_marker)]


def test_tab_expands_to_tab_width():
    assert parse_markdown("\t") == [[Segment("    ")]]
    assert parse_markdown("\t", config=MdStyleConfig(tab_width=2)) == [[Segment("  ")]]


def test_every_byte_is_accounted_for():
    text = "# Title\n- [link](url) **b** _i_\n---\n> q: a/b; c.\n"

    assert "\n".join(_texts(parse_markdown(text))) == text


def test_nul_byte_keeps_the_rest_of_the_document(table):
    lines = parse_markdown("a\x00\nb")

    assert lines == [
        [Segment("a", table.text), Segment("\x00", table.diagnostic)],
        [Segment("b", table.text)],
    ]


@pytest.mark.parametrize("text", ["\x00", "a\x00", "\x00\n\x00", "# x\x00y\n\n"])
def test_nul_bytes_do_not_change_the_line_count(text: str):
    lines = parse_markdown(text)

    assert len(lines) == text.count("\n") + 1
    assert "\n".join(_texts(lines)) == text


def test_run_before_nul_byte_is_not_a_rule(table):
    (line,) = parse_markdown("---\x00")

    assert line == [Segment("-", table.list_marker)] * 3 + [Segment("\x00", table.diagnostic)]


def test_custom_style_table():
    red = Style(color="red")
    (line,) = parse_markdown("# x", style_table=StyleTable(h1=red))

    assert line[0] == Segment("# ", red)


def test_style_overrides_from_config():
    config = MdStyleConfig(styles={"text": "bold green"})
    (line,) = parse_markdown("x", config=config)

    assert line == [Segment("x", Style.parse("bold green"))]


def test_lex_errors_propagate():
    with pytest.raises(LexError):
        parse_markdown("# Title\nHello!")


def test_parsing_is_idempotent():
    text = "## a\n*b* -- c\n___"

    assert parse_markdown(text) == parse_markdown(text)


def test_parser_instance_can_be_reused():
    parser = Parser()

    assert parser.parse(tokenize("a")) == parser.parse(tokenize("a"))


def test_every_token_kind_has_a_mapping():
    assert Parser().handled_kinds() == frozenset(TokenKind)


def test_illegal_tokens_render_as_diagnostics(table):
    lines = Parser().parse([Token.illegal(1), Token(TokenKind.EOF)])

    assert lines == [[Segment("\x01", table.diagnostic)]]


def test_unmapped_token_falls_back_to_diagnostic(table):
    parser = Parser()
    del parser._handlers[TokenKind.WORD]

    (line,) = parser.parse(tokenize("x"))

    assert line == [Segment("<unmapped word('x')>", table.diagnostic)]


@pytest.mark.parametrize(
    "tokens",
    [
        [],
        [Token.word("a")],
        [Token(TokenKind.EOF), Token(TokenKind.EOL)],
    ],
)
def test_malformed_token_lists_raise(tokens):
    with pytest.raises(ParseError):
        Parser().parse(tokens)
