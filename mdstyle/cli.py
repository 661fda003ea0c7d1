"""
Renders a Markdown file as styled lines in the terminal.
Lines the lexer cannot handle are shown as plain text unless --strict is given.
"""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from .backends import get_backend
from .config import ConfigError, build_config
from .constants import BACKEND_NAMES
from .exceptions import LexError, ParseError
from .documents import read_document, read_stream, resolve_document, size_limit
from .lexer import tokenize
from .logger import configure_logging
from .render import parse_lenient, to_text

__all__ = ["cli"]


def parse_style_overrides(values: tuple[str, ...]) -> dict[str, str]:
    """Turn ``CATEGORY=STYLE`` option values into a mapping.

    Raises:
        click.BadParameter: If a value has no ``=`` or an empty category.

    Examples:
        parse_style_overrides(("h1=bold red",))  # {"h1": "bold red"}
    """
    styles: dict[str, str] = {}
    for value in values:
        category, separator, style = value.partition("=")
        if not separator or not category.strip():
            raise click.BadParameter(
                f"Expected CATEGORY=STYLE, got {value!r}", param_hint="'--style'"
            )
        styles[category.strip()] = style.strip()
    return styles


@click.command()
@click.version_option(package_name="mdstyle")
@click.option("--backend", type=click.Choice(BACKEND_NAMES), help="Parser backend")
@click.option(
    "--style",
    "styles",
    multiple=True,
    metavar="CATEGORY=STYLE",
    help="Override a style table category, e.g. --style 'h1=bold red'",
)
@click.option("--rule-min-length", type=int, help="Markers needed for a horizontal rule")
@click.option("--tab-width", type=int, help="Spaces per tab")
@click.option("--tokens", "dump_tokens", is_flag=True, help="Print the token list and exit")
@click.option("--strict", is_flag=True, help="Fail instead of falling back to plain text")
@click.option("--color/--no-color", default=None, help="Force or disable colored output")
@click.option("-v", "--verbose", is_flag=True, help="Log debug information to stderr")
@click.argument("filepath", type=click.Path(dir_okay=False, allow_dash=True))
def cli(
    filepath: str,
    backend: str | None = None,
    styles: tuple[str, ...] = (),
    rule_min_length: int | None = None,
    tab_width: int | None = None,
    dump_tokens: bool = False,
    strict: bool = False,
    color: bool | None = None,
    verbose: bool = False,
):
    """
    Render FILEPATH (or `-` for stdin) with terminal styles.

    Args:
        filepath: Path to the Markdown file, or ``-`` to read stdin.
        backend: Override for the parser backend.
        styles: Style overrides as ``CATEGORY=STYLE`` strings.
        rule_min_length: Override for the horizontal rule length.
        tab_width: Override for the tab width.
        dump_tokens: Print tokens instead of rendering.
        strict: Report lexing errors instead of rendering plain fallbacks.
        color: Force (True) or disable (False) colors; autodetect when None.
        verbose: Enable debug logging.

    Raises:
        click.BadParameter: If the path or configuration overrides are invalid.
        click.ClickException: If the input cannot be read or is over the size
            limit, or, with `strict`, parsing fails.

    Examples:
        mdstyle README.md --style "h1=bold red" --backend markdown-it
    """
    configure_logging(verbose)
    style_overrides = parse_style_overrides(styles)

    if filepath == "-":
        document_path = None
        search_path = Path.cwd()
    else:
        try:
            document_path = resolve_document(filepath)
        except ValueError as error:
            raise click.BadParameter(str(error)) from error
        search_path = document_path.parent

    try:
        config = build_config(
            search_path,
            backend=backend,
            rule_min_length=rule_min_length,
            tab_width=tab_width,
            styles=style_overrides,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        limit = size_limit(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    try:
        if document_path is None:
            content = read_stream(click.get_binary_stream("stdin"), limit)
        else:
            content = read_document(document_path, limit)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    if dump_tokens:
        try:
            tokens = tokenize(content)
        except LexError as error:
            raise click.ClickException(str(error)) from error
        for token in tokens:
            click.echo(str(token))
        return

    renderer = get_backend(config.backend, config.style_table(), config)
    try:
        lines = renderer.parse(content) if strict else parse_lenient(content, renderer)
    except ParseError as error:
        raise click.ClickException(str(error)) from error

    console = Console(
        force_terminal=color, color_system=None if color is False else "auto", highlight=False
    )
    # An empty last line means the input ended with a newline.
    console.print(to_text(lines), soft_wrap=True, end="" if lines and not lines[-1] else "\n")


if __name__ == "__main__":
    cli()
