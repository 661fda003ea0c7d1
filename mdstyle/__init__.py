"""
mdstyle: render Markdown as styled lines for terminal display.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    mdstyle README.md

Library Usage:
    from rich.console import Console
    from mdstyle import parse_markdown, to_text

    lines = parse_markdown("# Title\\nbody")
    Console().print(to_text(lines))
"""

from .backends import MarkdownItBackend, TokenBackend, get_backend
from .config import ConfigError, MdStyleConfig
from .exceptions import LexError, ParseError, StyleTableError
from .lexer import Lexer, tokenize
from .models import Line, ParserContext
from .parser import Parser, parse_markdown
from .render import parse_lenient, plain_lines, to_text
from .styles import DEFAULT_STYLE_TABLE, StyleTable
from .tokens import Token, TokenKind

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "parse_markdown",
    "tokenize",
    "Lexer",
    "Parser",
    # Backends
    "get_backend",
    "TokenBackend",
    "MarkdownItBackend",
    # Rendering
    "to_text",
    "plain_lines",
    "parse_lenient",
    # Data models
    "Token",
    "TokenKind",
    "Line",
    "ParserContext",
    "StyleTable",
    "DEFAULT_STYLE_TABLE",
    "MdStyleConfig",
    # Exceptions
    "ConfigError",
    "LexError",
    "ParseError",
    "StyleTableError",
    # Version
    "__version__",
]
