"""Constants used across the mdstyle package."""

from __future__ import annotations

import string

# Bytes that form a word run; anything outside this set is punctuation or illegal.
WORD_CHARS = frozenset((string.ascii_letters + string.digits + ",\"'").encode("ascii"))

HEADING_MARKER = ord("#")
SPACE = ord(" ")
TAB = ord("\t")
NEWLINE = ord("\n")
NUL = 0

# Defaults shared by the config layer and the parser
BACKEND_NAMES = ("tokens", "markdown-it")
DEFAULT_BACKEND = BACKEND_NAMES[0]
DEFAULT_RULE_MIN_LENGTH = 3
DEFAULT_TAB_WIDTH = 4
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

MAX_FILE_SIZE_ENV_VAR = "MDSTYLE_MAX_FILE_SIZE"

MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".txt")
