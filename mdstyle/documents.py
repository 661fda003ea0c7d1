"""Loading documents for rendering, from a path or from standard input.

Files and stdin go through the same reader, so both are held to the byte
limit configured by ``max_file_size`` or ``MDSTYLE_MAX_FILE_SIZE``.
"""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import BinaryIO

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS, MAX_FILE_SIZE_ENV_VAR

STDIN_NAME = "<stdin>"


def size_limit(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return the largest document, in bytes, that may be rendered.

    The environment variable wins over `default` when it is set and not blank.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["MDSTYLE_MAX_FILE_SIZE"] = "4096"
        size_limit()  # 4096
    """
    raw = os.environ.get(MAX_FILE_SIZE_ENV_VAR, "").strip()
    if not raw:
        return default
    if not raw.isdigit() or int(raw) == 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw!r}")
    return int(raw)


def resolve_document(raw_path: str) -> Path:
    """Turn a command-line path into the absolute path of a Markdown document.

    Raises:
        ValueError: If the extension is not a Markdown one, or nothing
            resolvable or regular exists at the path.
    """
    path = Path(raw_path).expanduser()
    if path.suffix.lower() not in MARKDOWN_EXTENSIONS:
        raise ValueError(
            f"{path} is not a Markdown file (expected one of {', '.join(MARKDOWN_EXTENSIONS)})"
        )

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist") from error
    except OSError as error:
        raise ValueError(f"Cannot resolve {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file")
    return resolved


def read_stream(stream: BinaryIO, limit: int, name: str = STDIN_NAME) -> str:
    """Read a whole UTF-8 document of at most `limit` bytes from `stream`.

    Only ``limit + 1`` bytes are ever pulled, so an oversized pipe is not
    drained. ``\\r\\n`` and ``\\r`` line endings come back as ``\\n``.

    Raises:
        IOError: If the stream is larger than `limit` or is not valid UTF-8.
    """
    data = stream.read(limit + 1)
    if len(data) > limit:
        raise IOError(f"{name} exceeds the maximum allowed size of {limit} bytes.")

    try:
        with io.TextIOWrapper(io.BytesIO(data), encoding="utf-8") as text:
            return text.read()
    except UnicodeDecodeError as error:
        raise IOError(f"Invalid UTF-8 sequence in {name}: {error}") from error


def read_document(path: Path, limit: int) -> str:
    """Open `path` and read it with `read_stream`.

    Raises:
        IOError: If the file cannot be opened, or `read_stream` rejects it.
    """
    try:
        stream = path.open("rb")
    except OSError as error:
        raise IOError(f"Cannot open {path}: {error.strerror or error}") from error

    with stream:
        return read_stream(stream, limit, str(path))
