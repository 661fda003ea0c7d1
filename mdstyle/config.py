"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import tomllib

from .constants import (
    BACKEND_NAMES,
    DEFAULT_BACKEND,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_RULE_MIN_LENGTH,
    DEFAULT_TAB_WIDTH,
)
from .exceptions import StyleTableError
from .styles import StyleTable


@dataclass
class MdStyleConfig:
    """Configuration for parsing and rendering Markdown documents.

    Attributes:
        backend: Parser backend name (``"tokens"`` or ``"markdown-it"``).
        rule_min_length: Number of identical markers alone on a line that
            form a horizontal rule.
        tab_width: Number of spaces a tab expands to.
        max_file_size: Maximum file size in bytes that will be processed.
        styles: Style overrides keyed by style table category, written as
            `rich` style strings.

    Examples:
        MdStyleConfig(rule_min_length=4, styles={"h1": "bold red"})
    """

    backend: str = DEFAULT_BACKEND
    rule_min_length: int = DEFAULT_RULE_MIN_LENGTH
    tab_width: int = DEFAULT_TAB_WIDTH
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    styles: dict[str, str] = field(default_factory=dict)

    def style_table(self) -> StyleTable:
        """Return the default style table with `styles` applied.

        Raises:
            ConfigError: If `styles` names an unknown category or style.
        """
        try:
            return StyleTable.from_mapping(self.styles)
        except StyleTableError as error:
            raise ConfigError(str(error)) from error


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`tab_width` must be a positive integer")
    """


def load_config(search_path: Path) -> MdStyleConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.mdstyle]`` table from `pyproject.toml` and the ``[mdstyle]`` or
    ``[tool.mdstyle]`` table from `.mdstyle.toml` when present. Returns
    default values when no configuration is found. TOML files that cannot be
    read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        MdStyleConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "mdstyle")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".mdstyle.toml",
            table_paths=[("mdstyle",), ("tool", "mdstyle")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return MdStyleConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> MdStyleConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> MdStyleConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return MdStyleConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return MdStyleConfig()

    try:
        return MdStyleConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: MdStyleConfig) -> MdStyleConfig:
    backend = config.backend
    if isinstance(backend, str):
        backend = backend.strip().lower().replace("_", "-")
        if backend == "markdownit":
            backend = "markdown-it"

    styles = config.styles if config.styles is not None else {}

    return replace(config, backend=backend, styles=styles)


def validate_config(config: MdStyleConfig) -> None:
    """Validate a `MdStyleConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If the backend is unknown, numeric settings are not
            positive integers, or style overrides are invalid.

    Examples:
        validate_config(MdStyleConfig(tab_width=2))
    """
    config = normalize_config(config)

    _ensure_integers(
        {
            "rule_min_length": config.rule_min_length,
            "tab_width": config.tab_width,
            "max_file_size": config.max_file_size,
        }
    )

    if config.backend not in BACKEND_NAMES:
        raise ConfigError(f"`backend` must be one of: {', '.join(BACKEND_NAMES)}")
    if config.rule_min_length < 2:
        raise ConfigError("`rule_min_length` must be >= 2")

    _ensure_positive(
        {
            "tab_width": config.tab_width,
            "max_file_size": config.max_file_size,
        }
    )

    if not isinstance(config.styles, dict):
        raise ConfigError("`styles` must be a table of category = style entries")
    config.style_table()


def apply_overrides(config: MdStyleConfig, **overrides: object) -> MdStyleConfig:
    """Apply override values to a `MdStyleConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored. A ``styles`` override is merged into the existing
            styles rather than replacing them.

    Returns:
        MdStyleConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `MdStyleConfig`.

    Examples:
        updated = apply_overrides(config, tab_width=2, styles={"h1": "bold"})
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if "styles" in changes:
        if not changes["styles"]:
            del changes["styles"]
        elif isinstance(config.styles, dict):
            changes["styles"] = {**config.styles, **changes["styles"]}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> MdStyleConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        MdStyleConfig: Validated configuration ready for parsing.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), backend="markdown-it")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
