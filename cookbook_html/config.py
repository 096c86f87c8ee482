"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import (
    DEFAULT_COLOR_COUNT,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_LINE_LENGTH,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_OUTPUT_EXTENSION,
    DEFAULT_SOURCE_DIR,
    DEFAULT_SOURCE_EXTENSION,
    DEFAULT_STYLESHEETS,
)


@dataclass
class CookbookConfig:
    """Configuration for converting a cookbook directory to HTML.

    Attributes:
        source_dir: Directory holding the recipe files.
        output_dir: Directory receiving the generated pages.
        source_extension: Suffix of the files treated as recipes.
        output_extension: Suffix given to the generated pages.
        stylesheets: Stylesheet hrefs linked from every page head.
        color_count: Number of annotation color classes (``c0`` to ``cN-1``).
        keep_partial_output: Whether a page that failed halfway is left on disk.
        max_file_size: Maximum recipe file size in bytes.
        max_line_length: Maximum line length allowed during parsing.

    Examples:
        CookbookConfig(output_dir="site", stylesheets=("main.css",))
    """

    # Layout
    source_dir: str = DEFAULT_SOURCE_DIR
    output_dir: str = DEFAULT_OUTPUT_DIR
    source_extension: str = DEFAULT_SOURCE_EXTENSION
    output_extension: str = DEFAULT_OUTPUT_EXTENSION

    # Rendering
    stylesheets: tuple[str, ...] = DEFAULT_STYLESHEETS
    color_count: int = DEFAULT_COLOR_COUNT

    # Failure handling
    keep_partial_output: bool = False

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`color_count` must be a positive integer")
    """


def load_config(search_path: Path) -> CookbookConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.cookbook-html]`` table from `pyproject.toml` and the
    ``[cookbook-html]`` or ``[tool.cookbook-html]`` table from
    `.cookbook-html.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        CookbookConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path.cwd())
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "cookbook-html")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".cookbook-html.toml",
            table_paths=[("cookbook-html",), ("tool", "cookbook-html")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return CookbookConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> CookbookConfig | None:
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
) -> CookbookConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return CookbookConfig()

    try:
        return CookbookConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: CookbookConfig) -> CookbookConfig:
    """Coerce TOML-friendly values into the shapes used internally.

    Stylesheets given as a list (as TOML arrays load) or as a single string
    become a tuple.
    """
    stylesheets = config.stylesheets
    if isinstance(stylesheets, str):
        stylesheets = (stylesheets,)
    elif isinstance(stylesheets, list):
        stylesheets = tuple(stylesheets)
    return replace(config, stylesheets=stylesheets)


def validate_config(config: CookbookConfig) -> None:
    """Validate a `CookbookConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If directories or extensions are empty, extensions lack a
            leading dot, stylesheets are not strings, or numeric limits are
            non-positive.

    Examples:
        validate_config(CookbookConfig(color_count=6))
    """
    config = normalize_config(config)

    for key in ("source_dir", "output_dir"):
        value = getattr(config, key)
        if not isinstance(value, str) or not value:
            raise ConfigError(f"`{key}` must be a non-empty string")

    for key in ("source_extension", "output_extension"):
        value = getattr(config, key)
        if not isinstance(value, str) or len(value) < 2 or not value.startswith("."):
            raise ConfigError(f"`{key}` must start with a dot, e.g. `.md`")

    if not isinstance(config.stylesheets, tuple) or not all(
        isinstance(href, str) and href for href in config.stylesheets
    ):
        raise ConfigError("`stylesheets` must be a list of non-empty strings")

    if not isinstance(config.keep_partial_output, bool):
        raise ConfigError("`keep_partial_output` must be a boolean")

    _ensure_integers(
        {
            "color_count": config.color_count,
            "max_file_size": config.max_file_size,
            "max_line_length": config.max_line_length,
        }
    )
    _ensure_positive(
        {
            "color_count": config.color_count,
            "max_file_size": config.max_file_size,
            "max_line_length": config.max_line_length,
        }
    )


def apply_overrides(config: CookbookConfig, **overrides: object) -> CookbookConfig:
    """Apply override values to a `CookbookConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        CookbookConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `CookbookConfig`.

    Examples:
        updated = apply_overrides(config, output_dir="site")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> CookbookConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        CookbookConfig: Validated configuration ready for conversion.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), output_dir="site")
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
