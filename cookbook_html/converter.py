"""Recipe to HTML conversion."""

from __future__ import annotations

import io
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from .config import ConfigError, CookbookConfig, validate_config
from .exceptions import (
    ConvertFileError,
    LineTooLongError,
    RecipeError,
    StructuralViolationError,
)
from .filesystem import (
    atomic_writer,
    collect_file_stat,
    enforce_file_size,
    safe_read,
    safe_write,
)
from .machine import parse_recipe
from .renderer import render_events


def convert_lines(
    lines: Iterable[str],
    sink: TextIO,
    config: CookbookConfig | None = None,
    max_line_length: int | None = None,
) -> None:
    """Convert recipe lines to HTML, writing fragments to `sink` as they are accepted.

    Args:
        lines: Raw recipe lines.
        sink: Text stream receiving the HTML document.
        config: Configuration controlling parsing and rendering.
        max_line_length: Optional override for the maximum line length.

    Raises:
        ConfigError: If the configuration fails validation.
        LineTooLongError: If a line exceeds the maximum length.
        StructuralViolationError: If a line breaks the recipe grammar. Fragments
            written before the violation remain in `sink`.
    """
    config = config or CookbookConfig()
    events = parse_recipe(lines, config, max_line_length)
    render_events(events, sink, config.stylesheets)


def convert(
    lines: Iterable[str], sink: TextIO, config: CookbookConfig | None = None
) -> bool:
    """Convert recipe lines to HTML and report whether the recipe was valid.

    Args:
        lines: Raw recipe lines.
        sink: Text stream receiving the HTML document.
        config: Configuration controlling parsing and rendering.

    Returns:
        bool: True when every line was accepted, False on the first rejected line.

    Examples:
        convert(["# Tea", "* Boil water"], sys.stdout)  # True
        convert(["* Boil water"], sys.stdout)  # False
    """
    try:
        convert_lines(lines, sink, config)
    except RecipeError:
        return False
    return True


def _read_lines(content: str) -> TextIO:
    # Same line splitting as reading a recipe file in text mode.
    return io.StringIO(content, newline=None)


def render_recipe(content: str, config: CookbookConfig | None = None) -> str:
    """Render recipe text to a complete HTML document.

    Raises:
        ConfigError: If the configuration fails validation.
        RecipeError: If the recipe is malformed.

    Examples:
        render_recipe("# Tea\\n* Boil water\\n")
    """
    buffer = io.StringIO()
    convert_lines(_read_lines(content), buffer, config)
    return buffer.getvalue()


def validate_recipe(content: str, config: CookbookConfig | None = None) -> None:
    """Check recipe text against the grammar without rendering it.

    Raises:
        ConfigError: If the configuration fails validation.
        RecipeError: If the recipe is malformed.
    """
    for _ in parse_recipe(_read_lines(content), config):
        pass


def _describe_error(source: Path, error: RecipeError) -> str:
    if isinstance(error, StructuralViolationError):
        return (
            f"{source} has an illegal {error.kind.lower()} line at line "
            f"{error.line_number} (after {error.state.lower()})."
        )
    if isinstance(error, LineTooLongError):
        return (
            f"{source} contains a line at line {error.line_number} "
            f"exceeding the maximum allowed length of {error.max_line_length} characters."
        )
    return f"{source}: {error}"


def _prepare(source: Path, config: CookbookConfig | None) -> CookbookConfig:
    config = config or CookbookConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ConvertFileError(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(source), config.max_file_size, source)
    except IOError as error:
        raise ConvertFileError(str(error)) from error

    return config


def convert_file(
    source: Path, destination: Path, config: CookbookConfig | None = None
) -> None:
    """Convert one recipe file into one HTML page.

    Unless `config.keep_partial_output` is set, the page is written to a
    temporary file and only moved to `destination` once the whole recipe was
    accepted, so a failed conversion leaves no page behind.

    Args:
        source: Recipe file to read.
        destination: Page to write.
        config: Configuration controlling parsing, rendering, and limits.

    Raises:
        ConvertFileError: If the configuration is invalid, the recipe cannot be
            read or decoded, the recipe is malformed, or the page cannot be written.

    Examples:
        convert_file(Path("cookbook/tea.md"), Path("docs/tea.html"))
    """
    config = _prepare(source, config)
    open_page = safe_write if config.keep_partial_output else atomic_writer

    try:
        with safe_read(source) as recipe, open_page(destination) as page:
            convert_lines(recipe, page, config)
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {source}: {error}"
        raise ConvertFileError(error_message) from error
    except RecipeError as error:
        raise ConvertFileError(_describe_error(source, error)) from error
    except IOError as error:
        raise ConvertFileError(str(error)) from error


def validate_file(source: Path, config: CookbookConfig | None = None) -> None:
    """Check a recipe file against the grammar without writing anything.

    Raises:
        ConvertFileError: If the configuration is invalid, the recipe cannot be
            read or decoded, or the recipe is malformed.
    """
    config = _prepare(source, config)

    try:
        with safe_read(source) as recipe:
            for _ in parse_recipe(recipe, config):
                pass
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {source}: {error}"
        raise ConvertFileError(error_message) from error
    except RecipeError as error:
        raise ConvertFileError(_describe_error(source, error)) from error
    except IOError as error:
        raise ConvertFileError(str(error)) from error
