"""Filesystem helpers for cookbook-html."""

from __future__ import annotations

import contextlib
import os
import stat
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_LINE_LENGTH

MAX_FILE_SIZE_ENV_VAR = "COOKBOOK_HTML_MAX_FILE_SIZE"
MAX_LINE_LENGTH_ENV_VAR = "COOKBOOK_HTML_MAX_LINE_LENGTH"

# Mode of newly created pages; replaced pages keep their current mode.
PAGE_PERMISSIONS = 0o644


def _positive_int_from_env(name: str, default: int) -> int:
    env_value = os.environ.get(name)
    if env_value is None:
        return default

    try:
        value = int(env_value)
    except ValueError as error:
        error_message = f"Invalid value for {name}: {env_value} (expected positive integer)"
        raise ValueError(error_message) from error

    if value <= 0:
        error_message = f"{name} must be a positive integer, got {value}."
        raise ValueError(error_message)

    return value


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed recipe file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["COOKBOOK_HTML_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    return _positive_int_from_env(MAX_FILE_SIZE_ENV_VAR, default)


def get_max_line_length(default: int = DEFAULT_MAX_LINE_LENGTH) -> int:
    """Resolve the maximum allowed line length.

    Args:
        default: Fallback value in characters when the environment variable is
            unset.

    Returns:
        int: Maximum allowed line length in characters.

    Raises:
        ValueError: If the environment value is not a positive integer.
    """
    return _positive_int_from_env(MAX_LINE_LENGTH_ENV_VAR, default)


def discover_recipes(source_dir: Path, extension: str) -> list[Path]:
    """List recipe files directly inside `source_dir`.

    Only regular files whose suffix is exactly `extension` are returned;
    symlinks and subdirectories are ignored. Results are sorted by name.

    Args:
        source_dir: Directory to scan.
        extension: Suffix of recipe files, including the dot.

    Returns:
        list[Path]: Recipe paths in name order.

    Raises:
        IOError: If the directory is missing or cannot be listed.

    Examples:
        discover_recipes(Path("cookbook"), ".md")
    """
    try:
        entries = list(os.scandir(source_dir))
    except OSError as error:
        error_message = f"Error accessing {source_dir}: {error}"
        raise IOError(error_message) from error

    recipes = [
        Path(entry.path)
        for entry in entries
        if entry.is_file(follow_symlinks=False) and Path(entry.name).suffix == extension
    ]
    return sorted(recipes, key=lambda path: path.name)


def destination_for(source: Path, output_dir: Path, output_extension: str) -> Path:
    """Derive the page path for a recipe file.

    Examples:
        destination_for(Path("cookbook/tea.md"), Path("docs"), ".html")  # docs/tea.html
    """
    return output_dir / f"{source.stem}{output_extension}"


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a file while disallowing symlinks.

    Args:
        filepath: Path to the file.

    Returns:
        os.stat_result: File metadata gathered without following symlinks.

    Raises:
        IOError: If the path is inaccessible, a symlink, or not a regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if stat.S_ISLNK(stat_result.st_mode):
        error_message = f"Symlinks are not supported: {filepath}."
        raise IOError(error_message)

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("cookbook/tea.md")) as handle:
            first_line = handle.readline()
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def safe_write(filepath: Path) -> TextIO:
    """Open a file for writing in UTF-8, mapping OS errors to `IOError`."""
    try:
        return open(filepath, "w", encoding="UTF-8")
    except OSError as error:
        error_message = f"Error writing {filepath}: {error}"
        raise IOError(error_message) from error


def _page_permissions(destination: Path) -> int:
    try:
        return stat.S_IMODE(os.stat(destination).st_mode)
    except FileNotFoundError:
        return PAGE_PERMISSIONS


@contextlib.contextmanager
def atomic_writer(destination: Path) -> Iterator[TextIO]:
    """Write to a temporary file that replaces `destination` on success.

    The temporary file lives next to `destination` so the final rename stays on
    one filesystem. When the block raises, the temporary file is removed and
    any existing `destination` is left as it was. A replaced page keeps its
    permissions; a new page gets `PAGE_PERMISSIONS`.

    Args:
        destination: Final path of the written file.

    Yields:
        TextIO: Handle to write the content to.

    Raises:
        IOError: If the temporary file cannot be created or moved into place.

    Examples:
        with atomic_writer(Path("docs/tea.html")) as handle:
            handle.write("<!DOCTYPE html>")
    """
    temp_path: Path | None = None
    try:
        try:
            tmp_file = tempfile.NamedTemporaryFile(
                mode="w",
                encoding="UTF-8",
                delete=False,
                dir=destination.parent,
                prefix=f".{destination.name}.",
            )
        except OSError as error:
            error_message = f"Error writing {destination}: {error}"
            raise IOError(error_message) from error

        temp_path = Path(tmp_file.name)
        with tmp_file:
            yield tmp_file
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, _page_permissions(destination))

        try:
            os.replace(temp_path, destination)
        except OSError as error:
            error_message = f"Error writing {destination}: {error}"
            raise IOError(error_message) from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
