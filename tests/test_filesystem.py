from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from cookbook_html.filesystem import (
    atomic_writer,
    collect_file_stat,
    destination_for,
    discover_recipes,
    enforce_file_size,
    get_max_file_size,
    get_max_line_length,
    safe_read,
)


def test_get_max_file_size_defaults(monkeypatch):
    monkeypatch.delenv("COOKBOOK_HTML_MAX_FILE_SIZE", raising=False)
    assert get_max_file_size(default=123) == 123


def test_get_max_file_size_reads_environment(monkeypatch):
    monkeypatch.setenv("COOKBOOK_HTML_MAX_FILE_SIZE", "2048")
    assert get_max_file_size() == 2048


@pytest.mark.parametrize("value", ["invalid", "0", "-5"])
def test_get_max_file_size_rejects_bad_values(monkeypatch, value: str):
    monkeypatch.setenv("COOKBOOK_HTML_MAX_FILE_SIZE", value)
    with pytest.raises(ValueError):
        get_max_file_size()


@pytest.mark.parametrize("value", ["invalid", "0"])
def test_get_max_line_length_rejects_bad_values(monkeypatch, value: str):
    monkeypatch.setenv("COOKBOOK_HTML_MAX_LINE_LENGTH", value)
    with pytest.raises(ValueError):
        get_max_line_length()


def test_discover_recipes_filters_and_sorts(tmp_path: Path):
    for name in ["b.md", "a.md", "notes.txt", "c.MD", "archive.md.bak"]:
        (tmp_path / name).write_text("# x\n", encoding="utf-8")
    (tmp_path / "folder.md").mkdir()

    recipes = discover_recipes(tmp_path, ".md")

    assert [path.name for path in recipes] == ["a.md", "b.md"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="Symlink support is required")
def test_discover_recipes_skips_symlinks(tmp_path: Path):
    target = tmp_path / "real.md"
    target.write_text("# x\n", encoding="utf-8")
    try:
        os.symlink(target, tmp_path / "alias.md")
    except OSError as error:  # pragma: no cover - platform dependent
        pytest.skip(f"Unable to create symlink: {error}")

    assert [path.name for path in discover_recipes(tmp_path, ".md")] == ["real.md"]


def test_discover_recipes_missing_directory(tmp_path: Path):
    with pytest.raises(IOError):
        discover_recipes(tmp_path / "missing", ".md")


def test_destination_for_swaps_directory_and_extension():
    assert destination_for(Path("cookbook/tea.md"), Path("docs"), ".html") == Path(
        "docs/tea.html"
    )


def test_destination_for_keeps_inner_dots():
    assert destination_for(Path("cookbook/ice.tea.md"), Path("docs"), ".html") == Path(
        "docs/ice.tea.html"
    )


def test_collect_file_stat_rejects_directory(tmp_path: Path):
    with pytest.raises(IOError):
        collect_file_stat(tmp_path)


def test_enforce_file_size(tmp_path: Path):
    target = tmp_path / "big.md"
    target.write_text("x" * 10, encoding="utf-8")
    stat_result = collect_file_stat(target)

    enforce_file_size(stat_result, 10, target)
    with pytest.raises(IOError):
        enforce_file_size(stat_result, 9, target)


def test_safe_read_missing_file(tmp_path: Path):
    with pytest.raises(IOError):
        safe_read(tmp_path / "missing.md")


def test_atomic_writer_replaces_on_success(tmp_path: Path):
    destination = tmp_path / "page.html"
    destination.write_text("old", encoding="utf-8")

    with atomic_writer(destination) as handle:
        handle.write("new")
        assert destination.read_text(encoding="utf-8") == "old"

    assert destination.read_text(encoding="utf-8") == "new"
    assert [path.name for path in tmp_path.iterdir()] == ["page.html"]


def test_atomic_writer_new_page_is_world_readable(tmp_path: Path):
    destination = tmp_path / "page.html"

    with atomic_writer(destination) as handle:
        handle.write("new")

    assert stat.S_IMODE(destination.stat().st_mode) == 0o644


def test_atomic_writer_keeps_permissions_of_replaced_page(tmp_path: Path):
    destination = tmp_path / "page.html"
    destination.write_text("old", encoding="utf-8")
    os.chmod(destination, 0o640)

    with atomic_writer(destination) as handle:
        handle.write("new")

    assert destination.read_text(encoding="utf-8") == "new"
    assert stat.S_IMODE(destination.stat().st_mode) == 0o640


def test_atomic_writer_discards_on_failure(tmp_path: Path):
    destination = tmp_path / "page.html"

    with pytest.raises(RuntimeError):
        with atomic_writer(destination) as handle:
            handle.write("partial")
            raise RuntimeError("boom")

    assert list(tmp_path.iterdir()) == []


def test_atomic_writer_keeps_previous_page_on_failure(tmp_path: Path):
    destination = tmp_path / "page.html"
    destination.write_text("old", encoding="utf-8")

    with pytest.raises(RuntimeError):
        with atomic_writer(destination) as handle:
            handle.write("partial")
            raise RuntimeError("boom")

    assert destination.read_text(encoding="utf-8") == "old"


def test_atomic_writer_missing_directory(tmp_path: Path):
    with pytest.raises(IOError):
        with atomic_writer(tmp_path / "missing" / "page.html"):
            pass
