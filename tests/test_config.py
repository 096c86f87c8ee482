from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from cookbook_html.config import (
    ConfigError,
    CookbookConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".cookbook-html.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.cookbook-html]
        source_dir = "recipes"
        output_dir = "site"
        source_extension = ".txt"
        output_extension = ".htm"
        stylesheets = ["main.css"]
        color_count = 6
        keep_partial_output = true
        max_file_size = 1
        max_line_length = 2
        """,
    )

    config = load_config(tmp_path)

    assert config == CookbookConfig(
        source_dir="recipes",
        output_dir="site",
        source_extension=".txt",
        output_extension=".htm",
        stylesheets=("main.css",),
        color_count=6,
        keep_partial_output=True,
        max_file_size=1,
        max_line_length=2,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [cookbook-html]
        output_dir = "public"
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.output_dir == "public"
    assert config.source_dir == "cookbook"


def test_pyproject_wins_over_dotfile_in_same_directory(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.cookbook-html]
        output_dir = "from-pyproject"
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [cookbook-html]
        output_dir = "from-dotfile"
        """,
    )

    assert load_config(tmp_path).output_dir == "from-pyproject"


def test_pyproject_without_table_is_skipped(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.other]
        value = 1
        """,
    )

    assert load_config(tmp_path) == CookbookConfig()


def test_invalid_toml_is_skipped(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[tool.cookbook-html\n", encoding="utf-8")

    assert load_config(tmp_path) == CookbookConfig()


def test_unknown_key_raises(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.cookbook-html]
        colour_count = 3
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_table_raises(tmp_path: Path):
    _write_dotfile(tmp_path, 'cookbook-html = "docs"\n')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_single_stylesheet_string_is_accepted(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.cookbook-html]
        stylesheets = "only.css"
        """,
    )

    assert load_config(tmp_path).stylesheets == ("only.css",)


@pytest.mark.parametrize(
    "changes",
    [
        {"source_dir": ""},
        {"output_dir": ""},
        {"source_extension": "md"},
        {"output_extension": "."},
        {"stylesheets": ("",)},
        {"stylesheets": (1,)},
        {"color_count": 0},
        {"color_count": True},
        {"color_count": "4"},
        {"keep_partial_output": "yes"},
        {"max_file_size": -1},
        {"max_line_length": 0},
    ],
)
def test_validate_config_rejects_invalid_values(changes: dict):
    with pytest.raises(ConfigError):
        validate_config(CookbookConfig(**changes))


def test_validate_config_accepts_defaults():
    validate_config(CookbookConfig())


def test_apply_overrides_ignores_none():
    config = CookbookConfig()

    assert apply_overrides(config, output_dir=None) is config
    assert apply_overrides(config, output_dir="site").output_dir == "site"


def test_build_config_overrides_file_values(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.cookbook-html]
        output_dir = "site"
        source_extension = ".txt"
        """,
    )

    config = build_config(tmp_path, output_dir="public", source_extension=None)

    assert config.output_dir == "public"
    assert config.source_extension == ".txt"


def test_build_config_validates(tmp_path: Path):
    with pytest.raises(ConfigError):
        build_config(tmp_path, output_extension="html")
