"""
cookbook-html: static HTML pages from plain-text recipes.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    cookbook-html cookbook docs

Library Usage:
    from pathlib import Path
    from cookbook_html import render_recipe

    content = Path("cookbook/tea.md").read_text()
    html = render_recipe(content)
"""

from .classifier import classify_line
from .config import ConfigError, CookbookConfig
from .converter import convert, convert_file, convert_lines, render_recipe, validate_recipe
from .exceptions import ConvertFileError, LineTooLongError, RecipeError, StructuralViolationError
from .machine import next_state, parse_recipe
from .models import EventKind, LineKind, RecipeEvent, RecipeLine, RecipeState

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "convert",
    "convert_lines",
    "convert_file",
    "render_recipe",
    "validate_recipe",
    "parse_recipe",
    "classify_line",
    "next_state",
    # Data models
    "CookbookConfig",
    "EventKind",
    "LineKind",
    "RecipeEvent",
    "RecipeLine",
    "RecipeState",
    # Exceptions
    "ConfigError",
    "ConvertFileError",
    "LineTooLongError",
    "RecipeError",
    "StructuralViolationError",
    # Version
    "__version__",
]
