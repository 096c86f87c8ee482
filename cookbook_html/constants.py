"""Constants used across the cookbook-html package."""

from __future__ import annotations

# Line markers
TITLE_MARKER = "#"
IMAGE_MARKER = "["
IMAGE_CLOSING_MARKER = "]"
QUOTE_MARKER = ">"
STEP_MARKER = "*"

# Directory layout
DEFAULT_SOURCE_DIR = "cookbook"
DEFAULT_OUTPUT_DIR = "docs"
DEFAULT_SOURCE_EXTENSION = ".md"
DEFAULT_OUTPUT_EXTENSION = ".html"

# Rendering
DEFAULT_STYLESHEETS = ("css/style.css", "css/colors.css")
DEFAULT_COLOR_COUNT = 4

# Limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_LINE_LENGTH = 10_000

# Characters C `isspace` accepts in the "C" locale
WHITESPACE = " \t\n\r\x0b\x0c"
