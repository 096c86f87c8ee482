"""Recipe line classification."""

from __future__ import annotations

from .constants import (
    IMAGE_CLOSING_MARKER,
    IMAGE_MARKER,
    QUOTE_MARKER,
    STEP_MARKER,
    TITLE_MARKER,
    WHITESPACE,
)
from .models import LineKind, RecipeLine

_MARKER_KINDS = {
    TITLE_MARKER: LineKind.TITLE,
    IMAGE_MARKER: LineKind.IMAGE,
    QUOTE_MARKER: LineKind.QUOTE,
    STEP_MARKER: LineKind.STEP,
}


def classify_line(raw_line: str, line_number: int) -> RecipeLine | None:
    """Classify a raw recipe line by its first non-blank character.

    Surrounding ASCII whitespace (the C `isspace` set, so no NBSP) is stripped
    first; blank lines yield None and must be skipped by the caller. Marker
    lines carry the rest of the line, stripped again, as payload. Image lines additionally lose every trailing ``]``.
    Plain text lines carry the whole stripped line.

    Args:
        raw_line: Line as read from the source, possibly with its newline.
        line_number: One-based index of the line.

    Returns:
        RecipeLine | None: The classified line, or None for a blank line.

    Examples:
        classify_line("# Tea\\n", 1)  # RecipeLine(1, LineKind.TITLE, "Tea")
        classify_line("[img.png]]]", 2)  # payload "img.png"
        classify_line("   \\n", 3)  # None
    """
    line = raw_line.strip(WHITESPACE)
    if not line:
        return None

    kind = _MARKER_KINDS.get(line[0], LineKind.TEXT)
    if kind is LineKind.TEXT:
        return RecipeLine(line_number, kind, line)

    payload = line[1:].strip(WHITESPACE)
    if kind is LineKind.IMAGE:
        payload = payload.rstrip(IMAGE_CLOSING_MARKER)
    return RecipeLine(line_number, kind, payload)
