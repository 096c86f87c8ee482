"""HTML rendering of recipe events."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TextIO

from .constants import DEFAULT_STYLESHEETS
from .models import EventKind, RecipeEvent

# Input is trusted; payloads are written verbatim.
_FRAGMENTS = {
    EventKind.DOCUMENT_START: "<!DOCTYPE html><html>",
    EventKind.IMAGE: '<div><img src="{text}"></div>',
    EventKind.SUBTITLE: "<div><blockquote>{text}</blockquote></div>",
    EventKind.DESCRIPTION: "<div><p>{text}</p></div>",
    EventKind.STEP_LIST_OPEN: '<div class="step"><ul>',
    EventKind.STEP: "<li>{text}</li>",
    EventKind.INFO: '</ul><div class="info c{color_index}">{text}</div></div>',
    EventKind.STEP_LIST_CLOSE: "</ul></div>",
    EventKind.DOCUMENT_END: "</body></html>",
}


def render_head(title: str, stylesheets: Sequence[str] = DEFAULT_STYLESHEETS) -> str:
    """Render the page head and open the body.

    Args:
        title: Recipe title used as the page title.
        stylesheets: Stylesheet hrefs linked in order.

    Returns:
        str: ``<head>`` block followed by ``<body>``.
    """
    links = "".join(
        f'<link rel="stylesheet" type="text/css" href="{href}">' for href in stylesheets
    )
    return f"<head><title>{title}</title>{links}</head><body>"


def render_event(event: RecipeEvent, stylesheets: Sequence[str] = DEFAULT_STYLESHEETS) -> str:
    """Render one event to its HTML fragment.

    Args:
        event: Event to render.
        stylesheets: Stylesheet hrefs used when rendering the title.

    Returns:
        str: The HTML fragment for the event.

    Examples:
        render_event(RecipeEvent(EventKind.STEP, "Boil water"))  # "<li>Boil water</li>"
    """
    if event.kind is EventKind.TITLE:
        return render_head(event.text, stylesheets) + f"<div><h1>{event.text}</h1></div>"
    return _FRAGMENTS[event.kind].format(text=event.text, color_index=event.color_index)


def render_events(
    events: Iterable[RecipeEvent],
    sink: TextIO,
    stylesheets: Sequence[str] = DEFAULT_STYLESHEETS,
) -> None:
    """Write each event's fragment to `sink` as soon as it is produced.

    Nothing is buffered: when `events` raises part way through, every fragment
    rendered before the failure has already been written.

    Args:
        events: Events in document order.
        sink: Text stream receiving the HTML.
        stylesheets: Stylesheet hrefs used when rendering the title.
    """
    for event in events:
        sink.write(render_event(event, stylesheets))
