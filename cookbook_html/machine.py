"""Recipe grammar state machine."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .classifier import classify_line
from .config import CookbookConfig, validate_config
from .constants import DEFAULT_COLOR_COUNT
from .exceptions import LineTooLongError, StructuralViolationError
from .models import EventKind, LineKind, RecipeContext, RecipeEvent, RecipeLine, RecipeState

# States each line kind may follow. Quote lines are resolved separately since
# the same marker means subtitle or annotation depending on the state.
_ALLOWED_PREDECESSORS: dict[LineKind, frozenset[RecipeState]] = {
    LineKind.TITLE: frozenset({RecipeState.LOADED}),
    LineKind.IMAGE: frozenset({RecipeState.TITLE}),
    LineKind.STEP: frozenset(set(RecipeState) - {RecipeState.LOADED}),
    LineKind.TEXT: frozenset(
        {RecipeState.TITLE, RecipeState.SUBTITLE, RecipeState.DESCRIPTION}
    ),
}

_TARGET_STATES = {
    LineKind.TITLE: RecipeState.TITLE,
    LineKind.IMAGE: RecipeState.IMAGE,
    LineKind.STEP: RecipeState.STEP,
    LineKind.TEXT: RecipeState.DESCRIPTION,
}

_STATE_EVENTS = {
    RecipeState.TITLE: EventKind.TITLE,
    RecipeState.IMAGE: EventKind.IMAGE,
    RecipeState.SUBTITLE: EventKind.SUBTITLE,
    RecipeState.DESCRIPTION: EventKind.DESCRIPTION,
}


def next_state(
    state: RecipeState, kind: LineKind, step_list_open: bool = False
) -> RecipeState | None:
    """Look up the state reached when a line of `kind` follows `state`.

    Args:
        state: Current parser state.
        kind: Kind of the incoming line.
        step_list_open: Whether a run of steps is still open.

    Returns:
        RecipeState | None: The new state, or None when the transition is illegal.

    Examples:
        next_state(RecipeState.LOADED, LineKind.TITLE)  # RecipeState.TITLE
        next_state(RecipeState.SUBTITLE, LineKind.QUOTE)  # None
    """
    if kind is LineKind.QUOTE:
        if state in (RecipeState.TITLE, RecipeState.IMAGE):
            return RecipeState.SUBTITLE
        if state is RecipeState.STEP and step_list_open:
            return RecipeState.INFO
        return None

    if state not in _ALLOWED_PREDECESSORS[kind]:
        return None
    return _TARGET_STATES[kind]


def advance(
    ctx: RecipeContext, line: RecipeLine, color_count: int = DEFAULT_COLOR_COUNT
) -> list[RecipeEvent]:
    """Apply one classified line to the parser context.

    Args:
        ctx: Parser context to update.
        line: Classified, non-blank line.
        color_count: Number of annotation colors to cycle through.

    Returns:
        list[RecipeEvent]: Events produced by the line, in document order.

    Raises:
        StructuralViolationError: If the line is not allowed in the current state.
            The context is left untouched.

    Examples:
        ctx = RecipeContext(state=RecipeState.TITLE)
        advance(ctx, RecipeLine(2, LineKind.STEP, "Boil"))
    """
    target = next_state(ctx.state, line.kind, ctx.step_list_open)
    if target is None:
        raise StructuralViolationError(line.line_number, line.kind.name, ctx.state.name)

    events: list[RecipeEvent] = []
    if target is RecipeState.STEP:
        if not ctx.step_list_open:
            events.append(RecipeEvent(EventKind.STEP_LIST_OPEN))
            ctx.step_list_open = True
        events.append(RecipeEvent(EventKind.STEP, line.payload))
    elif target is RecipeState.INFO:
        events.append(RecipeEvent(EventKind.INFO, line.payload, color_index=ctx.color_index))
        ctx.color_index = (ctx.color_index + 1) % color_count
        ctx.step_list_open = False
    else:
        events.append(RecipeEvent(_STATE_EVENTS[target], line.payload))

    ctx.state = target
    return events


def _line_length(line: str) -> int:
    line_len = len(line)
    if line.endswith("\n"):
        line_len -= 1
        if line_len > 0 and line[line_len - 1] == "\r":
            line_len -= 1
    return line_len


def parse_recipe(
    lines: Iterable[str],
    config: CookbookConfig | None = None,
    max_line_length: int | None = None,
) -> Iterator[RecipeEvent]:
    """Lazily validate recipe lines and yield the resulting events.

    Lines are pulled one at a time, so events for the valid prefix of a
    document are produced before a later violation is detected.

    Args:
        lines: Raw recipe lines, with or without line endings.
        config: Configuration controlling parsing; defaults to `CookbookConfig()`.
        max_line_length: Optional override for the maximum line length.

    Yields:
        RecipeEvent: Events in document order, starting with ``DOCUMENT_START``
            and, when every line is valid, ending with ``DOCUMENT_END``.

    Raises:
        ConfigError: If the configuration fails validation.
        LineTooLongError: If a line exceeds the maximum length.
        StructuralViolationError: If a line breaks the recipe grammar.

    Examples:
        list(parse_recipe(["# Tea", "* Boil water"]))
    """
    config = config or CookbookConfig()
    validate_config(config)
    effective_max_line_length = (
        config.max_line_length if max_line_length is None else max_line_length
    )

    ctx = RecipeContext()
    yield RecipeEvent(EventKind.DOCUMENT_START)

    for line_number, raw_line in enumerate(lines, start=1):
        line = classify_line(raw_line, line_number)
        if line is None:
            continue

        if _line_length(raw_line) > effective_max_line_length:
            raise LineTooLongError(line_number, effective_max_line_length)

        yield from advance(ctx, line, config.color_count)

    if ctx.step_list_open:
        ctx.step_list_open = False
        yield RecipeEvent(EventKind.STEP_LIST_CLOSE)

    yield RecipeEvent(EventKind.DOCUMENT_END)
