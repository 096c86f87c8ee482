"""Data models for cookbook-html."""

from dataclasses import dataclass
from enum import Enum, auto


class RecipeState(Enum):
    """Parser states used while walking a recipe.

    Attributes:
        LOADED: Nothing but blank lines seen yet.
        TITLE: The title line was the last content line.
        IMAGE: The image line was the last content line.
        SUBTITLE: The subtitle line was the last content line.
        DESCRIPTION: A description line was the last content line.
        STEP: A step line was the last content line.
        INFO: An annotation closed the last run of steps.
    """

    LOADED = auto()
    TITLE = auto()
    IMAGE = auto()
    SUBTITLE = auto()
    DESCRIPTION = auto()
    STEP = auto()
    INFO = auto()


class LineKind(Enum):
    """Syntactic category of a non-blank recipe line, chosen by its first character.

    ``QUOTE`` lines are either a subtitle or an annotation; the parser state
    decides which.
    """

    TITLE = auto()
    IMAGE = auto()
    QUOTE = auto()
    STEP = auto()
    TEXT = auto()


@dataclass(frozen=True)
class RecipeLine:
    """A classified recipe line.

    Attributes:
        line_number: One-based index of the line in the source.
        kind: Syntactic category of the line.
        payload: Text carried by the line, with its marker removed.
    """

    line_number: int
    kind: LineKind
    payload: str


@dataclass
class RecipeContext:
    """Encapsulate parser state for a single conversion.

    Attributes:
        state: Current parser state.
        step_list_open: True while a run of steps has not been closed.
        color_index: Color class used by the next annotation.
    """

    state: RecipeState = RecipeState.LOADED
    step_list_open: bool = False
    color_index: int = 0


class EventKind(Enum):
    """Semantic events produced by the parser, in document order."""

    DOCUMENT_START = auto()
    TITLE = auto()
    IMAGE = auto()
    SUBTITLE = auto()
    DESCRIPTION = auto()
    STEP_LIST_OPEN = auto()
    STEP = auto()
    INFO = auto()
    STEP_LIST_CLOSE = auto()
    DOCUMENT_END = auto()


@dataclass(frozen=True)
class RecipeEvent:
    """A validated piece of a recipe, ready to be rendered.

    Attributes:
        kind: What the event represents.
        text: Text payload; empty for structural events.
        color_index: Color class of an ``INFO`` event, otherwise None.
    """

    kind: EventKind
    text: str = ""
    color_index: int | None = None
