"""Package-specific exception types."""

from __future__ import annotations


class RecipeError(ValueError):
    """Base class for errors found in recipe content."""


class StructuralViolationError(RecipeError):
    """Raised when a line is not allowed in the current parser state.

    Args:
        line_number: One-based index of the offending line.
        kind: Name of the line kind that was rejected.
        state: Name of the parser state the line was rejected in.
    """

    def __init__(self, line_number: int, kind: str, state: str):
        self.line_number = line_number
        self.kind = kind
        self.state = state
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Illegal transition at line {self.line_number}: "
            f"{self.kind.lower()} line not allowed after {self.state.lower()}"
        )


class LineTooLongError(RecipeError):
    """Raised when a line exceeds the configured maximum length.

    Args:
        line_number: One-based index of the offending line.
        max_line_length: Maximum allowed line length in characters.
    """

    def __init__(self, line_number: int, max_line_length: int):
        self.line_number = line_number
        self.max_line_length = max_line_length
        super().__init__(
            f"Line {self.line_number} exceeds maximum allowed length "
            f"of {self.max_line_length} characters"
        )


class ConvertFileError(Exception):
    """Raised when converting a recipe file fails."""
