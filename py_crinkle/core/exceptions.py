"""Errors raised by the strip generation engine.

None of these are recoverable mid-stream: they signal caller misuse or a
corrupted fold, and generation for the affected surface should stop.
"""


class CrinkleError(Exception):
    """Base class for generation errors."""


class StripLevelMismatchError(CrinkleError, ValueError):
    """Strips passed to an update kernel have inconsistent levels."""

    def __init__(self, operation: str, *levels: int):
        self.operation = operation
        self.levels = levels
        super().__init__(f"{operation}: inconsistent sizes (levels {list(levels)})")


class InvalidFoldStateError(CrinkleError, RuntimeError):
    """A fold level holds a state value the engine does not know."""


class FoldReleasedError(CrinkleError, RuntimeError):
    """The fold was freed and can no longer generate strips."""


class StripReleasedError(CrinkleError, RuntimeError):
    """The strip's storage has already been released."""
