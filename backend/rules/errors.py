from __future__ import annotations


class BoardConfigurationError(ValueError):
    """Raised when a board cannot be built with the requested dimensions."""


class EmptyContinuationError(RuntimeError):
    """A continuation was requested from an empty move list."""
