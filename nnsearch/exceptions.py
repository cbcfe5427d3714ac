"""
Exception types raised by nnsearch.

All errors derive from NNSearchError. The value errors also subclass the
builtin ValueError so callers that only catch ValueError keep working.

A short search result (fewer than k neighbors available) is not an error;
it is reported through SearchResult.is_partial instead.
"""


class NNSearchError(Exception):
    """Base class for all nnsearch errors."""


class DimensionMismatchError(NNSearchError, ValueError):
    """Two vectors (or a vector and an index) have different dimensionality."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Inconsistent length: {expected} != {actual}")


class InvalidInputError(NNSearchError, ValueError):
    """An argument is outside the range the index accepts."""
