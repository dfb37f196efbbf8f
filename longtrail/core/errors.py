"""
Error taxonomy for trail solving.

Malformed input and capacity limits are fatal and raised before any search
starts. An unreachable finish is NOT an error: the search reports it through
``SearchResult.success``.
"""

from typing import Optional


class TrailError(Exception):
    """Base class for all trail solver errors."""


class MalformedGridError(TrailError, ValueError):
    """Raised when the trail map text violates the input contract."""

    def __init__(self, message: str, row: Optional[int] = None):
        if row is not None:
            message = f"{message} (row {row})"
        super().__init__(message)
        self.row = row


class CapacityExceededError(TrailError):
    """
    Raised when the junction count does not fit in the visited bit field.

    This is a limit of the representation, not a problem with the map.
    """

    def __init__(self, junction_count: int, capacity: int):
        super().__init__(
            f"Trail map has {junction_count} junctions, "
            f"visited bit field holds at most {capacity}"
        )
        self.junction_count = junction_count
        self.capacity = capacity


class CompactionInvariantError(TrailError, AssertionError):
    """Raised when a corridor walk breaks the compactor's own invariants."""
