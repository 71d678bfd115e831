# gridpath/core/errors.py
"""Error kinds raised by the pathfinding core.

All of them are local, caller-recoverable conditions. The core never retries
and carries no user-facing text; the viewer maps classes to messages.
"""


class GridPathError(Exception):
    """Base class for every core error."""


class InvalidDimensions(GridPathError, ValueError):
    """Grid size is not a pair of positive integers."""


class OutOfBounds(GridPathError, IndexError):
    """Coordinate lies outside the grid."""

    def __init__(self, col: int, row: int, cols: int, rows: int):
        super().__init__(f"cell ({col}, {row}) outside {cols}x{rows} grid")
        self.col = col
        self.row = row


class InvalidEndpoints(GridPathError, ValueError):
    """Start equals end, or either endpoint is a wall / out of bounds."""


class InvalidState(GridPathError, RuntimeError):
    """Search state can no longer be stepped (its grid changed underneath it)."""
