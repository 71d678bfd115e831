# gridpath/core/controller.py
#!/usr/bin/env python3
"""
InteractionController — the explicit context object a UI drives.

Owns the grid, the endpoints, the edit mode and the current SearchState, and
turns clicks / button presses into core calls. Any edit discards the running
search so no stale costs survive into the next attempt.

Reset policy:
- reset_search(): bookkeeping only; walls and endpoints stay.
- clear_grid():   full reset; walls cleared, endpoints back to the corners.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from gridpath.core import astar
from gridpath.core.errors import InvalidEndpoints
from gridpath.core.grid import Grid
from gridpath.core.heuristics import heuristic_for
from gridpath.core.search_state import SearchState
from gridpath.core.types import Cell, Snapshot, StepResult, IDLE

logger = logging.getLogger(__name__)

MODE_WALL = "wall"
MODE_START = "start"
MODE_END = "end"
MODES = (MODE_WALL, MODE_START, MODE_END)


@dataclass
class InteractionController:
    grid: Grid
    start: Cell = (0, 0)
    end: Optional[Cell] = None
    algo: str = "A*"
    selection: str = "heap"
    mode: str = MODE_WALL
    search: Optional[SearchState] = field(default=None, repr=False)

    def __post_init__(self):
        if self.end is None:
            self.end = (self.grid.width - 1, self.grid.height - 1)
        self.start, self.end = tuple(self.start), tuple(self.end)
        heuristic_for(self.algo)  # validate early
        self._check_endpoints(self.start, self.end)

    @classmethod
    def create(cls, cols: int, rows: int, **kwargs) -> "InteractionController":
        return cls(Grid.create(cols, rows), **kwargs)

    # -------------------- editing --------------------

    def set_mode(self, mode: str) -> None:
        if mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {mode!r}")
        self.mode = mode

    def click(self, col: int, row: int) -> bool:
        """Apply the current mode at (col, row). Returns False when the click was ignored."""
        if self.mode == MODE_START:
            self.set_start((col, row))
            return True
        if self.mode == MODE_END:
            self.set_end((col, row))
            return True
        return self.toggle_wall(col, row)

    def toggle_wall(self, col: int, row: int) -> bool:
        """Toggle a wall; endpoints can't be walled, so those clicks are ignored."""
        if (col, row) in (self.start, self.end):
            return False
        self.grid.toggle_wall(col, row)
        self.discard()
        return True

    def set_start(self, c: Cell) -> None:
        c = tuple(c)
        self._check_endpoints(c, self.end)
        self.start = c
        self.mode = MODE_WALL
        self.discard()

    def set_end(self, c: Cell) -> None:
        c = tuple(c)
        self._check_endpoints(self.start, c)
        self.end = c
        self.mode = MODE_WALL
        self.discard()

    def set_algo(self, algo: str) -> None:
        heuristic_for(algo)
        self.algo = algo
        self.discard()

    def _check_endpoints(self, start: Cell, end: Cell) -> None:
        for label, c in (("start", start), ("end", end)):
            if not self.grid.in_bounds(c):
                raise InvalidEndpoints(f"{label} {c} is outside the grid")
            if self.grid.is_block(c):
                raise InvalidEndpoints(f"{label} {c} is a wall")
        if start == end:
            raise InvalidEndpoints(f"start and end are the same cell {start}")

    # -------------------- search lifecycle --------------------

    def discard(self) -> None:
        self.search = None

    def begin(self) -> SearchState:
        self.search = SearchState.create(self.grid, self.start, self.end,
                                         heuristic=heuristic_for(self.algo),
                                         selection=self.selection)
        logger.debug("%s search started %s -> %s", self.algo, self.start, self.end)
        return self.search

    def step(self) -> StepResult:
        if self.search is None:
            self.begin()
        res = astar.step(self.search)
        res.metrics["algo"] = self.algo
        return res

    @property
    def finished(self) -> bool:
        return self.search is not None and self.search.terminal

    def reset_search(self) -> None:
        self.discard()

    def clear_grid(self) -> None:
        self.grid.clear_walls()
        self.start = (0, 0)
        self.end = (self.grid.width - 1, self.grid.height - 1)
        self.mode = MODE_WALL
        self.discard()

    def snapshot(self) -> Snapshot:
        if self.search is None:
            return Snapshot(status=IDLE, metrics={"algo": self.algo, "popped": 0, "open_size": 0,
                                                  "closed_count": 0, "path_len": 0, "steps": 0})
        snap = astar.snapshot(self.search)
        snap.metrics["algo"] = self.algo
        return snap
