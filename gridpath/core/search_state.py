# gridpath/core/search_state.py
#!/usr/bin/env python3
"""
SearchState — the mutable A* bookkeeping for ONE attempt over a fixed grid,
start and end.

Per-cell data lives in flat lists indexed by the grid's cell table
(``row * width + col``); ``came_from`` stores predecessor indices, never cells,
so copying or discarding a state can't leave dangling references.

Open-set ordering:
- ``open_order`` keeps open cells in insertion order (the "scan" strategy
  picks the first minimum-f cell in this list).
- ``open_pq`` holds ``(f, seq, index)`` entries with lazy deletion (the "heap"
  strategy). ``seq`` is assigned once, when a cell first opens, so both
  strategies break f-ties the same way.
"""

import heapq
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from gridpath.core.errors import InvalidEndpoints
from gridpath.core.grid import Grid
from gridpath.core.heuristics import Heuristic, manhattan
from gridpath.core.types import Cell, StepResult, UNSEEN, OPEN, CLOSED, NO_PARENT

logger = logging.getLogger(__name__)

SELECTIONS = ("heap", "scan")


@dataclass
class SearchState:
    grid: Grid
    start: Cell
    end: Cell
    heuristic: Heuristic = manhattan
    selection: str = "heap"

    # Internal state
    g: List[int] = field(default_factory=list, repr=False)
    h: List[int] = field(default_factory=list, repr=False)
    f: List[int] = field(default_factory=list, repr=False)
    came_from: List[int] = field(default_factory=list, repr=False)
    membership: List[int] = field(default_factory=list, repr=False)
    open_order: List[int] = field(default_factory=list, repr=False)
    open_pq: List[Tuple[int, int, int]] = field(default_factory=list, repr=False)  # (f, seq, index)
    seq_of: Dict[int, int] = field(default_factory=dict, repr=False)
    seq: int = 0
    revision: int = 0
    popped_count: int = 0
    steps: int = 0
    last_selected: int = NO_PARENT
    result: Optional[StepResult] = None   # set once the search is terminal

    def __post_init__(self):
        if self.selection not in SELECTIONS:
            raise ValueError(f"selection must be one of {SELECTIONS}, got {self.selection!r}")
        self.reset()

    # -------------------- lifecycle --------------------

    @classmethod
    def create(cls, grid: Grid, start: Cell, end: Cell, heuristic: Heuristic = manhattan,
               selection: str = "heap") -> "SearchState":
        return cls(grid, tuple(start), tuple(end), heuristic, selection)

    def reset(self, start: Optional[Cell] = None, end: Optional[Cell] = None) -> None:
        """Re-validate and reinitialise in place; same as discarding and recreating."""
        start = tuple(start) if start is not None else tuple(self.start)
        end = tuple(end) if end is not None else tuple(self.end)
        self._validate(start, end)
        self.start, self.end = start, end

        n = self.grid.size
        self.g = [0] * n
        self.h = [0] * n
        self.f = [0] * n
        self.came_from = [NO_PARENT] * n
        self.membership = [UNSEEN] * n
        self.open_order = []
        self.open_pq = []
        self.seq_of = {}
        self.seq = 0
        self.revision = self.grid.revision
        self.popped_count = 0
        self.steps = 0
        self.result = None

        s = self.grid.index_of(start)
        self.h[s] = self.heuristic(start, end)
        self.f[s] = self.h[s]
        self.add_open(s)
        self.last_selected = s
        logger.debug("search initialised on %dx%d grid: %s -> %s",
                     self.grid.width, self.grid.height, start, end)

    def _validate(self, start: Cell, end: Cell) -> None:
        for label, c in (("start", start), ("end", end)):
            if len(c) != 2 or not self.grid.in_bounds(c):
                raise InvalidEndpoints(f"{label} {c} is outside the grid")
            if self.grid.is_block(c):
                raise InvalidEndpoints(f"{label} {c} is a wall")
        if start == end:
            raise InvalidEndpoints(f"start and end are the same cell {start}")

    @property
    def is_stale(self) -> bool:
        """True once the grid's walls changed after this state was built."""
        return self.revision != self.grid.revision

    @property
    def terminal(self) -> bool:
        return self.result is not None

    # -------------------- open / closed bookkeeping --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def add_open(self, i: int) -> None:
        self.membership[i] = OPEN
        self.seq_of[i] = self._bump()
        self.open_order.append(i)
        if self.selection == "heap":
            heapq.heappush(self.open_pq, (self.f[i], self.seq_of[i], i))

    def decrease(self, i: int) -> None:
        """Re-key an open cell after its f dropped; the old heap entry goes stale."""
        if self.selection == "heap":
            heapq.heappush(self.open_pq, (self.f[i], self.seq_of[i], i))

    def close(self, i: int) -> None:
        self.membership[i] = CLOSED
        self.open_order.remove(i)

    @property
    def open_count(self) -> int:
        return len(self.open_order)

    @property
    def closed_count(self) -> int:
        return sum(1 for m in self.membership if m == CLOSED)

    def select_min(self) -> int:
        """Index of the open cell with minimum f, earliest-inserted on ties."""
        if self.selection == "scan":
            best = self.open_order[0]
            for i in self.open_order:
                if self.f[i] < self.f[best]:
                    best = i
            return best
        while True:
            f_i, seq_i, i = self.open_pq[0]
            if self.membership[i] == OPEN and f_i == self.f[i]:
                return i
            heapq.heappop(self.open_pq)   # stale entry

    # -------------------- read-only accessors --------------------

    def membership_of(self, c: Cell) -> int:
        return self.membership[self.grid.index_of(c)]

    def g_of(self, c: Cell) -> int:
        return self.g[self.grid.index_of(c)]

    def h_of(self, c: Cell) -> int:
        return self.h[self.grid.index_of(c)]

    def f_of(self, c: Cell) -> int:
        return self.f[self.grid.index_of(c)]

    def came_from_of(self, c: Cell) -> Optional[Cell]:
        p = self.came_from[self.grid.index_of(c)]
        return None if p == NO_PARENT else self.grid.cell_at(p)

    def chain_to(self, i: int) -> List[Cell]:
        """Cells from start to cell ``i`` following came_from links."""
        path: List[Cell] = []
        cur = i
        while cur != NO_PARENT:
            path.append(self.grid.cell_at(cur))
            cur = self.came_from[cur]
        path.reverse()
        return path
