# gridpath/core/grid.py
#!/usr/bin/env python3
"""
Grid — fixed dimensions, mutable wall flags, derived 4-adjacency.

Cells are addressed by (col, row) or by their flat index ``row * width + col``
in the cell table; search bookkeeping stores the latter.
"""

from dataclasses import dataclass, field
from typing import List, Iterator

from gridpath.core.errors import InvalidDimensions, OutOfBounds
from gridpath.core.types import Cell

OPEN_CELL = 0
WALL = 1


@dataclass
class Grid:
    width: int
    height: int
    cells: List[List[int]] = field(default_factory=list)   # [row][col]
    revision: int = 0                                       # bumped on every wall change

    @classmethod
    def create(cls, cols: int, rows: int) -> "Grid":
        """All-open grid of ``cols`` x ``rows`` cells."""
        if isinstance(cols, bool) or isinstance(rows, bool) \
                or not isinstance(cols, int) or not isinstance(rows, int):
            raise InvalidDimensions(f"grid size must be integers, got {cols!r} x {rows!r}")
        if cols <= 0 or rows <= 0:
            raise InvalidDimensions(f"grid size must be positive, got {cols} x {rows}")
        return cls(cols, rows, [[OPEN_CELL] * cols for _ in range(rows)])

    @property
    def size(self) -> int:
        return self.width * self.height

    # -------------------- queries --------------------

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, col: int, row: int) -> None:
        if not self.in_bounds((col, row)):
            raise OutOfBounds(col, row, self.width, self.height)

    def is_wall(self, col: int, row: int) -> bool:
        self._check(col, row)
        return self.cells[row][col] == WALL

    def is_block(self, c: Cell) -> bool:
        x, y = c
        return self.is_wall(x, y)

    def index_of(self, c: Cell) -> int:
        x, y = c
        self._check(x, y)
        return y * self.width + x

    def cell_at(self, index: int) -> Cell:
        if not 0 <= index < self.size:
            raise OutOfBounds(index % self.width, index // self.width, self.width, self.height)
        return (index % self.width, index // self.width)

    def neighbors4(self, c: Cell) -> List[Cell]:
        """In-bounds edge neighbours in +col, -col, +row, -row order. Walls included."""
        x, y = c
        candidates = [(x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)]
        return [n for n in candidates if self.in_bounds(n)]

    neighbors_of = neighbors4

    def wall_cells(self) -> Iterator[Cell]:
        for row in range(self.height):
            for col in range(self.width):
                if self.cells[row][col] == WALL:
                    yield (col, row)

    # -------------------- mutation --------------------

    def set_wall(self, col: int, row: int, value: bool = True) -> None:
        self._check(col, row)
        new = WALL if value else OPEN_CELL
        if self.cells[row][col] != new:
            self.cells[row][col] = new
            self.revision += 1

    def toggle_wall(self, col: int, row: int) -> None:
        self.set_wall(col, row, not self.is_wall(col, row))

    def clear_walls(self) -> None:
        changed = False
        for r in self.cells:
            for col, v in enumerate(r):
                if v == WALL:
                    r[col] = OPEN_CELL
                    changed = True
        if changed:
            self.revision += 1
