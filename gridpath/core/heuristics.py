# gridpath/core/heuristics.py
"""Heuristics for unit-cost, 4-connected grids."""

from typing import Callable, Dict

from gridpath.core.types import Cell

Heuristic = Callable[[Cell, Cell], int]


def manhattan(a: Cell, b: Cell) -> int:
    """|dcol| + |drow|; admissible and consistent for 4-connected unit moves."""
    (x, y) = a
    (gx, gy) = b
    return abs(gx - x) + abs(gy - y)


def zero(a: Cell, b: Cell) -> int:
    """No estimate at all: A* degenerates to Dijkstra / uniform-cost search."""
    return 0


# algorithm label -> heuristic
ALGORITHMS: Dict[str, Heuristic] = {
    "A*": manhattan,
    "Dijkstra": zero,
}


def heuristic_for(algo: str) -> Heuristic:
    try:
        return ALGORITHMS[algo]
    except KeyError:
        raise ValueError(f"unknown algorithm {algo!r}; expected one of {sorted(ALGORITHMS)}") from None
