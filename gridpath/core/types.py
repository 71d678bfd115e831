# gridpath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict, Any, FrozenSet

Cell = Tuple[int, int]  # (col, row)

# step statuses ("idle" only ever appears in controller snapshots)
IDLE = "idle"
RUNNING = "running"
FOUND = "found"
UNREACHABLE = "unreachable"
TERMINAL = (FOUND, UNREACHABLE)

# per-cell membership
UNSEEN = 0
OPEN = 1
CLOSED = 2

NO_PARENT = -1  # came_from sentinel (indices into the grid's cell table)


@dataclass
class StepResult:
    status: str                   # "running" | "found" | "unreachable"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def terminal(self) -> bool:
        return self.status in TERMINAL


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time copy of a search, safe to hand to a renderer."""
    status: str
    open_cells: FrozenSet[Cell] = frozenset()
    closed_cells: FrozenSet[Cell] = frozenset()
    path: Tuple[Cell, ...] = ()
    current: Optional[Cell] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
