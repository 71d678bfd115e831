# gridpath/core/astar.py
#!/usr/bin/env python3
"""
A* stepper — one expansion per step() so the caller can animate the search.

State machine:  running -> found | unreachable  (both terminal)

- step() on a terminal state hands back the same terminal result again
  (deterministic no-op), so callers may keep ticking after the end.
- step() on a state whose grid walls changed since create/reset raises
  InvalidState: its costs and back-pointers describe a different maze.

Edge cost is 1 (4-connected, unweighted). The heuristic comes from the state.
"""

import logging
from typing import FrozenSet, List, Optional

from gridpath.core.errors import InvalidState
from gridpath.core.search_state import SearchState
from gridpath.core.types import (
    Cell, Snapshot, StepResult, RUNNING, FOUND, UNREACHABLE, OPEN, CLOSED,
)

logger = logging.getLogger(__name__)

STEP_COST = 1


def step(state: SearchState) -> StepResult:
    """Run ONE expansion: pick min-f, finish if it is the end, else relax neighbours."""
    if state.result is not None:
        return state.result
    if state.is_stale:
        raise InvalidState(
            f"grid changed (revision {state.revision} -> {state.grid.revision}); reset the search")

    state.steps += 1
    if state.open_count == 0:
        state.result = StepResult(status=UNREACHABLE, metrics=_metrics(state))
        logger.debug("no path %s -> %s after %d steps", state.start, state.end, state.steps)
        return state.result

    grid = state.grid
    u = state.select_min()
    state.last_selected = u
    state.popped_count += 1
    cu = grid.cell_at(u)

    if cu == state.end:
        path = state.chain_to(u)
        state.result = StepResult(status=FOUND, current=cu, path=path,
                                  metrics=_metrics(state, path_len=len(path)))
        logger.debug("path %s -> %s found after %d steps, %d cells",
                     state.start, state.end, state.steps, len(path))
        return state.result

    state.close(u)

    opened_now: List[Cell] = []
    for v in grid.neighbors4(cu):
        if grid.is_block(v):
            continue
        i = grid.index_of(v)
        if state.membership[i] == CLOSED:
            continue
        alt = state.g[u] + STEP_COST
        is_open = state.membership[i] == OPEN
        if not is_open or alt < state.g[i]:
            state.g[i] = alt
            state.h[i] = state.heuristic(v, state.end)
            state.f[i] = state.g[i] + state.h[i]
            state.came_from[i] = u
            if is_open:
                state.decrease(i)
            else:
                state.add_open(i)
                opened_now.append(v)

    return StepResult(status=RUNNING, opened=opened_now, closed=[cu], current=cu,
                      metrics=_metrics(state))


def run(state: SearchState, max_steps: Optional[int] = None) -> StepResult:
    """Step until terminal, or until ``max_steps`` expansions have been made."""
    res = step(state)
    taken = 1
    while not res.terminal and (max_steps is None or taken < max_steps):
        res = step(state)
        taken += 1
    return res


# -------------------- snapshot accessors (read-only) --------------------

def open_cells(state: SearchState) -> FrozenSet[Cell]:
    return frozenset(state.grid.cell_at(i) for i in state.open_order)


def closed_cells(state: SearchState) -> FrozenSet[Cell]:
    return frozenset(state.grid.cell_at(i) for i, m in enumerate(state.membership) if m == CLOSED)


def best_path_so_far(state: SearchState) -> List[Cell]:
    """Predecessor chain of the most recently selected cell; the full path once found."""
    if state.result is not None:
        return list(state.result.path or [])
    return state.chain_to(state.last_selected)


def snapshot(state: SearchState) -> Snapshot:
    status = state.result.status if state.result is not None else RUNNING
    return Snapshot(
        status=status,
        open_cells=open_cells(state),
        closed_cells=closed_cells(state),
        path=tuple(best_path_so_far(state)),
        current=state.grid.cell_at(state.last_selected),
        metrics=_metrics(state, path_len=len(state.result.path) if status == FOUND else 0),
    )


def _metrics(state: SearchState, path_len: int = 0) -> dict:
    return {
        "popped": state.popped_count,
        "open_size": state.open_count,
        "closed_count": state.closed_count,
        "path_len": path_len,
        "steps": state.steps,
    }
