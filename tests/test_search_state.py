import pytest

from gridpath.core import astar
from gridpath.core.errors import InvalidEndpoints
from gridpath.core.grid import Grid
from gridpath.core.heuristics import manhattan, zero, heuristic_for
from gridpath.core.search_state import SearchState
from gridpath.core.types import OPEN, UNSEEN, NO_PARENT


def test_create_seeds_start_only():
    grid = Grid.create(4, 3)
    state = SearchState.create(grid, (1, 0), (3, 2))
    assert state.membership_of((1, 0)) == OPEN
    assert state.g_of((1, 0)) == 0
    assert state.h_of((1, 0)) == 4
    assert state.f_of((1, 0)) == 4
    assert state.came_from_of((1, 0)) is None
    others = [c for c in ((x, y) for y in range(3) for x in range(4)) if c != (1, 0)]
    assert all(state.membership_of(c) == UNSEEN for c in others)
    assert state.open_count == 1 and state.closed_count == 0
    assert not state.terminal


def test_create_accepts_lists_for_endpoints():
    state = SearchState.create(Grid.create(2, 2), [0, 0], [1, 1])
    assert state.start == (0, 0) and state.end == (1, 1)


@pytest.mark.parametrize("start, end, wall", [
    ((0, 0), (0, 0), None),
    ((1, 1), (0, 0), (1, 1)),
    ((0, 0), (1, 1), (1, 1)),
    ((0, 0), (3, 0), None),
    ((-1, 0), (1, 1), None),
])
def test_invalid_endpoints(start, end, wall):
    grid = Grid.create(3, 3)
    if wall:
        grid.toggle_wall(*wall)
    with pytest.raises(InvalidEndpoints):
        SearchState.create(grid, start, end)


def test_unknown_selection_rejected():
    with pytest.raises(ValueError):
        SearchState.create(Grid.create(2, 2), (0, 0), (1, 1), selection="fibonacci")


def test_reset_after_changing_end_leaves_no_trace():
    grid = Grid.create(5, 5)
    state = SearchState.create(grid, (0, 0), (4, 4))
    astar.run(state)
    assert state.terminal

    state.reset(end=(0, 4))
    fresh = SearchState.create(grid, (0, 0), (0, 4))
    assert state.end == (0, 4)
    assert not state.terminal
    assert state.g == fresh.g
    assert state.h == fresh.h
    assert state.f == fresh.f
    assert state.came_from == [NO_PARENT] * 25
    assert state.membership == fresh.membership
    assert state.popped_count == 0 and state.steps == 0
    assert astar.run(state).path == astar.run(fresh).path


def test_failed_reset_keeps_previous_attempt():
    state = SearchState.create(Grid.create(3, 3), (0, 0), (2, 2))
    astar.step(state)
    with pytest.raises(InvalidEndpoints):
        state.reset(end=(0, 0))
    assert state.end == (2, 2)
    assert state.popped_count == 1


def test_heuristics():
    assert manhattan((0, 0), (3, 4)) == 7
    assert manhattan((5, 1), (2, 3)) == 5
    assert zero((0, 0), (9, 9)) == 0
    assert heuristic_for("A*") is manhattan
    assert heuristic_for("Dijkstra") is zero
    with pytest.raises(ValueError):
        heuristic_for("greedy")
