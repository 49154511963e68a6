import asyncio

import pytest

from gridsearch.core.grid import Grid
from gridsearch.core.types import CellState, Transition


class RecordingSink:
    """Sink that stores every notification, optionally checking the grid at call time."""

    def __init__(self, grid=None):
        self.grid = grid
        self.calls = []
        self.snapshots = []

    async def __call__(self, row, col, state, algorithm):
        self.calls.append(Transition(row, col, state, algorithm))
        if self.grid is not None:
            self.snapshots.append(sum(1 for c in self.grid.iter_cells() if c.state is state))

    def cells(self, state):
        return [(t.row, t.col) for t in self.calls if t.state is state]


@pytest.fixture
def recorder():
    return RecordingSink()


@pytest.fixture
def empty_5x5():
    grid = Grid(5, 5)
    grid.set_cell_state(0, 0, CellState.START)
    grid.set_cell_state(4, 4, CellState.END)
    return grid


@pytest.fixture
def walled_5x5(empty_5x5):
    for c in range(5):
        empty_5x5.set_cell_state(2, c, CellState.WALL)
    return empty_5x5


def run(coro):
    return asyncio.run(coro)
