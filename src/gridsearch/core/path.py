# src/gridsearch/core/path.py
#!/usr/bin/env python3
from typing import Iterator, List

from gridsearch.core.errors import PathReconstructionError
from gridsearch.core.grid import Grid
from gridsearch.core.types import CellState, Coord, Transition


def reconstruct_path(grid: Grid, start: Coord, end: Coord) -> List[Coord]:
    """Follow back-pointers from ``end`` to ``start``; returns start -> end."""
    path: List[Coord] = []
    cur = end
    limit = grid.rows * grid.cols
    while True:
        path.append(cur)
        if cur == start:
            break
        prev = grid.at(cur).previous
        if prev is None:
            raise PathReconstructionError(f"{end} was never reached from {start}")
        if len(path) > limit:
            raise PathReconstructionError(f"back-pointer chain from {end} does not terminate")
        cur = prev
    path.reverse()
    return path


def path_transitions(grid: Grid, path: List[Coord], algorithm: str = "") -> Iterator[Transition]:
    """Mark interior path cells as ``path`` in start -> end order, one yield per cell."""
    for coord in path[1:-1]:
        cell = grid.at(coord)
        if cell.state in (CellState.START, CellState.END, CellState.WALL):
            continue
        cell.state = CellState.PATH
        yield Transition(cell.row, cell.col, CellState.PATH, algorithm)
