# src/gridsearch/core/grid.py
#!/usr/bin/env python3
"""
Grid model. Owns every Cell plus the start/end markers.

Lifecycle:
- initialize(rows, cols)     -> all cells empty, costs inf
- reset_all()                -> also clears walls/start/end
- reset_search_state()       -> clears visited/path + costs, keeps walls/start/end

Both resets call the optional ``on_reset(row, col, state)`` hook for each
cell whose visible state changed, so a renderer can strip its overlays.
"""

from typing import Callable, Iterator, List, Optional

from gridsearch.core.errors import InvalidConfiguration
from gridsearch.core.types import Cell, CellState, Coord, SEARCH_STATES

DEFAULT_ROWS = 20
DEFAULT_COLS = 50

ResetHook = Callable[[int, int, CellState], None]


class Grid:
    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS,
                 on_reset: Optional[ResetHook] = None):
        self.on_reset = on_reset
        self.rows = 0
        self.cols = 0
        self.cells: List[List[Cell]] = []   # [row][col]
        self.start: Optional[Coord] = None
        self.end: Optional[Coord] = None
        self.initialize(rows, cols)

    # -------------------- lifecycle --------------------

    def initialize(self, rows: int, cols: int) -> None:
        if rows <= 0 or cols <= 0:
            raise InvalidConfiguration(f"grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.cells = [[Cell(r, c) for c in range(cols)] for r in range(rows)]
        self.start = None
        self.end = None

    def reset_all(self) -> None:
        for cell in self.iter_cells():
            changed = cell.state is not CellState.EMPTY
            cell.state = CellState.EMPTY
            cell.clear_search()
            if changed:
                self._notify_reset(cell)
        self.start = None
        self.end = None

    def reset_search_state(self) -> None:
        for cell in self.iter_cells():
            changed = cell.state in SEARCH_STATES
            if changed:
                cell.state = CellState.EMPTY
            cell.clear_search()
            if changed:
                self._notify_reset(cell)

    def _notify_reset(self, cell: Cell) -> None:
        if self.on_reset is not None:
            self.on_reset(cell.row, cell.col, cell.state)

    # -------------------- access --------------------

    def in_bounds(self, c: Coord) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds((row, col)):
            raise InvalidConfiguration(f"cell ({row}, {col}) is outside a {self.rows}x{self.cols} grid")
        return self.cells[row][col]

    def at(self, c: Coord) -> Cell:
        return self.cell(*c)

    def is_wall(self, c: Coord) -> bool:
        r, col = c
        return self.cells[r][col].state is CellState.WALL

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def neighbors4(self, c: Coord) -> List[Coord]:
        """In-bounds axis neighbours in up, down, left, right order."""
        r, col = c
        out: List[Coord] = []
        for n in ((r - 1, col), (r + 1, col), (r, col - 1), (r, col + 1)):
            if self.in_bounds(n):
                out.append(n)
        return out

    def walls(self) -> List[Coord]:
        return [cell.coord for cell in self.iter_cells() if cell.state is CellState.WALL]

    # -------------------- editor --------------------

    def set_cell_state(self, row: int, col: int, state: CellState) -> None:
        """Direct mutation used by the grid editor.

        Start and end are unique: placing one moves it off its previous cell.
        """
        cell = self.cell(row, col)
        state = CellState(state)
        coord = (row, col)

        if state is CellState.START and self.start is not None and self.start != coord:
            self.cells[self.start[0]][self.start[1]].state = CellState.EMPTY
        if state is CellState.END and self.end is not None and self.end != coord:
            self.cells[self.end[0]][self.end[1]].state = CellState.EMPTY

        # overwriting a marker with something else drops it
        if self.start == coord and state is not CellState.START:
            self.start = None
        if self.end == coord and state is not CellState.END:
            self.end = None

        cell.state = state
        if state is CellState.START:
            self.start = coord
        elif state is CellState.END:
            self.end = coord

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols}, start={self.start}, end={self.end})"
