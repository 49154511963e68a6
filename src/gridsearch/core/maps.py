# src/gridsearch/core/maps.py
#!/usr/bin/env python3
"""
Map files and text diagrams.

JSON layout:
    {"rows": 5, "cols": 5, "start": [0, 0], "end": [4, 4],
     "cells": [[0, 0, 1, 0, 0], ...]}          # 1 = wall, [row][col]

Text diagram, one line per row:
    .  empty    #  wall    S  start    E  end    o  visited    *  path
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from gridsearch.core.errors import InvalidConfiguration, MapFormatError
from gridsearch.core.grid import Grid
from gridsearch.core.types import CellState

logger = logging.getLogger(__name__)

MAP_DIR = Path(__file__).resolve().parents[1] / "maps"
MAP_FILES = {
    "01_open_field": MAP_DIR / "01_open_field.json",
    "02_wall_gap":   MAP_DIR / "02_wall_gap.json",
    "03_maze":       MAP_DIR / "03_maze.json",
}

SYMBOLS: Dict[CellState, str] = {
    CellState.EMPTY: ".",
    CellState.WALL: "#",
    CellState.START: "S",
    CellState.END: "E",
    CellState.VISITED: "o",
    CellState.PATH: "*",
}
_STATE_OF = {v: k for k, v in SYMBOLS.items()}


# ---------- JSON ----------
def _coord(value, label: str):
    try:
        r, c = value
        return int(r), int(c)
    except (TypeError, ValueError) as exc:
        raise MapFormatError(f"{label} must be [row, col], got {value!r}") from exc


def grid_from_dict(data: dict) -> Grid:
    try:
        rows = int(data["rows"])
        cols = int(data["cols"])
        cells = data["cells"]
        start = data.get("start")
        end = data.get("end")
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise MapFormatError(f"malformed map: {exc}") from exc

    if not isinstance(cells, list) or not all(isinstance(r, list) for r in cells):
        raise MapFormatError("cells must be a list of rows")
    if len(cells) != rows or any(len(r) != cols for r in cells):
        raise MapFormatError("cells size mismatch")

    try:
        grid = Grid(rows, cols)
    except InvalidConfiguration as exc:
        raise MapFormatError(str(exc)) from exc
    for r, line in enumerate(cells):
        for c, v in enumerate(line):
            if v == 1:
                grid.set_cell_state(r, c, CellState.WALL)
            elif v != 0:
                raise MapFormatError(f"unknown cell value {v!r} at ({r}, {c})")
    try:
        if start is not None:
            grid.set_cell_state(*_coord(start, "start"), CellState.START)
        if end is not None:
            grid.set_cell_state(*_coord(end, "end"), CellState.END)
    except InvalidConfiguration as exc:
        raise MapFormatError(str(exc)) from exc
    return grid


def grid_to_dict(grid: Grid) -> dict:
    return {
        "rows": grid.rows,
        "cols": grid.cols,
        "start": list(grid.start) if grid.start else None,
        "end": list(grid.end) if grid.end else None,
        "cells": [[1 if cell.state is CellState.WALL else 0 for cell in row] for row in grid.cells],
    }


def load_map(path: Union[str, Path]) -> Grid:
    path = Path(path)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to load map %s: %s", path, exc)
        raise MapFormatError(f"cannot read {path}: {exc}") from exc
    grid = grid_from_dict(data)
    logger.debug("Loaded %s: %r", path.name, grid)
    return grid


def save_map(grid: Grid, path: Union[str, Path]) -> None:
    with open(path, "w") as f:
        json.dump(grid_to_dict(grid), f, indent=2)


# ---------- text diagrams ----------
def parse_diagram(text: str) -> Grid:
    lines = [ln.strip() for ln in text.strip().splitlines() if ln.strip()]
    if not lines:
        raise MapFormatError("empty diagram")
    cols = len(lines[0])
    if any(len(ln) != cols for ln in lines):
        raise MapFormatError("diagram rows differ in length")

    grid = Grid(len(lines), cols)
    for r, line in enumerate(lines):
        for c, ch in enumerate(line):
            state = _STATE_OF.get(ch)
            if state is None:
                raise MapFormatError(f"unknown symbol {ch!r} at ({r}, {c})")
            if state is CellState.EMPTY:
                continue
            if state in (CellState.START, CellState.END) and getattr(grid, state.value) is not None:
                raise MapFormatError(f"more than one {state.value} cell")
            if state in (CellState.VISITED, CellState.PATH):
                grid.cell(r, c).state = state
            else:
                grid.set_cell_state(r, c, state)
    return grid


def render_diagram(grid: Grid, path: Optional[List] = None) -> str:
    """Text picture of the grid; ``path`` cells are drawn as '*' when given."""
    marked = set(map(tuple, path or []))
    out = []
    for row in grid.cells:
        chars = []
        for cell in row:
            if cell.coord in marked and cell.state not in (CellState.START, CellState.END):
                chars.append(SYMBOLS[CellState.PATH])
            else:
                chars.append(SYMBOLS[cell.state])
        out.append("".join(chars))
    return "\n".join(out)
