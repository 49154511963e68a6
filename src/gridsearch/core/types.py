# src/gridsearch/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from math import inf
from typing import List, NamedTuple, Optional, Tuple

Coord = Tuple[int, int]  # (row, col)


class CellState(str, Enum):
    EMPTY = "empty"
    START = "start"
    END = "end"
    WALL = "wall"
    VISITED = "visited"
    PATH = "path"


# states only the search engine may assign
SEARCH_STATES = (CellState.VISITED, CellState.PATH)


@dataclass
class Cell:
    row: int
    col: int
    state: CellState = CellState.EMPTY
    g_cost: float = inf
    h_cost: float = inf
    f_cost: float = inf
    previous: Optional[Coord] = None   # back-pointer as (row, col)

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    def clear_search(self) -> None:
        self.g_cost = inf
        self.h_cost = inf
        self.f_cost = inf
        self.previous = None


class Transition(NamedTuple):
    row: int
    col: int
    state: CellState
    algorithm: str


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path" | "aborted"
    transition: Optional[Transition] = None
    current: Optional[Coord] = None
    path: Optional[List[Coord]] = None
    nodes_visited: int = 0
    metrics: dict = field(default_factory=dict)


@dataclass
class SearchResult:
    found: bool
    nodes_visited: int
    path: List[Coord] = field(default_factory=list)
    algorithm: str = ""

    @property
    def path_len(self) -> int:
        return len(self.path)
