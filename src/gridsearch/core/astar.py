# src/gridsearch/core/astar.py
#!/usr/bin/env python3
"""
A* on a uniform-cost 4-connected grid.

Heuristic:
- Manhattan distance to the end cell. Admissible and consistent for
  4-connected unit moves, so the first time the end is popped its g is optimal.

Priority queue entries are (f, seq, cell): lower f first, then FIFO by seq.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple
import heapq

from gridsearch.core.search import SearchAlgo, manhattan
from gridsearch.core.types import Coord


@dataclass
class AStarAlgo(SearchAlgo):
    name: str = "A*"

    open_pq: List[Tuple[float, int, Coord]] = field(default_factory=list)  # (f, seq, cell)
    open_set: Set[Coord] = field(default_factory=set)
    discovered: Set[Coord] = field(default_factory=set)
    seq: int = 0

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _h(self, c: Coord) -> int:
        return manhattan(c, self.end)

    def _clear_frontier(self) -> None:
        self.open_pq.clear()
        self.open_set.clear()
        self.discovered.clear()
        self.seq = 0

    def _seed(self, s: Coord) -> None:
        cell = self.grid.at(s)
        cell.g_cost = 0
        cell.h_cost = self._h(s)
        cell.f_cost = cell.h_cost
        heapq.heappush(self.open_pq, (cell.f_cost, self._bump(), s))
        self.open_set.add(s)
        self.discovered.add(s)

    def _pop(self) -> Optional[Coord]:
        while self.open_pq:
            f_u, _, u = heapq.heappop(self.open_pq)
            if u in self.closed_set or f_u != self.grid.at(u).f_cost:
                continue
            self.open_set.discard(u)
            return u
        return None

    def _relax(self, u: Coord, v: Coord) -> bool:
        alt = self.grid.at(u).g_cost + 1
        cell = self.grid.at(v)
        if alt >= cell.g_cost:
            return False
        cell.previous = u
        cell.g_cost = alt
        cell.h_cost = self._h(v)
        cell.f_cost = cell.g_cost + cell.h_cost
        heapq.heappush(self.open_pq, (cell.f_cost, self._bump(), v))
        self.open_set.add(v)
        first = v not in self.discovered
        self.discovered.add(v)
        return first

    def _frontier_size(self) -> int:
        return len(self.open_set)
