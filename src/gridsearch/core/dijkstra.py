# src/gridsearch/core/dijkstra.py
#!/usr/bin/env python3
"""
Dijkstra on a uniform-cost 4-connected grid.

- Every cell starts at g = inf; the start is seeded with g = 0.
- Pop the lowest g (FIFO among equals via a monotonic seq).
- Relax: alt = g[u] + 1; if alt < g[v], update g and back-pointer, push.
- A popped cell still at g = inf means everything left is unreachable.
"""

from dataclasses import dataclass, field
from math import inf
from typing import List, Optional, Set, Tuple
import heapq

from gridsearch.core.search import SearchAlgo
from gridsearch.core.types import Coord


@dataclass
class DijkstraAlgo(SearchAlgo):
    name: str = "Dijkstra"

    open_pq: List[Tuple[float, int, Coord]] = field(default_factory=list)   # (g, seq, cell)
    open_set: Set[Coord] = field(default_factory=set)
    discovered: Set[Coord] = field(default_factory=set)
    seq: int = 0  # monotonic counter for PQ stability

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _clear_frontier(self) -> None:
        self.open_pq.clear()
        self.open_set.clear()
        self.discovered.clear()
        self.seq = 0

    def _seed(self, s: Coord) -> None:
        self.grid.at(s).g_cost = 0
        heapq.heappush(self.open_pq, (0, self._bump(), s))
        self.open_set.add(s)
        self.discovered.add(s)

    def _pop(self) -> Optional[Coord]:
        while self.open_pq:
            g_u, _, u = heapq.heappop(self.open_pq)
            # ignore stale pops
            if u in self.closed_set or g_u != self.grid.at(u).g_cost:
                continue
            if g_u == inf:
                return None
            self.open_set.discard(u)
            return u
        return None

    def _relax(self, u: Coord, v: Coord) -> bool:
        alt = self.grid.at(u).g_cost + 1
        cell = self.grid.at(v)
        if alt >= cell.g_cost:
            return False
        cell.g_cost = alt
        cell.previous = u
        heapq.heappush(self.open_pq, (alt, self._bump(), v))
        self.open_set.add(v)
        first = v not in self.discovered
        self.discovered.add(v)
        return first

    def _frontier_size(self) -> int:
        return len(self.open_set)
