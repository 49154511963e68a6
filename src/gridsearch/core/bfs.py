# src/gridsearch/core/bfs.py
#!/usr/bin/env python3
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Set

from gridsearch.core.search import SearchAlgo
from gridsearch.core.types import Coord


@dataclass
class BFSAlgo(SearchAlgo):
    """Breadth-first search: FIFO frontier, first sighting is the shortest route."""

    name: str = "BFS"

    queue: Deque[Coord] = field(default_factory=deque)
    seen: Set[Coord] = field(default_factory=set)

    def _clear_frontier(self) -> None:
        self.queue.clear()
        self.seen.clear()

    def _seed(self, s: Coord) -> None:
        self.grid.at(s).g_cost = 0
        self.queue.append(s)
        self.seen.add(s)

    def _pop(self) -> Optional[Coord]:
        if not self.queue:
            return None
        return self.queue.popleft()

    def _relax(self, u: Coord, v: Coord) -> bool:
        if v in self.seen:
            return False
        self.seen.add(v)
        cell = self.grid.at(v)
        cell.g_cost = self.grid.at(u).g_cost + 1
        cell.previous = u
        self.queue.append(v)
        return True

    def _frontier_size(self) -> int:
        return len(self.queue)
