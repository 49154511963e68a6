# src/gridsearch/core/dfs.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Optional, Set

from gridsearch.core.search import SearchAlgo
from gridsearch.core.types import Coord


@dataclass
class DFSAlgo(SearchAlgo):
    """Depth-first search: LIFO frontier. Finds a path, not necessarily the shortest."""

    name: str = "DFS"

    stack: List[Coord] = field(default_factory=list)
    seen: Set[Coord] = field(default_factory=set)

    def _clear_frontier(self) -> None:
        self.stack.clear()
        self.seen.clear()

    def _seed(self, s: Coord) -> None:
        self.grid.at(s).g_cost = 0
        self.stack.append(s)
        self.seen.add(s)

    def _pop(self) -> Optional[Coord]:
        if not self.stack:
            return None
        return self.stack.pop()

    def _relax(self, u: Coord, v: Coord) -> bool:
        if v in self.seen:
            return False
        self.seen.add(v)
        cell = self.grid.at(v)
        # depth along the discovered branch, not a distance
        cell.g_cost = self.grid.at(u).g_cost + 1
        cell.previous = u
        self.stack.append(v)
        return True

    def _frontier_size(self) -> int:
        return len(self.stack)
