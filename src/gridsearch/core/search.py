# src/gridsearch/core/search.py
#!/usr/bin/env python3
"""
Shared machinery for the four grid search strategies.

A strategy is stepped one cell transition at a time:

- init(grid, start, end) - reset() - step() -> StepResult   (frame-driven viewers)
- await run(grid, start, end, sink) -> SearchResult          (awaitable sink)

Both drive the same generator, ``transitions()``, which is suspended at
every yield. Nothing on the grid changes between a yield and the next
resume, so a sink that awaits before acknowledging holds the search still.

Subclasses supply the frontier: ``_seed``, ``_pop``, ``_relax`` and
``_frontier_size``.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set

from gridsearch.core.errors import InvalidConfiguration, SinkError
from gridsearch.core.grid import Grid
from gridsearch.core.path import path_transitions, reconstruct_path
from gridsearch.core.sink import CellUpdateSink, null_sink
from gridsearch.core.types import CellState, Coord, SearchResult, StepResult, Transition

logger = logging.getLogger(__name__)


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def validate_endpoints(grid: Grid, start: Optional[Coord], end: Optional[Coord]) -> None:
    for label, c in (("start", start), ("end", end)):
        if c is None:
            raise InvalidConfiguration(f"{label} cell is not set")
        if not grid.in_bounds(c):
            raise InvalidConfiguration(f"{label} cell {c} is outside a {grid.rows}x{grid.cols} grid")
        if grid.is_wall(c):
            raise InvalidConfiguration(f"{label} cell {c} is a wall")


@dataclass
class SearchAlgo:
    name: str = "search"

    grid: Optional[Grid] = None
    start: Optional[Coord] = None
    end: Optional[Coord] = None
    closed_set: Set[Coord] = field(default_factory=set)
    nodes_visited: int = 0
    current: Optional[Coord] = None
    path: Optional[List[Coord]] = None
    done: bool = False
    no_path: bool = False
    aborted: bool = False
    _events: Optional[Iterator[Transition]] = field(default=None, repr=False)

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Optional[Coord] = None, end: Optional[Coord] = None) -> None:
        """Bind to a grid; endpoints default to the grid's own markers."""
        start = tuple(start) if start is not None else grid.start
        end = tuple(end) if end is not None else grid.end
        validate_endpoints(grid, start, end)
        self.grid = grid
        self.start = start
        self.end = end
        self.reset()

    def reset(self) -> None:
        """Forget all progress; the next step starts from the seed again."""
        if self.grid is None:
            return
        if self._events is not None:
            self._events.close()
        self.closed_set.clear()
        self.nodes_visited = 0
        self.current = None
        self.path = None
        self.done = False
        self.no_path = False
        self.aborted = False
        self._clear_frontier()
        self._events = self.transitions()

    # -------------------- frontier hooks --------------------

    def _clear_frontier(self) -> None:
        raise NotImplementedError

    def _seed(self, s: Coord) -> None:
        raise NotImplementedError

    def _pop(self) -> Optional[Coord]:
        """Next cell to expand, or None once the frontier is exhausted."""
        raise NotImplementedError

    def _relax(self, u: Coord, v: Coord) -> bool:
        """Offer ``v`` via ``u``; True when ``v`` is discovered for the first time."""
        raise NotImplementedError

    def _frontier_size(self) -> int:
        raise NotImplementedError

    # -------------------- main stepping logic --------------------

    def transitions(self) -> Iterator[Transition]:
        grid = self.grid
        for cell in grid.iter_cells():
            cell.clear_search()
        self._seed(self.start)

        while True:
            u = self._pop()
            if u is None:
                self.no_path = True
                logger.debug("%s: frontier exhausted after %d nodes", self.name, self.nodes_visited)
                return

            self.current = u
            self.closed_set.add(u)

            # stop when the goal is popped, not when it is first pushed
            if u == self.end:
                self.nodes_visited += 1
                self.path = reconstruct_path(grid, self.start, u)
                yield from path_transitions(grid, self.path, self.name)
                self.done = True
                return

            for v in grid.neighbors4(u):
                if grid.is_wall(v) or v in self.closed_set:
                    continue
                if not self._relax(u, v):
                    continue
                cell = grid.at(v)
                # start/end markers keep their own state
                if v == self.end or cell.state in (CellState.START, CellState.END):
                    continue
                cell.state = CellState.VISITED
                self.nodes_visited += 1
                yield Transition(cell.row, cell.col, CellState.VISITED, self.name)

    def step(self) -> StepResult:
        """Advance by exactly one cell transition."""
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done or self.no_path or self.aborted:
            return self._final_step()

        try:
            t = next(self._events)
        except StopIteration:
            return self._final_step()

        return StepResult(status="running", transition=t, current=self.current,
                          nodes_visited=self.nodes_visited, metrics=self._metrics())

    async def play(self, sink: CellUpdateSink = null_sink) -> SearchResult:
        """Drain the remaining transitions through ``sink``, awaiting each one."""
        if self.grid is None:
            raise InvalidConfiguration(f"{self.name} has no grid; call init() first")
        for t in self._events:
            try:
                await sink(t.row, t.col, t.state, t.algorithm)
            except Exception as exc:
                self.aborted = True
                self._events.close()
                raise SinkError(f"sink rejected {t.state.value} at ({t.row}, {t.col}): {exc}") from exc
        return self.result()

    async def run(self, grid: Grid, start: Coord, end: Coord,
                  sink: CellUpdateSink = null_sink) -> SearchResult:
        self.init(grid, start, end)
        return await self.play(sink)

    def result(self) -> SearchResult:
        return SearchResult(found=self.done, nodes_visited=self.nodes_visited,
                            path=list(self.path or []), algorithm=self.name)

    def _final_step(self) -> StepResult:
        if self.aborted:
            return StepResult(status="aborted", current=self.current,
                              nodes_visited=self.nodes_visited, metrics=self._metrics())
        if self.done:
            return StepResult(status="done", current=self.current, path=self.path,
                              nodes_visited=self.nodes_visited,
                              metrics=self._metrics(path_len=len(self.path)))
        return StepResult(status="no_path", current=self.current,
                          nodes_visited=self.nodes_visited, metrics=self._metrics())

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "nodes_visited": self.nodes_visited,
            "open_size": self._frontier_size(),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
        }
