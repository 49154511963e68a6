# src/gridsearch/core/runner.py
#!/usr/bin/env python3
"""
Orchestrator: algorithm registry, run configuration and status text.

The selected algorithm and the status slot travel with each run as a
``RunConfig`` instead of living in module globals, so two viewers never
overwrite each other's selection.
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Type

from gridsearch.core.astar import AStarAlgo
from gridsearch.core.bfs import BFSAlgo
from gridsearch.core.dfs import DFSAlgo
from gridsearch.core.dijkstra import DijkstraAlgo
from gridsearch.core.errors import InvalidConfiguration, SinkError
from gridsearch.core.grid import Grid
from gridsearch.core.search import SearchAlgo, validate_endpoints
from gridsearch.core.sink import CellUpdateSink, null_sink
from gridsearch.core.types import Coord, SearchResult, StepResult

logger = logging.getLogger(__name__)

ALGORITHMS: Dict[str, Type[SearchAlgo]] = {
    "A*": AStarAlgo,
    "BFS": BFSAlgo,
    "DFS": DFSAlgo,
    "Dijkstra": DijkstraAlgo,
}
DEFAULT_ALGORITHM = "A*"
ALGO_ENV = "GRIDSEARCH_ALGO"

READY = "Ready"
NOT_IMPLEMENTED = "Algorithm not implemented"


def running_text(label: str) -> str:
    return f"Running {label}..."


def found_text(nodes_visited: int) -> str:
    return f"Path found! Nodes visited: {nodes_visited}"


def not_found_text(nodes_visited: int) -> str:
    return f"No path found. Nodes visited: {nodes_visited}"


class StatusChannel:
    """Single mutable string slot with optional change listeners."""

    def __init__(self, message: str = READY):
        self._message = message
        self._listeners: List[Callable[[str], None]] = []

    @property
    def message(self) -> str:
        return self._message

    @message.setter
    def message(self, value: str) -> None:
        self._message = value
        for listener in self._listeners:
            listener(value)

    def subscribe(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def __str__(self) -> str:
        return self._message


@dataclass
class RunConfig:
    algorithm: str = DEFAULT_ALGORITHM
    status: StatusChannel = field(default_factory=StatusChannel)


def make_algo(label: str) -> SearchAlgo:
    try:
        cls = ALGORITHMS[label]
    except KeyError:
        raise InvalidConfiguration(
            f"unknown algorithm {label!r}; choose from {', '.join(ALGORITHMS)}") from None
    return cls(name=label)


def normalize_label(value: str) -> str:
    """Case-insensitive match against the registry ('astar' and 'a-star' mean A*)."""
    key = value.strip().lower().replace("-", "").replace("_", "")
    if key in ("astar", "a*"):
        return "A*"
    for label in ALGORITHMS:
        if label.lower() == key:
            return label
    return value


def resolve_algorithm(argv: Optional[Sequence[str]] = None,
                      environ: Optional[Mapping[str, str]] = None) -> str:
    """``--algo=<label>`` beats ``$GRIDSEARCH_ALGO`` beats the default."""
    argv = sys.argv if argv is None else argv
    environ = os.environ if environ is None else environ
    label = environ.get(ALGO_ENV, DEFAULT_ALGORITHM)
    for arg in argv:
        if arg.startswith("--algo="):
            label = arg.split("=", 1)[1]
    return normalize_label(label)


class SearchRun:
    """One run of the selected algorithm against a grid.

    Construction validates the endpoints, clears the previous run's
    visited/path cells and posts "Running <Algorithm>...". The run is then
    either stepped (``step``) or drained through a sink (``play``).
    """

    def __init__(self, grid: Grid, start: Optional[Coord] = None, end: Optional[Coord] = None,
                 config: Optional[RunConfig] = None):
        self.config = config or RunConfig()
        self.status = self.config.status
        self.grid = grid
        self.start = tuple(start) if start is not None else grid.start
        self.end = tuple(end) if end is not None else grid.end

        try:
            self.algo = make_algo(self.config.algorithm)
        except InvalidConfiguration:
            self.status.message = NOT_IMPLEMENTED
            raise
        validate_endpoints(grid, self.start, self.end)

        grid.reset_search_state()
        self.algo.init(grid, self.start, self.end)
        self.finished = False
        self.status.message = running_text(self.algo.name)
        logger.info("%s: %s -> %s on %dx%d grid", self.algo.name, self.start, self.end,
                    grid.rows, grid.cols)

    @property
    def label(self) -> str:
        return self.algo.name

    def step(self) -> StepResult:
        res = self.algo.step()
        if res.status in ("done", "no_path") and not self.finished:
            self._finish()
        return res

    async def play(self, sink: CellUpdateSink = null_sink) -> SearchResult:
        if self.finished:
            return self.algo.result()
        try:
            await self.algo.play(sink)
        except SinkError as exc:
            self.finished = True
            self.status.message = f"Search aborted: {exc.__cause__ or exc}"
            logger.error("%s aborted: %s", self.algo.name, exc)
            raise
        return self._finish()

    def _finish(self) -> SearchResult:
        result = self.algo.result()
        self.finished = True
        if result.found:
            self.status.message = found_text(result.nodes_visited)
        else:
            self.status.message = not_found_text(result.nodes_visited)
        logger.info("%s finished: found=%s nodes_visited=%d path_len=%d", result.algorithm,
                    result.found, result.nodes_visited, result.path_len)
        return result


async def run_search(grid: Grid, start: Coord, end: Coord,
                     sink: CellUpdateSink = null_sink,
                     config: Optional[RunConfig] = None) -> SearchResult:
    """Run the configured algorithm from ``start`` to ``end``, reporting through ``sink``."""
    return await SearchRun(grid, start, end, config).play(sink)
