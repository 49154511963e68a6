"""Search engine: grid model, strategies, path reconstruction and orchestration."""

from gridsearch.core.errors import (GridSearchError, InvalidConfiguration, MapFormatError,
                                    PathReconstructionError, SinkError)
from gridsearch.core.grid import Grid
from gridsearch.core.runner import ALGORITHMS, RunConfig, SearchRun, StatusChannel, make_algo, run_search
from gridsearch.core.types import Cell, CellState, Coord, SearchResult, StepResult, Transition

__all__ = [
    "ALGORITHMS", "Cell", "CellState", "Coord", "Grid", "GridSearchError", "InvalidConfiguration",
    "MapFormatError", "PathReconstructionError", "RunConfig", "SearchResult", "SearchRun",
    "SinkError", "StatusChannel", "StepResult", "Transition", "make_algo", "run_search",
]
