# src/gridsearch/core/errors.py
#!/usr/bin/env python3
"""Exception hierarchy for the search engine.

"No path" is not an error: strategies report it through
``SearchResult.found``. Everything below is raised to the caller.
"""


class GridSearchError(Exception):
    """Base class for every error raised by gridsearch."""


class InvalidConfiguration(GridSearchError):
    """Start/end unset, out of bounds or on a wall; bad dimensions; unknown algorithm."""


class SinkError(GridSearchError):
    """The cell update sink raised; the run was aborted."""


class PathReconstructionError(GridSearchError):
    """Back-pointers do not lead from the end cell to the start cell."""


class MapFormatError(GridSearchError):
    """A map file or text diagram could not be parsed."""
