# src/gridsearch/core/sink.py
#!/usr/bin/env python3
"""
Cell update sink: the one boundary between the engine and a renderer.

A sink is any coroutine function ``sink(row, col, state, algorithm)``.
The engine awaits it once per transition and does not touch another
cell until it resolves, so the sink alone decides the animation pace.
"""

import asyncio
from typing import Awaitable, Callable

from gridsearch.core.types import CellState

CellUpdateSink = Callable[[int, int, CellState, str], Awaitable[None]]

VISITED_DELAY = 0.010   # seconds
PATH_DELAY = 0.030


async def null_sink(row: int, col: int, state: CellState, algorithm: str) -> None:
    """Acknowledge immediately."""
    return None


def paced_sink(inner: CellUpdateSink = null_sink,
               visited_delay: float = VISITED_DELAY,
               path_delay: float = PATH_DELAY) -> CellUpdateSink:
    """Wrap ``inner`` so every acknowledgement is followed by a short sleep."""

    async def sink(row: int, col: int, state: CellState, algorithm: str) -> None:
        await inner(row, col, state, algorithm)
        delay = path_delay if state is CellState.PATH else visited_delay
        if delay > 0:
            await asyncio.sleep(delay)

    return sink
