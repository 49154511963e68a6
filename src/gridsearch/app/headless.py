# src/gridsearch/app/headless.py
#!/usr/bin/env python3
"""
Run one search without a window and print the grid as text.

    python -m gridsearch.app.headless 02_wall_gap --algo BFS

Exit status: 0 path found, 1 no path, 2 bad map or configuration.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from gridsearch.core.errors import GridSearchError
from gridsearch.core.maps import MAP_FILES, load_map, render_diagram
from gridsearch.core.runner import ALGORITHMS, RunConfig, StatusChannel, normalize_label, resolve_algorithm, run_search
from gridsearch.core.sink import null_sink, paced_sink

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Grid search without a viewer")
    ap.add_argument("map", help=f"map JSON file or one of: {', '.join(MAP_FILES)}")
    ap.add_argument("--algo", default=None, help=f"one of {', '.join(ALGORITHMS)} (default: $GRIDSEARCH_ALGO or A*)")
    ap.add_argument("--delay", type=float, default=0.0,
                    help="seconds to pause after each visited cell (path cells pause 3x)")
    ap.add_argument("--quiet", action="store_true", help="print only the status line")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    label = normalize_label(args.algo) if args.algo else resolve_algorithm([])
    path = MAP_FILES.get(args.map, args.map)
    status = StatusChannel()
    if not args.quiet:
        status.subscribe(print)

    try:
        grid = load_map(path)
        sink = paced_sink(null_sink, args.delay, args.delay * 3) if args.delay > 0 else null_sink
        result = asyncio.run(run_search(grid, grid.start, grid.end, sink, RunConfig(label, status)))
    except GridSearchError as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 2

    if args.quiet:
        print(status.message)
    else:
        print(render_diagram(grid))
    return 0 if result.found else 1


if __name__ == "__main__":
    sys.exit(main())
