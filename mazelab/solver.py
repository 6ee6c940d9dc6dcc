"""Breadth-first maze solver and the ``mazelab-solve`` command."""

from __future__ import annotations

import argparse
import json
import logging
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Deque, List, Optional, Sequence

import numpy as np

from .codec import load_maze
from .grid import Direction, Grid, Position
from .render import render_ascii, render_image

logger = logging.getLogger(__name__)


def solve_maze(grid: Grid, start: Position, end: Position) -> List[Position]:
    """Return a shortest path from ``start`` to ``end``, inclusive.

    Neighbours are expanded in Up, Right, Down, Left order, so equal-length
    alternatives are resolved the same way on every call. An empty list means
    the two cells are not connected.
    """

    start = grid.require(start, "start")
    end = grid.require(end, "end")

    visited = np.zeros(grid.shape, dtype=bool)
    parents = np.full(grid.shape + (2,), -1, dtype=np.int64)
    queue: Deque[Position] = deque([start])
    visited[start] = True

    while queue:
        r, c = queue.popleft()
        if (r, c) == end:
            break
        for direction in Direction:
            if grid.walls[r, c, direction]:
                continue
            nr, nc = Grid.neighbor((r, c), direction)
            if not grid.in_bounds(nr, nc) or visited[nr, nc]:
                continue
            visited[nr, nc] = True
            parents[nr, nc] = (r, c)
            queue.append((nr, nc))

    if not visited[end]:
        return []

    node = end
    result: List[Position] = [node]
    while node != start:
        node = (int(parents[node][0]), int(parents[node][1]))
        result.append(node)
    result.reverse()
    return result


def distance_map(grid: Grid, start: Position) -> np.ndarray:
    """Hop distance from ``start`` to every cell, ``-1`` where unreachable."""

    start = grid.require(start, "start")
    distances = np.full(grid.shape, -1, dtype=np.int64)
    distances[start] = 0
    queue: Deque[Position] = deque([start])
    while queue:
        node = queue.popleft()
        for neighbor in grid.open_neighbors(node):
            if distances[neighbor] < 0:
                distances[neighbor] = distances[node] + 1
                queue.append(neighbor)
    return distances


@dataclass
class SolveResult:
    start: Position
    end: Position
    path: List[Position] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return bool(self.path)

    @property
    def length(self) -> int:
        return len(self.path)

    def to_dict(self) -> dict:
        return {
            "start": list(self.start),
            "end": list(self.end),
            "solved": self.solved,
            "length": self.length,
            "path": [list(cell) for cell in self.path],
        }


def solve(grid: Grid, start: Position, end: Position) -> SolveResult:
    path = solve_maze(grid, start, end)
    if path:
        logger.info("Solved %s -> %s in %d cells", tuple(start), tuple(end), len(path))
    else:
        logger.info("No path between %s and %s", tuple(start), tuple(end))
    return SolveResult(start=tuple(start), end=tuple(end), path=path)


__all__ = ["solve_maze", "distance_map", "solve", "SolveResult"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Solve a saved maze with breadth-first search")
    parser.add_argument("maze", type=Path, help="Maze file written by mazelab-generate")
    parser.add_argument("--start", type=int, nargs=2, metavar=("ROW", "COL"), default=(0, 0))
    parser.add_argument(
        "--end",
        type=int,
        nargs=2,
        metavar=("ROW", "COL"),
        default=None,
        help="Defaults to the bottom-right cell",
    )
    parser.add_argument("--show", action="store_true", help="Print the maze with the solution path")
    parser.add_argument("--image", type=Path, default=None, help="Write a PNG of the solved maze")
    parser.add_argument("--cell-size", type=int, default=32)
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def _summary(result: SolveResult) -> str:
    (sr, sc), (er, ec) = result.start, result.end
    if not result.solved:
        return f"No solution exists from ({sr},{sc}) to ({er},{ec})."
    return f"Solution path length: {result.length} cells"


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        grid = load_maze(args.maze)
        end: Sequence[int] = args.end if args.end is not None else (grid.rows - 1, grid.cols - 1)
        result = solve(grid, tuple(args.start), tuple(end))
        if args.image is not None:
            image = render_image(
                grid,
                cell_size=args.cell_size,
                path=result.path,
                start=result.start,
                end=result.end,
            )
            args.image.parent.mkdir(parents=True, exist_ok=True)
            # Pillow raises ValueError for an unknown file extension.
            image.save(args.image)
            logger.info("Image written to %s", args.image)
    except (ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(_summary(result))
    if args.show:
        print(render_ascii(grid, result.path, result.start, result.end), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
