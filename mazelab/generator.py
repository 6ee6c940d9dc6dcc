"""Perfect-maze generation by randomized depth-first carving."""

from __future__ import annotations

import argparse
import logging
import random
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from .base import AbstractDatasetGenerator, PathLike
from .codec import save_maze
from .errors import MazeError
from .grid import Direction, Grid, Position, check_dimensions
from .render import check_cell_size, render_ascii, render_image
from .solver import solve_maze

logger = logging.getLogger(__name__)


def carve_maze(grid: Grid, rng: random.Random) -> Grid:
    """Carve a spanning tree into ``grid`` in place and return it.

    Every wall is closed first, then an explicit stack walks from ``(0, 0)``:
    the top cell opens a passage to a random unvisited neighbour and pushes
    it, or is popped once it has none. The result has exactly
    ``rows * cols - 1`` passages and one route between any two cells.
    """

    grid.walls.fill(True)
    grid.reset_visited()

    origin = (0, 0)
    grid.mark_visited(origin)
    stack: List[Position] = [origin]

    while stack:
        current = stack[-1]
        candidates: List[Tuple[Position, Direction]] = []
        for direction in Direction:
            nr, nc = Grid.neighbor(current, direction)
            if grid.in_bounds(nr, nc) and not grid.is_visited((nr, nc)):
                candidates.append(((nr, nc), direction))

        if not candidates:
            stack.pop()
            continue

        neighbor, direction = candidates[rng.randrange(len(candidates))]
        grid.remove_wall(current, direction)
        grid.mark_visited(neighbor)
        stack.append(neighbor)

    return grid


def generate_maze(
    rows: int,
    cols: int,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Grid:
    """Build a new ``rows x cols`` perfect maze.

    Pass ``seed`` for a reproducible maze or ``rng`` to share a generator
    across calls; with neither, a freshly seeded generator is used.
    """

    check_dimensions(rows, cols)
    if rng is None:
        rng = random.Random(seed)
    grid = carve_maze(Grid(rows, cols), rng)
    logger.debug("Generated %dx%d maze", rows, cols)
    return grid


@dataclass
class MazeRecord:
    id: str
    grid_size: Tuple[int, int]
    start: Position
    goal: Position
    shortest_path_length: int
    maze_path: str
    image_path: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "grid_size": list(self.grid_size),
            "start": list(self.start),
            "goal": list(self.goal),
            "shortest_path_length": self.shortest_path_length,
            "maze_path": self.maze_path,
            "image_path": self.image_path,
        }


class MazeGenerator(AbstractDatasetGenerator[MazeRecord]):
    """Generate maze files, preview images and a JSON index of them."""

    def __init__(
        self,
        output_dir: PathLike = "data/maze",
        *,
        rows: int = 10,
        cols: int = 10,
        cell_size: int = 32,
        render_images: bool = True,
        seed: Optional[int] = None,
    ) -> None:
        # Reject bad settings before anything is written to disk.
        check_dimensions(rows, cols)
        if render_images:
            check_cell_size(cell_size)
        super().__init__(output_dir, render_images=render_images)
        self.rows = rows
        self.cols = cols
        self.cell_size = cell_size
        self._rng = random.Random(seed)

    def create_maze(self, *, maze_id: Optional[str] = None) -> Tuple[MazeRecord, Grid]:
        # Ids are drawn from the seeded rng too.
        record_id = maze_id or str(uuid.UUID(int=self._rng.getrandbits(128), version=4))
        grid = generate_maze(self.rows, self.cols, rng=self._rng)
        start = (0, 0)
        goal = (self.rows - 1, self.cols - 1)
        path = solve_maze(grid, start, goal)

        maze_path = save_maze(grid, self.maze_file(self.rows, self.cols, record_id))
        image_path: Optional[str] = None
        if self.render_images:
            image = render_image(grid, cell_size=self.cell_size, path=None, start=start, end=goal)
            destination = self.image_file(self.rows, self.cols, record_id)
            image.save(destination)
            image_path = self.relativize_path(destination)

        record = MazeRecord(
            id=record_id,
            grid_size=(self.rows, self.cols),
            start=start,
            goal=goal,
            shortest_path_length=len(path),
            maze_path=self.relativize_path(maze_path),
            image_path=image_path,
        )
        return record, grid


__all__ = ["carve_maze", "generate_maze", "MazeGenerator", "MazeRecord"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate perfect mazes and save them as text files")
    parser.add_argument("count", type=int, nargs="?", default=1, help="Number of mazes to generate")
    parser.add_argument("--rows", type=int, default=10)
    parser.add_argument("--cols", type=int, default=10)
    parser.add_argument("--output-dir", type=Path, default=Path("data/maze"), help="Where to save mazes")
    parser.add_argument("--cell-size", type=int, default=32, help="Pixel size of a cell in preview images")
    parser.add_argument("--no-images", action="store_true", help="Skip PNG previews")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--show", action="store_true", help="Print each maze as ASCII art")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        generator = MazeGenerator(
            output_dir=args.output_dir,
            rows=args.rows,
            cols=args.cols,
            cell_size=args.cell_size,
            render_images=not args.no_images,
            seed=args.seed,
        )
        entries = generator.generate_dataset(args.count)
    except (MazeError, OSError) as exc:
        logger.error("%s", exc)
        return 1
    if args.show:
        for record, grid in entries:
            print(f"Generated maze {record.id}:")
            print(render_ascii(grid), end="")
    print(f"Wrote {len(entries)} maze(s) to {generator.output_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
