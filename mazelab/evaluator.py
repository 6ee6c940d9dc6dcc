"""Check candidate maze paths against the walls of a saved maze."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .base import AbstractDatasetEvaluator, PathLike
from .errors import FormatError, InvalidArgument, MazeError
from .grid import Grid, Position
from .solver import distance_map

logger = logging.getLogger(__name__)


@dataclass
class PathEvaluation:
    length: int
    shortest_length: int
    in_bounds: bool
    valid_steps: bool
    starts_at_start: bool
    reaches_goal: bool
    optimal: bool
    message: str
    maze_id: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.in_bounds and self.valid_steps and self.starts_at_start and self.reaches_goal

    def to_dict(self) -> dict:
        return {
            "maze_id": self.maze_id,
            "success": self.success,
            "length": self.length,
            "shortest_length": self.shortest_length,
            "in_bounds": self.in_bounds,
            "valid_steps": self.valid_steps,
            "starts_at_start": self.starts_at_start,
            "reaches_goal": self.reaches_goal,
            "optimal": self.optimal,
            "message": self.message,
        }


def _is_passage(grid: Grid, a: Position, b: Position) -> bool:
    return b in grid.open_neighbors(a)


def _as_cells(path: object) -> List[Position]:
    """Validate that ``path`` is a list of integer ``[row, col]`` pairs."""

    if isinstance(path, (str, bytes)) or not isinstance(path, (list, tuple)):
        raise InvalidArgument(f"candidate path must be a list of [row, col] pairs, got {path!r}")
    cells: List[Position] = []
    for index, cell in enumerate(path):
        if (
            not isinstance(cell, (list, tuple))
            or len(cell) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in cell)
        ):
            raise InvalidArgument(
                f"candidate cell {index} must be a [row, col] pair of integers, got {cell!r}"
            )
        cells.append((cell[0], cell[1]))
    return cells


def evaluate_path(
    grid: Grid,
    path: Sequence[Sequence[int]],
    start: Position,
    goal: Position,
) -> PathEvaluation:
    """Score ``path`` as an answer to the ``start`` to ``goal`` query.

    A path succeeds when it stays on the grid, moves only through passages,
    begins at ``start`` and ends at ``goal``. ``optimal`` additionally
    requires its cell count to match the breadth-first shortest path.
    """

    start = grid.require(start, "start")
    goal = grid.require(goal, "goal")
    distances = distance_map(grid, start)
    shortest = int(distances[goal]) + 1 if distances[goal] >= 0 else 0

    cells = _as_cells(path)
    in_bounds = all(grid.in_bounds(*cell) for cell in cells)
    valid_steps = in_bounds and all(
        _is_passage(grid, a, b) for a, b in zip(cells, cells[1:])
    )
    starts_at_start = bool(cells) and cells[0] == start
    reaches_goal = bool(cells) and cells[-1] == goal
    optimal = (
        valid_steps and starts_at_start and reaches_goal and len(cells) == shortest
    )

    if not cells:
        message = "Path is empty."
    elif not in_bounds:
        message = "Path leaves the grid."
    elif not valid_steps:
        message = "Path crosses a wall or skips a cell."
    elif not starts_at_start:
        message = "Path does not begin at the start cell."
    elif not reaches_goal:
        message = "Path does not reach the goal."
    elif not optimal:
        message = f"Path reaches the goal in {len(cells)} cells; shortest is {shortest}."
    else:
        message = "Path is a shortest route from start to goal."

    return PathEvaluation(
        length=len(cells),
        shortest_length=shortest,
        in_bounds=in_bounds,
        valid_steps=valid_steps,
        starts_at_start=starts_at_start,
        reaches_goal=reaches_goal,
        optimal=optimal,
        message=message,
    )


class MazeEvaluator(AbstractDatasetEvaluator):
    """Evaluate candidate paths for mazes listed in a ``mazes.json`` index."""

    def evaluate(
        self,
        maze_id: str,
        candidate: Union[PathLike, Sequence[Sequence[int]]],
    ) -> PathEvaluation:
        grid = self.load_grid(maze_id)
        start, goal = self.endpoints(maze_id)
        if isinstance(candidate, (str, Path)):
            candidate_path = Path(candidate)
            if not candidate_path.exists():
                raise FileNotFoundError(f"Candidate path file not found: {candidate_path}")
            try:
                candidate = json.loads(candidate_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                raise FormatError(f"{candidate_path} is not valid JSON: {exc}") from exc
        result = evaluate_path(grid, candidate, start, goal)
        result.maze_id = maze_id
        logger.debug("Evaluated %s: %s", maze_id, result.message)
        return result


__all__ = ["evaluate_path", "MazeEvaluator", "PathEvaluation"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate a candidate path for a generated maze")
    parser.add_argument("metadata", type=Path, help="Path to the mazes.json index")
    parser.add_argument("maze_id", type=str, help="Identifier of the maze to evaluate")
    parser.add_argument("candidate", type=Path, help="JSON file holding a list of [row, col] pairs")
    parser.add_argument("--base-dir", type=Path, default=None)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        evaluator = MazeEvaluator(args.metadata, base_dir=args.base_dir)
        result = evaluator.evaluate(args.maze_id, args.candidate)
    except (MazeError, OSError, KeyError) as exc:
        logger.error("%s", exc)
        return 1
    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
