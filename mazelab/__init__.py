"""Perfect maze generation, persistence and breadth-first solving."""

__all__ = [
    "Direction",
    "Grid",
    "Position",
    "MazeError",
    "InvalidDimensions",
    "FormatError",
    "InvalidArgument",
    "carve_maze",
    "generate_maze",
    "MazeGenerator",
    "MazeRecord",
    "serialize",
    "deserialize",
    "save_maze",
    "load_maze",
    "solve_maze",
    "distance_map",
    "solve",
    "SolveResult",
    "render_ascii",
    "render_image",
    "evaluate_path",
    "MazeEvaluator",
    "PathEvaluation",
]

from .errors import MazeError, InvalidDimensions, FormatError, InvalidArgument
from .grid import Direction, Grid, Position
from .codec import serialize, deserialize, save_maze, load_maze
from .render import render_ascii, render_image
from .solver import solve_maze, distance_map, solve, SolveResult
from .generator import carve_maze, generate_maze, MazeGenerator, MazeRecord
from .evaluator import evaluate_path, MazeEvaluator, PathEvaluation
