"""Text codec for maze grids.

The format is a whitespace separated token stream::

    <rows> <cols>
    <top> <right> <bottom> <left> <top> ...

with four ``0``/``1`` wall tokens per cell in row-major order.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

import numpy as np

from .errors import FormatError
from .grid import Grid

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_WALL_TOKENS = {"0": False, "1": True}


def serialize(grid: Grid) -> str:
    flags = grid.walls.reshape(-1)
    body = " ".join("1" if flag else "0" for flag in flags)
    return f"{grid.rows} {grid.cols}\n{body}\n"


def _parse_dimension(token: str, name: str) -> int:
    try:
        value = int(token)
    except ValueError as exc:
        raise FormatError(f"{name} must be an integer, got {token!r}") from exc
    if value <= 0:
        raise FormatError(f"{name} must be positive, got {value}")
    return value


def deserialize(data: Union[str, bytes]) -> Grid:
    if isinstance(data, bytes):
        try:
            data = data.decode("ascii")
        except UnicodeDecodeError as exc:
            raise FormatError("maze data is not ASCII text") from exc
    tokens: List[str] = data.split()
    if len(tokens) < 2:
        raise FormatError("missing <rows> <cols> header")

    rows = _parse_dimension(tokens[0], "rows")
    cols = _parse_dimension(tokens[1], "cols")
    expected = 2 + 4 * rows * cols
    if len(tokens) != expected:
        raise FormatError(
            f"expected {expected} tokens for a {rows}x{cols} maze, found {len(tokens)}"
        )

    flags: List[bool] = []
    for index, token in enumerate(tokens[2:]):
        try:
            flags.append(_WALL_TOKENS[token])
        except KeyError:
            raise FormatError(f"wall token {index} must be 0 or 1, got {token!r}") from None
    walls = np.array(flags, dtype=bool).reshape(rows, cols, 4)
    return Grid(rows, cols, walls)


def save_maze(grid: Grid, path: PathLike) -> Path:
    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(serialize(grid), encoding="utf-8")
    logger.info("Maze saved to %s", destination)
    return destination


def load_maze(path: PathLike) -> Grid:
    source = Path(path)
    grid = deserialize(source.read_text(encoding="utf-8"))
    logger.debug("Loaded %dx%d maze from %s", grid.rows, grid.cols, source)
    return grid


__all__ = ["serialize", "deserialize", "save_maze", "load_maze", "PathLike"]
