"""ASCII and raster renderings of a maze grid."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set, Tuple

from PIL import Image, ImageDraw

from .errors import InvalidArgument
from .grid import Direction, Grid, Position

WALL_COLOR = (0, 0, 0)
PATH_COLOR = (255, 255, 255)
START_COLOR = (220, 30, 30)
GOAL_COLOR = (40, 180, 80)
LINE_COLOR = (220, 0, 0)

MIN_CELL_SIZE = 4


def check_cell_size(cell_size: object) -> int:
    if isinstance(cell_size, bool) or not isinstance(cell_size, int) or cell_size < MIN_CELL_SIZE:
        raise InvalidArgument(
            f"cell_size must be an integer of at least {MIN_CELL_SIZE}, got {cell_size!r}"
        )
    return cell_size


def _marker_cells(grid: Grid, cells: Optional[Iterable[Position]]) -> Set[Position]:
    if not cells:
        return set()
    return {grid.require(cell, "path cell") for cell in cells}


def render_ascii(
    grid: Grid,
    path: Optional[Sequence[Position]] = None,
    start: Optional[Position] = None,
    end: Optional[Position] = None,
) -> str:
    """Draw the maze with ``+---+`` borders.

    Start and end cells are marked ``S`` and ``E``; other path cells ``*``.
    Each cell contributes its top and right walls; the left edge of the first
    column and the bottom edge of the last row close the picture.
    """

    on_path = _marker_cells(grid, path)
    start = grid.require(start, "start") if start is not None else None
    end = grid.require(end, "end") if end is not None else None

    lines: List[str] = []
    for r in range(grid.rows):
        top = ["+"]
        middle = ["|"]
        for c in range(grid.cols):
            top.append("---+" if grid.walls[r, c, Direction.UP] else "   +")
            if (r, c) == start:
                content = " S "
            elif (r, c) == end:
                content = " E "
            elif (r, c) in on_path:
                content = " * "
            else:
                content = "   "
            middle.append(content)
            middle.append("|" if grid.walls[r, c, Direction.RIGHT] else " ")
        lines.append("".join(top))
        lines.append("".join(middle))

    bottom = ["+"]
    for c in range(grid.cols):
        bottom.append("---+" if grid.walls[grid.rows - 1, c, Direction.DOWN] else "   +")
    lines.append("".join(bottom))
    return "\n".join(lines) + "\n"


def render_image(
    grid: Grid,
    *,
    cell_size: int = 32,
    path: Optional[Sequence[Position]] = None,
    start: Optional[Position] = None,
    end: Optional[Position] = None,
    wall_width: Optional[int] = None,
) -> Image.Image:
    check_cell_size(cell_size)
    wall_width = wall_width or max(1, cell_size // 8)
    margin = wall_width
    width = grid.cols * cell_size + 2 * margin
    height = grid.rows * cell_size + 2 * margin
    canvas = Image.new("RGB", (width, height), PATH_COLOR)
    draw = ImageDraw.Draw(canvas)

    def cell_box(cell: Position) -> Tuple[int, int, int, int]:
        r, c = cell
        left = margin + c * cell_size
        top = margin + r * cell_size
        return left, top, left + cell_size, top + cell_size

    for cell, color in ((start, START_COLOR), (end, GOAL_COLOR)):
        if cell is not None:
            left, top, right, bottom = cell_box(grid.require(cell))
            draw.rectangle((left, top, right - 1, bottom - 1), fill=color)

    if path:
        cells = [grid.require(cell, "path cell") for cell in path]
        thickness = max(2, cell_size // 3)
        points = [
            (
                margin + c * cell_size + cell_size / 2,
                margin + r * cell_size + cell_size / 2,
            )
            for r, c in cells
        ]
        if len(points) >= 2:
            draw.line(points, fill=LINE_COLOR, width=thickness, joint="curve")
        else:
            x, y = points[0]
            half = thickness / 2
            draw.ellipse((x - half, y - half, x + half, y + half), fill=LINE_COLOR)

    for r in range(grid.rows):
        for c in range(grid.cols):
            left, top, right, bottom = cell_box((r, c))
            up, right_wall, down, left_wall = grid.walls_of((r, c))
            if up:
                draw.line((left, top, right, top), fill=WALL_COLOR, width=wall_width)
            if right_wall:
                draw.line((right, top, right, bottom), fill=WALL_COLOR, width=wall_width)
            if down:
                draw.line((left, bottom, right, bottom), fill=WALL_COLOR, width=wall_width)
            if left_wall:
                draw.line((left, top, left, bottom), fill=WALL_COLOR, width=wall_width)
    return canvas


__all__ = ["check_cell_size", "render_ascii", "render_image", "MIN_CELL_SIZE"]
