from mazelab import Direction, Grid


def open_grid(rows: int, cols: int) -> Grid:
    """Grid with every interior wall removed."""

    grid = Grid(rows, cols)
    for r in range(rows):
        for c in range(cols):
            if c + 1 < cols:
                grid.remove_wall((r, c), Direction.RIGHT)
            if r + 1 < rows:
                grid.remove_wall((r, c), Direction.DOWN)
    return grid


def detour_grid() -> Grid:
    """Open 3x3 grid with the wall between (0, 0) and (0, 1) kept closed."""

    grid = open_grid(3, 3)
    grid.add_wall((0, 0), Direction.RIGHT)
    return grid


def split_grid() -> Grid:
    """2x2 grid whose two rows are joined internally but not to each other."""

    grid = Grid(2, 2)
    grid.remove_wall((0, 0), Direction.RIGHT)
    grid.remove_wall((1, 0), Direction.RIGHT)
    return grid
