"""core/grid.py — Cell-grid queries shared by generation, AI and the tick.

The grid is a plain ``list[list[int]]`` of cell tags indexed
``grid[y][x]``.  Helpers here never mutate it.
"""

from __future__ import annotations

from core.constants import CELL_WALL, CELL_EMPTY, DIRECTIONS

Cell = tuple[int, int]
Direction = tuple[int, int]


def make_grid(width: int, height: int, fill: int = CELL_EMPTY) -> list[list[int]]:
    return [[fill] * width for _ in range(height)]


def grid_size(grid: list[list[int]]) -> tuple[int, int]:
    """Return ``(width, height)``."""
    height = len(grid)
    width = len(grid[0]) if height else 0
    return width, height


def in_bounds(grid: list[list[int]], x: int, y: int) -> bool:
    width, height = grid_size(grid)
    return 0 <= x < width and 0 <= y < height


def is_interior(grid: list[list[int]], x: int, y: int) -> bool:
    """True for cells that are not on the outer border."""
    width, height = grid_size(grid)
    return 0 < x < width - 1 and 0 < y < height - 1


def is_passable(grid: list[list[int]], x: int, y: int) -> bool:
    """Out-of-bounds counts as blocked."""
    if not in_bounds(grid, x, y):
        return False
    return grid[y][x] != CELL_WALL


def open_neighbors(grid: list[list[int]], cell: Cell) -> list[Cell]:
    """Passable 4-neighbours of *cell*, in ``DIRECTIONS`` order."""
    x, y = cell
    out = []
    for dx, dy in DIRECTIONS:
        nx, ny = x + dx, y + dy
        if is_passable(grid, nx, ny):
            out.append((nx, ny))
    return out


def open_directions(grid: list[list[int]], cell: Cell) -> list[Direction]:
    x, y = cell
    return [d for d in DIRECTIONS if is_passable(grid, x + d[0], y + d[1])]


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def clamp_cell(grid: list[list[int]], x: int, y: int) -> Cell:
    """Clamp ``(x, y)`` into the grid interior."""
    width, height = grid_size(grid)
    return (max(1, min(width - 2, x)), max(1, min(height - 2, y)))


def direction_to(a: Cell, b: Cell) -> Direction:
    """Unit step from *a* to an adjacent cell *b*."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    return ((dx > 0) - (dx < 0), (dy > 0) - (dy < 0))


def count_cells(grid: list[list[int]], tag: int) -> int:
    return sum(row.count(tag) for row in grid)
