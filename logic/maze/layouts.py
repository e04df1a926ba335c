"""logic/maze/layouts.py — The five wall-layout strategies.

Every strategy stamps walls into an already-bordered grid and leaves
the rest ``Empty``.  None of them guarantees connectivity; the
generator's repair pass is the safety net.

    THEMES[((level - 1) // 3) % 5]  →  strategy name
    LAYOUTS[name](grid, rng, level, complexity)

``complexity`` is ``min(1.0, 0.3 + 0.05 * level)``.
"""

from __future__ import annotations
import math
import random
from typing import Callable

from core.constants import CELL_WALL, CELL_EMPTY, DIRECTIONS
from core.grid import grid_size, is_interior

MIN_CHAMBER = 4


# ── Recursive division ───────────────────────────────────────────────

def divide_chambers(grid: list[list[int]], rng: random.Random,
                    level: int, complexity: float) -> None:
    """Classic recursive division.

    Higher complexity punches fewer holes per wall; deeper levels are
    slightly less likely to keep subdividing, leaving bigger open rooms.
    """
    width, height = grid_size(grid)
    holes = max(1, round(3 - 2 * complexity))
    recurse_chance = max(0.4, 0.7 - 0.01 * level)
    _divide(grid, rng, 1, 1, width - 2, height - 2, holes, recurse_chance)


def _divide(grid, rng, x, y, w, h, holes, recurse_chance):
    if w < MIN_CHAMBER or h < MIN_CHAMBER:
        return

    # Cut across the longer side most of the time.
    if w < h:
        horizontal = rng.random() < 0.8
    elif h < w:
        horizontal = rng.random() < 0.2
    else:
        horizontal = rng.random() < 0.5

    if horizontal:
        wall_y = y + 2 + rng.randrange(h - 3)
        for wx in range(x, x + w):
            grid[wall_y][wx] = CELL_WALL
        for _ in range(holes):
            grid[wall_y][x + rng.randrange(w)] = CELL_EMPTY
        if rng.random() < recurse_chance:
            _divide(grid, rng, x, y, w, wall_y - y, holes, recurse_chance)
            _divide(grid, rng, x, wall_y + 1, w, h - (wall_y - y) - 1,
                    holes, recurse_chance)
    else:
        wall_x = x + 2 + rng.randrange(w - 3)
        for wy in range(y, y + h):
            grid[wy][wall_x] = CELL_WALL
        for _ in range(holes):
            grid[y + rng.randrange(h)][wall_x] = CELL_EMPTY
        if rng.random() < recurse_chance:
            _divide(grid, rng, x, y, wall_x - x, h, holes, recurse_chance)
            _divide(grid, rng, wall_x + 1, y, w - (wall_x - x) - 1, h,
                    holes, recurse_chance)


# ── Concentric fortress ──────────────────────────────────────────────

def fortress_rings(grid: list[list[int]], rng: random.Random,
                   level: int, complexity: float) -> None:
    """Nested rectangular walls every 3 cells, each with 2–4 gates."""
    width, height = grid_size(grid)
    inset = 3
    while True:
        left, top = inset, inset
        right, bottom = width - 1 - inset, height - 1 - inset
        if right - left < 4 or bottom - top < 2:
            break
        sides: list[tuple[int, int]] = []
        for x in range(left, right + 1):
            grid[top][x] = CELL_WALL
            grid[bottom][x] = CELL_WALL
            if left < x < right:
                sides.append((x, top))
                sides.append((x, bottom))
        for y in range(top, bottom + 1):
            grid[y][left] = CELL_WALL
            grid[y][right] = CELL_WALL
            if top < y < bottom:
                sides.append((left, y))
                sides.append((right, y))

        for gx, gy in rng.sample(sides, min(len(sides), rng.randint(2, 4))):
            grid[gy][gx] = CELL_EMPTY
        inset += 3


# ── Grid labyrinth ───────────────────────────────────────────────────

def grid_labyrinth(grid: list[list[int]], rng: random.Random,
                   level: int, complexity: float) -> None:
    """Pillars on even coordinates, each maybe growing one branch wall."""
    width, height = grid_size(grid)
    branch_chance = 0.35 + 0.4 * complexity
    for y in range(2, height - 2, 2):
        for x in range(2, width - 2, 2):
            grid[y][x] = CELL_WALL
            if rng.random() < branch_chance:
                dx, dy = rng.choice(DIRECTIONS)
                nx, ny = x + dx, y + dy
                if is_interior(grid, nx, ny):
                    grid[ny][nx] = CELL_WALL


# ── Linked chambers ──────────────────────────────────────────────────

def linked_chambers(grid: list[list[int]], rng: random.Random,
                    level: int, complexity: float) -> None:
    """Bordered rooms scattered over the floor, joined by L-shaped corridors."""
    width, height = grid_size(grid)
    wanted = 3 + int(3 * complexity)
    rooms: list[tuple[int, int, int, int]] = []
    attempts = 0
    while len(rooms) < wanted and attempts < 60:
        attempts += 1
        w = rng.randint(5, 9)
        h = rng.randint(4, 7)
        if width - w - 2 < 2 or height - h - 2 < 2:
            continue
        x = rng.randint(2, width - w - 2)
        y = rng.randint(2, height - h - 2)
        if any(_overlaps((x, y, w, h), r, margin=1) for r in rooms):
            continue
        rooms.append((x, y, w, h))

    for x, y, w, h in rooms:
        border: list[tuple[int, int]] = []
        for cx in range(x, x + w):
            for cy in (y, y + h - 1):
                grid[cy][cx] = CELL_WALL
                if x < cx < x + w - 1:
                    border.append((cx, cy))
        for cy in range(y, y + h):
            for cx in (x, x + w - 1):
                grid[cy][cx] = CELL_WALL
                if y < cy < y + h - 1:
                    border.append((cx, cy))
        for dx, dy in rng.sample(border, min(len(border), rng.randint(1, 2))):
            grid[dy][dx] = CELL_EMPTY

    for a, b in zip(rooms, rooms[1:]):
        _carve_l_corridor(grid, rng, _center(a), _center(b))


def _overlaps(a, b, margin=0) -> bool:
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return not (ax + aw + margin <= bx or bx + bw + margin <= ax
                or ay + ah + margin <= by or by + bh + margin <= ay)


def _center(room) -> tuple[int, int]:
    x, y, w, h = room
    return (x + w // 2, y + h // 2)


def _carve_l_corridor(grid, rng, a, b) -> None:
    (ax, ay), (bx, by) = a, b
    if rng.random() < 0.5:
        corner = (bx, ay)
    else:
        corner = (ax, by)
    for (sx, sy), (ex, ey) in ((a, corner), (corner, b)):
        step_x = (ex > sx) - (ex < sx)
        step_y = (ey > sy) - (ey < sy)
        x, y = sx, sy
        while True:
            if is_interior(grid, x, y):
                grid[y][x] = CELL_EMPTY
            if (x, y) == (ex, ey):
                break
            x += step_x
            y += step_y


# ── Spiral ───────────────────────────────────────────────────────────

def spiral_walls(grid: list[list[int]], rng: random.Random,
                 level: int, complexity: float) -> None:
    """Archimedean spiral stamped from the centre out to a bounded radius.

    Every ``gap_every``-th stamped cell (and the one after it) is left
    open so the arms can be crossed.
    """
    width, height = grid_size(grid)
    cx, cy = (width - 1) / 2.0, (height - 1) / 2.0
    aspect = width / float(height)
    max_r = min(cx, cy) - 1.0
    spacing = 3.0
    gap_every = max(6, rng.randint(9, 14) - int(3 * complexity))

    stamped: set[tuple[int, int]] = set()
    theta = rng.uniform(0.0, 2 * math.pi)
    start = theta
    while True:
        r = 1.5 + spacing * (theta - start) / (2 * math.pi)
        if r > max_r:
            break
        x = int(round(cx + r * math.cos(theta) * aspect))
        y = int(round(cy + r * math.sin(theta)))
        theta += 0.05
        if (x, y) in stamped or not is_interior(grid, x, y):
            continue
        stamped.add((x, y))
        if len(stamped) % gap_every in (0, 1):
            continue
        grid[y][x] = CELL_WALL


# ── Registry ─────────────────────────────────────────────────────────

THEMES = ("division", "fortress", "labyrinth", "chambers", "spiral")

LAYOUTS: dict[str, Callable] = {
    "division": divide_chambers,
    "fortress": fortress_rings,
    "labyrinth": grid_labyrinth,
    "chambers": linked_chambers,
    "spiral": spiral_walls,
}


def theme_for_level(level: int) -> str:
    """Themes rotate every three levels."""
    return THEMES[((max(1, level) - 1) // 3) % len(THEMES)]


def complexity_for_level(level: int) -> float:
    return min(1.0, 0.3 + 0.05 * level)
