"""logic/maze/features.py — Special cells, spawn clearing and repair passes.

Everything here mutates the grid in place and takes the generator's
``random.Random`` so a seed reproduces a level exactly.

*protected* arguments are sets of cells (spawn footprints plus a
margin) that random placement must leave alone.
"""

from __future__ import annotations
import random
from collections import deque

from core.constants import (
    CELL_EMPTY, CELL_WALL, CELL_DOT, CELL_POWER_PELLET,
    CELL_TELEPORTER, CELL_BONUS_DOT, CELL_SAFE_ZONE, DIRECTIONS,
)
from core.grid import grid_size, is_interior, manhattan

Cell = tuple[int, int]


def footprint(origin: Cell, toward: Cell, size: int = 2) -> set[Cell]:
    """``size``×``size`` block at *origin*, growing toward *toward*."""
    ox, oy = origin
    sx = 1 if toward[0] >= ox else -1
    sy = 1 if toward[1] >= oy else -1
    return {(ox + sx * i, oy + sy * j) for i in range(size) for j in range(size)}


def grow(cells: set[Cell], margin: int = 1) -> set[Cell]:
    out = set(cells)
    for x, y in cells:
        for dx in range(-margin, margin + 1):
            for dy in range(-margin, margin + 1):
                out.add((x + dx, y + dy))
    return out


def _cells_with(grid, tag: int, protected: set[Cell] = frozenset()) -> list[Cell]:
    width, height = grid_size(grid)
    return [(x, y)
            for y in range(1, height - 1)
            for x in range(1, width - 1)
            if grid[y][x] == tag and (x, y) not in protected]


# ── Walls ────────────────────────────────────────────────────────────

def add_extra_walls(grid, rng: random.Random, count: int,
                    protected: set[Cell]) -> int:
    candidates = _cells_with(grid, CELL_EMPTY, protected)
    chosen = rng.sample(candidates, min(count, len(candidates)))
    for x, y in chosen:
        grid[y][x] = CELL_WALL
    return len(chosen)


def clear_cells(grid, cells: set[Cell]) -> None:
    """Force interior walls in *cells* open."""
    for x, y in cells:
        if is_interior(grid, x, y) and grid[y][x] == CELL_WALL:
            grid[y][x] = CELL_EMPTY


# ── Special features ─────────────────────────────────────────────────

def add_teleporters(grid, rng: random.Random, pairs: int,
                    protected: set[Cell]) -> dict[Cell, Cell]:
    """Place *pairs* linked teleporters, far apart where possible.

    Returns a symmetric ``cell → partner`` map.
    """
    width, height = grid_size(grid)
    far = (width + height) // 3
    links: dict[Cell, Cell] = {}
    for _ in range(pairs):
        candidates = _cells_with(grid, CELL_EMPTY, protected)
        if len(candidates) < 2:
            break
        a = rng.choice(candidates)
        distant = [c for c in candidates if manhattan(a, c) >= far]
        b = rng.choice(distant or [c for c in candidates if c != a])
        for x, y in (a, b):
            grid[y][x] = CELL_TELEPORTER
        links[a] = b
        links[b] = a
    return links


def add_bonus_rooms(grid, rng: random.Random, count: int,
                    protected: set[Cell]) -> int:
    """Stamp 5×5 walled rooms with a ``BonusDot`` at the centre and one door."""
    width, height = grid_size(grid)
    placed = 0
    attempts = 0
    while placed < count and attempts < 40:
        attempts += 1
        if width - 7 < 2 or height - 7 < 2:
            break
        x = rng.randint(2, width - 7)
        y = rng.randint(2, height - 7)
        box = {(x + i, y + j) for i in range(5) for j in range(5)}
        if box & protected:
            continue
        if any(grid[cy][cx] in (CELL_TELEPORTER, CELL_BONUS_DOT, CELL_SAFE_ZONE)
               for cx, cy in box):
            continue
        for cx, cy in box:
            edge = cx in (x, x + 4) or cy in (y, y + 4)
            grid[cy][cx] = CELL_WALL if edge else CELL_EMPTY
        grid[y + 2][x + 2] = CELL_BONUS_DOT

        # One door in the middle of a random side, with its outside cell open.
        (dx, dy), (ox, oy) = rng.choice((
            ((x + 2, y), (x + 2, y - 1)),
            ((x + 2, y + 4), (x + 2, y + 5)),
            ((x, y + 2), (x - 1, y + 2)),
            ((x + 4, y + 2), (x + 5, y + 2)),
        ))
        grid[dy][dx] = CELL_EMPTY
        if is_interior(grid, ox, oy) and grid[oy][ox] == CELL_WALL:
            grid[oy][ox] = CELL_EMPTY
        protected |= grow(box)
        placed += 1
    return placed


def add_safe_zones(grid, rng: random.Random, count: int,
                   protected: set[Cell]) -> int:
    candidates = _cells_with(grid, CELL_EMPTY, protected)
    chosen = rng.sample(candidates, min(count, len(candidates)))
    for x, y in chosen:
        grid[y][x] = CELL_SAFE_ZONE
    return len(chosen)


# ── Connectivity ─────────────────────────────────────────────────────

def reachable_from(grid, start: Cell) -> set[Cell]:
    """BFS over non-wall cells."""
    width, height = grid_size(grid)
    sx, sy = start
    if not (0 <= sx < width and 0 <= sy < height) or grid[sy][sx] == CELL_WALL:
        return set()
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if (nx, ny) in seen:
                continue
            if not (0 <= nx < width and 0 <= ny < height):
                continue
            if grid[ny][nx] == CELL_WALL:
                continue
            seen.add((nx, ny))
            queue.append((nx, ny))
    return seen


def _components(grid, cells: set[Cell]) -> list[set[Cell]]:
    remaining = set(cells)
    comps = []
    while remaining:
        seed = remaining.pop()
        comp = {seed}
        queue = deque([seed])
        while queue:
            x, y = queue.popleft()
            for dx, dy in DIRECTIONS:
                n = (x + dx, y + dy)
                if n in remaining:
                    remaining.discard(n)
                    comp.add(n)
                    queue.append(n)
        comps.append(comp)
    return comps


def _tunnel(grid, pocket: set[Cell], reached: set[Cell]) -> int:
    """Carve the shortest run of interior walls from *pocket* to *reached*.

    Used for pockets sealed by walls thicker than one cell.  Returns the
    number of walls opened (0 when no interior route exists).
    """
    came_from: dict[Cell, Cell | None] = {c: None for c in pocket}
    queue = deque(sorted(pocket))
    while queue:
        x, y = queue.popleft()
        for dx, dy in DIRECTIONS:
            n = (x + dx, y + dy)
            if n in came_from or not is_interior(grid, *n):
                continue
            came_from[n] = (x, y)
            if n in reached:
                opened = 0
                node = came_from[n]
                while node is not None:
                    nx, ny = node
                    if grid[ny][nx] == CELL_WALL:
                        grid[ny][nx] = CELL_EMPTY
                        opened += 1
                    node = came_from[node]
                return opened
            queue.append(n)
    return 0


def repair_connectivity(grid, start: Cell, rng: random.Random,
                        max_passes: int = 40) -> int:
    """Open single walls between reached and unreached regions.

    Each pass floods from *start*, then for every unreached pocket opens
    one interior wall that touches both the pocket and the reached area.
    Pockets behind thicker walls get a tunnel instead.  Once no pass
    makes progress, leftover ``Empty`` cells are sealed into walls so no
    dot is ever placed out of reach.

    Returns the number of non-wall cells still unreachable (special
    cells such as a stranded teleporter).  That residue is tolerated.
    """
    width, height = grid_size(grid)
    for _ in range(max_passes):
        reached = reachable_from(grid, start)
        unreached = {(x, y)
                     for y in range(1, height - 1)
                     for x in range(1, width - 1)
                     if grid[y][x] != CELL_WALL and (x, y) not in reached}
        if not unreached:
            return 0

        opened = 0
        for pocket in _components(grid, unreached):
            bridges = []
            for x, y in pocket:
                for dx, dy in DIRECTIONS:
                    wx, wy = x + dx, y + dy
                    if not is_interior(grid, wx, wy) or grid[wy][wx] != CELL_WALL:
                        continue
                    if any((wx + ex, wy + ey) in reached for ex, ey in DIRECTIONS):
                        bridges.append((wx, wy))
            if bridges:
                wx, wy = rng.choice(sorted(bridges))
                grid[wy][wx] = CELL_EMPTY
                opened += 1
            else:
                opened += _tunnel(grid, pocket, reached)
        if opened == 0:
            break

    reached = reachable_from(grid, start)
    residual = 0
    for y in range(1, height - 1):
        for x in range(1, width - 1):
            tag = grid[y][x]
            if tag == CELL_WALL or (x, y) in reached:
                continue
            if tag == CELL_EMPTY:
                grid[y][x] = CELL_WALL
            else:
                residual += 1
    return residual


# ── Collectibles ─────────────────────────────────────────────────────

def place_dots(grid) -> int:
    """Turn every interior ``Empty`` cell into a ``Dot``.  Returns the count."""
    width, height = grid_size(grid)
    count = 0
    for y in range(1, height - 1):
        row = grid[y]
        for x in range(1, width - 1):
            if row[x] == CELL_EMPTY:
                row[x] = CELL_DOT
                count += 1
    return count


def place_power_pellets(grid, rng: random.Random, count: int,
                        protected: set[Cell]) -> int:
    """Corner anchors first (skipped when not a dot), the rest at random dots."""
    width, height = grid_size(grid)
    anchors = [(2, 2), (width - 3, 2), (2, height - 3), (width - 3, height - 3)]
    placed = 0
    for x, y in anchors[:count]:
        if grid[y][x] == CELL_DOT:
            grid[y][x] = CELL_POWER_PELLET
            placed += 1

    remaining = count - min(count, len(anchors))
    candidates = _cells_with(grid, CELL_DOT, protected)
    for x, y in rng.sample(candidates, min(remaining, len(candidates))):
        grid[y][x] = CELL_POWER_PELLET
        placed += 1
    return placed
