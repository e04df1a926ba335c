"""logic/pathfinding.py — A* pathfinding on the cell grid, with a result cache.

Search
------
4-directional A* over every non-wall cell.  Each step costs 1.  The
heuristic is Manhattan distance plus a tiny penalty on axis imbalance
(``0.001 * |dx - dy|``) so that, among equally short candidates, the
search prefers approaching diagonally-balanced.  That makes it very
slightly inadmissible; adversaries do not need a shortest-path
guarantee.

Teleporters are ordinary open cells here — only the player uses them.

Caching
-------
Results are cached per ``(start, end)`` pair together with the clock
time they were computed at.  A repeat query within ``ttl`` seconds
returns the stored result — including a stored "no path" — without
searching.  When the cache is full the oldest-inserted entry is
evicted.  Expiry and eviction are independent.  The cache must be
cleared whenever the maze topology changes (every new level).

Public API
----------
``PathFinder(grid, clock=...)``
``PathFinder.find_path(start, end)`` → ``tuple[(x, y), ...]`` or ``None``
``PathFinder.clear()``
``PathFinder.stats()``
``astar(grid, start, end)``  — uncached search
"""

from __future__ import annotations
import heapq
import time
from typing import Callable

from core.constants import CELL_WALL, DIRECTIONS
from core.grid import in_bounds
from core.tuning import get as _tun

Cell = tuple[int, int]
Path = tuple[Cell, ...]

_TIE_BREAK = 0.001


def _heuristic(x: int, y: int, gx: int, gy: int) -> float:
    dx = abs(x - gx)
    dy = abs(y - gy)
    return dx + dy + _TIE_BREAK * abs(dx - dy)


# ── A* search ────────────────────────────────────────────────────────

def astar(grid: list[list[int]], start: Cell, end: Cell) -> Path | None:
    """Uncached A* from *start* to *end*.

    Returns the cells after *start* up to and including *end*, ``()``
    when they are equal, or ``None`` when *end* is blocked or
    unreachable.
    """
    if start == end:
        return ()
    gx, gy = end
    if not in_bounds(grid, gx, gy) or grid[gy][gx] == CELL_WALL:
        return None
    sx, sy = start
    if not in_bounds(grid, sx, sy):
        return None

    rows = len(grid)
    cols = len(grid[0])

    # Open set: (f_score, seq, x, y) — seq keeps pops FIFO among equal f
    seq = 0
    open_set: list[tuple[float, int, int, int]] = [
        (_heuristic(sx, sy, gx, gy), seq, sx, sy)
    ]
    g_score: dict[Cell, int] = {start: 0}
    came_from: dict[Cell, Cell] = {}
    closed: set[Cell] = set()

    while open_set:
        _f, _s, x, y = heapq.heappop(open_set)
        node = (x, y)
        if node in closed:
            continue
        closed.add(node)

        if node == end:
            path: list[Cell] = []
            while node in came_from:
                path.append(node)
                node = came_from[node]
            path.reverse()
            return tuple(path)

        base_g = g_score[node]
        for dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if nx < 0 or ny < 0 or nx >= cols or ny >= rows:
                continue
            if grid[ny][nx] == CELL_WALL:
                continue
            nxt = (nx, ny)
            if nxt in closed:
                continue
            new_g = base_g + 1
            if new_g < g_score.get(nxt, 1 << 30):
                g_score[nxt] = new_g
                came_from[nxt] = node
                seq += 1
                heapq.heappush(open_set,
                               (new_g + _heuristic(nx, ny, gx, gy), seq, nx, ny))

    return None  # no path found


# ── Cache ────────────────────────────────────────────────────────────

class PathCache:
    """``(start, end)`` → ``(path | None, stamp)`` with TTL and a size cap.

    Relies on ``dict`` insertion order: the first key is always the
    oldest insertion, so eviction is ``next(iter(...))``.
    """

    def __init__(self, max_size: int = 500, ttl: float = 5.0):
        self.max_size = max(1, int(max_size))
        self.ttl = float(ttl)
        self._entries: dict[tuple[Cell, Cell], tuple[Path | None, float]] = {}
        self.evictions = 0

    def lookup(self, key: tuple[Cell, Cell], now: float) -> tuple[bool, Path | None]:
        """Return ``(hit, path)``.  Expired entries are dropped on sight."""
        entry = self._entries.get(key)
        if entry is None:
            return False, None
        path, stamp = entry
        if now - stamp > self.ttl:
            del self._entries[key]
            return False, None
        return True, path

    def store(self, key: tuple[Cell, Cell], path: Path | None, now: float) -> None:
        if key in self._entries:
            # Re-insert so the refreshed entry counts as newest.
            del self._entries[key]
        elif len(self._entries) >= self.max_size:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            self.evictions += 1
        self._entries[key] = (path, now)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries


class PathFinder:
    """Cached A* over one level's grid.

    *clock* returns the current time in seconds; the simulation passes
    its game clock so cached entries age only while the game runs.
    """

    def __init__(self, grid: list[list[int]],
                 clock: Callable[[], float] | None = None,
                 max_size: int | None = None,
                 ttl: float | None = None):
        self.grid = grid
        self.clock = clock or time.monotonic
        self.cache = PathCache(
            max_size=max_size if max_size is not None else _tun("pathfinding", "cache_size", 500),
            ttl=ttl if ttl is not None else _tun("pathfinding", "cache_ttl", 5.0),
        )
        self.hits = 0
        self.misses = 0
        self.searches = 0

    def find_path(self, start: Cell, end: Cell) -> Path | None:
        """Cells from *start* (exclusive) to *end* (inclusive), or ``None``."""
        if start == end:
            return ()
        ex, ey = end
        if not in_bounds(self.grid, ex, ey) or self.grid[ey][ex] == CELL_WALL:
            return None

        key = (start, end)
        now = self.clock()
        hit, path = self.cache.lookup(key, now)
        if hit:
            self.hits += 1
            return path

        self.misses += 1
        self.searches += 1
        path = astar(self.grid, start, end)
        self.cache.store(key, path, now)
        return path

    def next_step(self, start: Cell, end: Cell) -> Cell | None:
        """First cell of the path, or ``None`` when there is none."""
        path = self.find_path(start, end)
        if not path:
            return None
        return path[0]

    def reset(self, grid: list[list[int]]) -> None:
        """Point at a new level's grid and drop every cached result."""
        self.grid = grid
        self.clear()

    def clear(self) -> None:
        self.cache.clear()

    def stats(self) -> dict[str, int]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "searches": self.searches,
            "size": len(self.cache),
            "evictions": self.cache.evictions,
        }
