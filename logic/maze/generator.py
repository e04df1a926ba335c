"""logic/maze/generator.py — Build one level: topology, items and adversaries.

    layout = generate_level(level=4, rng=random.Random(7))
    layout.grid, layout.total_dots, layout.adversaries ...

Pipeline
--------
1. Empty grid with a wall border.
2. Theme layout (see ``layouts.THEMES``).
3. A few extra random walls, more on later levels.
4. Special features: teleporter pairs (every 5th level), bonus rooms
   (every 3rd), safe zones (every 7th).
5. Clear the player and adversary spawn footprints.
6. Connectivity repair from the player start.
7. Dots on every remaining empty cell; power pellets on top.
8. Adversaries at the spawn corner.

The returned ``total_dots`` is the number of ``Dot`` cells in the final
grid — pellets and bonus dots are not counted.
"""

from __future__ import annotations
import colorsys
import random
from dataclasses import dataclass, field

from core.constants import (
    GRID_WIDTH, GRID_HEIGHT, CELL_WALL, CELL_EMPTY, CELL_DOT,
)
from core.grid import make_grid, count_cells
from core.tuning import get as _tun
from components import Adversary, BEHAVIOR_CYCLE
from logic.maze.layouts import LAYOUTS, theme_for_level, complexity_for_level
from logic.maze import features


@dataclass
class MazeLayout:
    grid: list[list[int]]
    player_start: tuple[int, int]
    adversary_spawn: tuple[int, int]
    adversaries: list[Adversary] = field(default_factory=list)
    teleporters: dict[tuple[int, int], tuple[int, int]] = field(default_factory=dict)
    total_dots: int = 0
    theme: str = ""
    residual: int = 0


# ── Level-scaled counts ──────────────────────────────────────────────

def adversary_count(level: int) -> int:
    return min(int(_tun("adversary", "max_count", 6)), level // 2 + 1)


def cooperation_for_level(level: int) -> float:
    return min(0.8, 0.1 * level)


def prediction_for_level(level: int) -> float:
    return min(0.9, 0.1 + 0.08 * level)


def smart_chance(level: int) -> float:
    if level < _tun("adversary.ai", "smart_min_level", 3):
        return 0.0
    return min(0.7, 0.1 * (level - 2))


def pellet_count(level: int) -> int:
    base = _tun("maze", "pellets_base", 4)
    return min(_tun("maze", "pellets_max", 8), base + level // 3)


def _adversary_color(i: int) -> tuple[int, int, int]:
    r, g, b = colorsys.hls_to_rgb((i * 60 % 360) / 360.0, 0.5, 1.0)
    return (int(r * 255), int(g * 255), int(b * 255))


def spawn_adversaries(level: int, spawn: tuple[int, int],
                      rng: random.Random) -> list[Adversary]:
    """Adversaries all start on the spawn cell; behaviours cycle in order."""
    out = []
    chance = smart_chance(level)
    for i in range(adversary_count(level)):
        out.append(Adversary(
            id=i,
            x=spawn[0], y=spawn[1],
            behavior=BEHAVIOR_CYCLE[i % len(BEHAVIOR_CYCLE)],
            smart_mode=rng.random() < chance,
            cooperation=cooperation_for_level(level),
            prediction=prediction_for_level(level),
            home=spawn,
            color=_adversary_color(i),
        ))
    return out


# ── Generator ────────────────────────────────────────────────────────

def generate_level(level: int, rng: random.Random | None = None,
                   width: int = GRID_WIDTH,
                   height: int = GRID_HEIGHT) -> MazeLayout:
    rng = rng or random.Random()
    level = max(1, int(level))

    grid = make_grid(width, height, CELL_EMPTY)
    for y in range(height):
        for x in range(width):
            if x in (0, width - 1) or y in (0, height - 1):
                grid[y][x] = CELL_WALL

    player_start = (1, 1)
    adversary_spawn = (width - 2, height - 2)
    spawn_cells = (features.footprint(player_start, adversary_spawn)
                   | features.footprint(adversary_spawn, player_start))
    protected = features.grow(spawn_cells)

    theme = theme_for_level(level)
    LAYOUTS[theme](grid, rng, level, complexity_for_level(level))

    extra = min(_tun("maze", "extra_walls_per_level", 2) * level,
                _tun("maze", "extra_walls_max", 20))
    features.add_extra_walls(grid, rng, extra, protected)

    teleporters: dict = {}
    if level % 5 == 0:
        teleporters = features.add_teleporters(
            grid, rng, min(3, 1 + level // 10), protected)
        protected |= set(teleporters)
    if level % 3 == 0:
        features.add_bonus_rooms(grid, rng, min(3, 1 + level // 6), protected)
    if level % 7 == 0:
        features.add_safe_zones(grid, rng, 3 + level // 7, protected)

    features.clear_cells(grid, spawn_cells)
    residual = features.repair_connectivity(
        grid, player_start, rng, _tun("maze", "connectivity_passes", 40))

    features.place_dots(grid)
    features.place_power_pellets(grid, rng, pellet_count(level), protected)

    # The player stands on the start cell; nothing to collect there.
    sx, sy = player_start
    grid[sy][sx] = CELL_EMPTY
    total_dots = count_cells(grid, CELL_DOT)

    adversaries = spawn_adversaries(level, adversary_spawn, rng)

    print(f"[MAZE] level {level} theme={theme} dots={total_dots} "
          f"adversaries={len(adversaries)} teleporters={len(teleporters) // 2} "
          f"residual={residual}")

    return MazeLayout(
        grid=grid,
        player_start=player_start,
        adversary_spawn=adversary_spawn,
        adversaries=adversaries,
        teleporters=teleporters,
        total_dots=total_dots,
        theme=theme,
        residual=residual,
    )
