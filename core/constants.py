"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.
Gameplay *tuning* values (speeds, scores, costs) live in
``data/tuning.toml`` and are read through ``core.tuning``; this module
only holds things that define the shape of the game itself.

Unit System
-----------
All positions are integer **cells** on a fixed grid, written ``(x, y)``
and indexed ``grid[y][x]``.  Time is counted in **ticks** (one fixed
simulation step) or in seconds of game-clock time:

    Position                cell    (integer x, y)
    Speed                   ticks   (ticks per step — lower is faster)
    Time (simulation)       tick    (1 / TICK_RATE s)
    Time (clock)            s       (GameClock.time)

Rendering converts to pixels via ``CELL_SIZE`` (px per cell).
No simulation code should reference pixels — only the renderer.
"""

# ── Grid shape ──────────────────────────────────────────────────────
GRID_WIDTH = 30
GRID_HEIGHT = 20

# ── Fixed-step clock ────────────────────────────────────────────────
TICK_RATE = 60                  # ticks per second
TICK_DT = 1.0 / TICK_RATE       # s

# Cell tags  (must match CELL_COLORS)
CELL_EMPTY        = 0
CELL_WALL         = 1
CELL_DOT          = 2
CELL_POWER_PELLET = 3
CELL_TELEPORTER   = 4
CELL_BONUS_DOT    = 5
CELL_SAFE_ZONE    = 6

CELL_NAMES = {
    CELL_EMPTY: "empty",
    CELL_WALL: "wall",
    CELL_DOT: "dot",
    CELL_POWER_PELLET: "power_pellet",
    CELL_TELEPORTER: "teleporter",
    CELL_BONUS_DOT: "bonus_dot",
    CELL_SAFE_ZONE: "safe_zone",
}

# ── Directions (dx, dy) ─────────────────────────────────────────────
UP    = (0, -1)
DOWN  = (0, 1)
LEFT  = (-1, 0)
RIGHT = (1, 0)
STOP  = (0, 0)

DIRECTIONS = (UP, DOWN, LEFT, RIGHT)

# Render
CELL_SIZE = 24
HUD_HEIGHT = 40

# Simple cell palette — tag → color
CELL_COLORS = {
    0: (17, 17, 17),       # empty
    1: (68, 68, 68),       # wall
    2: (255, 255, 255),    # dot
    3: (255, 255, 0),      # power pellet
    4: (180, 20, 180),     # teleporter
    5: (255, 140, 0),      # bonus dot
    6: (30, 90, 60),       # safe zone
}

PLAYER_COLOR = (255, 255, 0)
SCARED_COLOR = (0, 0, 255)
