"""logic/maze — Procedural level generation.

Public API
----------
``generate_level(level, rng)`` → ``MazeLayout``
``reachable_from(grid, start)`` — BFS flood, used by the generator and tests
``THEMES`` / ``theme_for_level(level)``
"""

from logic.maze.generator import MazeLayout, generate_level
from logic.maze.features import reachable_from
from logic.maze.layouts import THEMES, theme_for_level

__all__ = ["MazeLayout", "generate_level", "reachable_from",
           "THEMES", "theme_for_level"]
