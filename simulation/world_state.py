"""simulation/world_state.py — The explicit world record.

Everything one running game needs, owned by the ``Simulation`` and
passed by reference to generation, AI, pathfinding and the tick:

    grid, player, adversaries, game, clock, paths, scheduler, bus,
    log, rng, teleporters, player_start, adversary_spawn

Nothing in the simulation keeps module-level mutable state; two
worlds in one process never see each other.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field

from core.constants import CELL_WALL
from core.events import EventBus
from components import Player, Adversary, GameClock, GameState, DevLog
from logic.pathfinding import PathFinder
from simulation.scheduler import DeferredScheduler


@dataclass
class WorldState:
    grid: list[list[int]]
    player: Player = field(default_factory=Player)
    adversaries: list[Adversary] = field(default_factory=list)
    game: GameState = field(default_factory=GameState)
    clock: GameClock = field(default_factory=GameClock)
    scheduler: DeferredScheduler = field(default_factory=DeferredScheduler)
    bus: EventBus = field(default_factory=EventBus)
    log: DevLog = field(default_factory=DevLog)
    rng: random.Random = field(default_factory=random.Random)
    teleporters: dict[tuple[int, int], tuple[int, int]] = field(default_factory=dict)
    player_start: tuple[int, int] = (1, 1)
    adversary_spawn: tuple[int, int] = (1, 1)
    paths: PathFinder | None = None
    theme: str = ""

    _open_cells: list[tuple[int, int]] | None = field(default=None, repr=False)

    def __post_init__(self):
        if self.paths is None:
            # Cached paths age on the game clock, so they freeze on pause.
            self.paths = PathFinder(self.grid, clock=lambda: self.clock.time)

    # ── Queries ──────────────────────────────────────────────────────

    def open_cells(self) -> list[tuple[int, int]]:
        """Every non-wall cell.  Cached; walls never change mid-level."""
        if self._open_cells is None:
            self._open_cells = [
                (x, y)
                for y, row in enumerate(self.grid)
                for x, tag in enumerate(row)
                if tag != CELL_WALL
            ]
        return self._open_cells

    # ── Level loading ────────────────────────────────────────────────

    def load_layout(self, layout) -> None:
        """Swap in a freshly generated ``MazeLayout``.

        Bumps ``level_generation`` so deferred events from the previous
        level are discarded, and drops every cached path.
        """
        self.grid = layout.grid
        self.adversaries = list(layout.adversaries)
        self.teleporters = dict(layout.teleporters)
        self.player_start = layout.player_start
        self.adversary_spawn = layout.adversary_spawn
        self.theme = layout.theme
        self._open_cells = None

        self.player.place(layout.player_start)
        self.player.direction = (0, 0)
        self.player.move_timer = 0
        self.player.queued.clear()

        self.game.reset_level()
        self.game.total_dots = layout.total_dots
        self.game.level_generation += 1
        self.scheduler.clear()
        self.paths.reset(self.grid)

    # ── Test arenas ──────────────────────────────────────────────────

    @classmethod
    def create(cls, grid: list[list[int]], *,
               player: tuple[int, int] = (1, 1),
               adversaries: list[Adversary] | None = None,
               seed: int = 0,
               total_dots: int | None = None,
               teleporters: dict | None = None) -> "WorldState":
        """Hand-built world around *grid* (no generator involved)."""
        from core.grid import count_cells
        from core.constants import CELL_DOT

        world = cls(grid=grid, rng=random.Random(seed))
        world.player.place(player)
        world.player_start = player
        world.adversaries = list(adversaries or [])
        if world.adversaries:
            world.adversary_spawn = world.adversaries[0].home
        world.teleporters = dict(teleporters or {})
        world.game.total_dots = (total_dots if total_dots is not None
                                 else count_cells(grid, CELL_DOT))
        world.game.level_generation = 1
        return world
