"""simulation/game.py — The Simulation facade.

Owns one ``WorldState`` and is the only thing the presentation layer
talks to:

    sim = Simulation()
    sim.new_game(seed=42)
    sim.queue_direction(LEFT)
    sim.tick()                     # once per fixed step
    snap = sim.snapshot()          # read-only summary for HUD / tests

Level flow:  play → all dots collected → paused + ``awaiting_upgrades``
→ ``apply_upgrade(kind)`` (any number) → ``resume_after_upgrades()``
generates the next level and unpauses.
"""

from __future__ import annotations
import random

from core.constants import DIRECTIONS
from core.tuning import get as _tun
from components import GameState
from components.dev_log import SYSTEM
from logic.collection import SPEED_RESTORE, restore_speed
from logic.maze import generate_level
from logic.tick import tick_world
from logic import upgrades
from simulation.world_state import WorldState


class Simulation:
    """Fixed-step maze-chase simulation."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self.rng = random.Random(seed)
        self.world: WorldState | None = None
        self.new_game(seed)

    # ── Lifecycle ────────────────────────────────────────────────────

    def new_game(self, seed: int | None = None) -> None:
        """Fresh score, lives and level 1."""
        if seed is not None:
            self.seed = seed
            self.rng = random.Random(seed)
        game = GameState(
            lives=_tun("player", "start_lives", 3),
            base_speed=_tun("player", "speed", 4),
            player_speed=_tun("player", "speed", 4),
            enemy_speed=_tun("adversary", "speed", 2),
        )
        self.world = WorldState(grid=[], game=game, rng=self.rng)
        self.world.scheduler.register_handler(SPEED_RESTORE, restore_speed)
        self._start_level()
        print(f"[SIM] new game (seed={self.seed})")

    def _start_level(self) -> None:
        world = self.world
        layout = generate_level(world.game.level, self.rng)
        world.load_layout(layout)
        world.log.record(SYSTEM, "sim", "level start", t=world.clock.time,
                         details={"level": world.game.level,
                                  "theme": layout.theme,
                                  "dots": layout.total_dots})

    # ── Per-tick ─────────────────────────────────────────────────────

    def tick(self) -> bool:
        return tick_world(self.world)

    # ── Intents ──────────────────────────────────────────────────────

    def queue_direction(self, direction: tuple[int, int]) -> None:
        """Buffer a direction intent; the tick takes it when it can."""
        if direction not in DIRECTIONS:
            return
        self.world.player.queued.append(direction)

    def toggle_pause(self) -> bool:
        """Flip pause.  Ignored while the upgrade menu is open."""
        game = self.world.game
        if game.awaiting_upgrades or not game.is_playing:
            return game.is_paused
        game.is_paused = not game.is_paused
        return game.is_paused

    def toggle_diagnostics(self) -> bool:
        game = self.world.game
        game.show_diagnostics = not game.show_diagnostics
        return game.show_diagnostics

    def apply_upgrade(self, kind: str) -> bool:
        world = self.world
        bought = upgrades.apply_upgrade(world.game, kind)
        if bought:
            world.log.record(SYSTEM, "sim", f"upgrade {kind}",
                             t=world.clock.time,
                             details={"score": world.game.score})
        return bought

    def resume_after_upgrades(self) -> None:
        """Generate ``game.level`` and continue playing."""
        game = self.world.game
        if not game.awaiting_upgrades:
            return
        game.awaiting_upgrades = False
        self._start_level()
        game.is_paused = False

    # ── Read-only view ───────────────────────────────────────────────

    def snapshot(self) -> dict:
        world = self.world
        game = world.game
        return {
            "score": game.score,
            "level": game.level,
            "lives": game.lives,
            "multiplier": game.multiplier,
            "combo": game.combo,
            "dots_collected": game.dots_collected,
            "total_dots": game.total_dots,
            "is_playing": game.is_playing,
            "is_paused": game.is_paused,
            "awaiting_upgrades": game.awaiting_upgrades,
            "power_active": game.power_active,
            "player": world.player.cell,
            "adversaries": [(a.id, a.cell, a.behavior.value, a.scared)
                            for a in world.adversaries],
            "theme": world.theme,
            "ticks": world.clock.ticks,
            "paths": world.paths.stats(),
        }
