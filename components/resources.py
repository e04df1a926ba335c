"""components.resources — World-level singletons (not per-actor)."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class GameClock:
    """Monotonic simulation time.

    Advanced once per simulation tick, never while paused, so every
    timestamp-based rule (combo window, path-cache TTL, safe-zone
    expiry) freezes together with the game.
    """
    ticks: int = 0
    time: float = 0.0              # s


@dataclass
class GameState:
    """Score, lives, level and the per-level counters.

    Score, lives, multiplier and ``base_speed`` survive level
    transitions; the per-level block is reset by ``reset_level()``.

    ``base_speed``   — player ticks-per-step as bought with upgrades.
    ``player_speed`` — the value actually used this tick (safe zones
                       lower it temporarily).
    ``level_generation`` — bumped every time a level is generated;
                       deferred events are tagged with it.
    """
    score: int = 0
    level: int = 1
    lives: int = 3
    multiplier: int = 1
    is_playing: bool = True
    is_paused: bool = False
    awaiting_upgrades: bool = False
    show_diagnostics: bool = False

    base_speed: int = 4            # ticks
    player_speed: int = 4          # ticks
    enemy_speed: int = 2           # ticks

    # ── per level ────────────────────────────────────────────────────
    dots_collected: int = 0
    total_dots: int = 0
    combo: int = 0
    last_collect_time: float | None = None   # s
    power_active: bool = False
    power_timer: int = 0           # ticks
    speed_boost_active: bool = False
    level_generation: int = 0

    # ── session stats ────────────────────────────────────────────────
    high_combo: int = 0
    adversaries_eaten: int = 0

    def reset_level(self) -> None:
        """Clear per-level counters before a new level starts."""
        self.dots_collected = 0
        self.total_dots = 0
        self.combo = 0
        self.last_collect_time = None
        self.power_active = False
        self.power_timer = 0
        self.speed_boost_active = False
        self.player_speed = self.base_speed
