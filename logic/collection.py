"""logic/collection.py — What happens when the player arrives on a cell.

    apply_cell_effects(world, (x, y))

Dot          score (10 + combo bonus) × multiplier, combo streak
Power pellet score 50 × multiplier, every adversary scared
Bonus dot    score 100 × multiplier, +1 life
Teleporter   jump to the paired teleporter
Safe zone    player steps one tick faster for a few seconds

Collected cells become ``Empty``; teleporters and safe zones stay.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from core.constants import (
    CELL_EMPTY, CELL_DOT, CELL_POWER_PELLET, CELL_BONUS_DOT,
    CELL_TELEPORTER, CELL_SAFE_ZONE,
)
from core.events import (
    DotCollected, PelletCollected, BonusCollected, Teleported, SafeZoneEntered,
)
from core.tuning import get as _tun
from components.dev_log import SYSTEM
from logic.ai.brains import scare_all, scared_duration

if TYPE_CHECKING:
    from simulation.scheduler import DeferredEvent
    from simulation.world_state import WorldState

SPEED_RESTORE = "SPEED_RESTORE"


def apply_cell_effects(world: "WorldState", cell: tuple[int, int]) -> None:
    x, y = cell
    tag = world.grid[y][x]
    if tag == CELL_DOT:
        collect_dot(world, cell)
    elif tag == CELL_POWER_PELLET:
        collect_pellet(world, cell)
    elif tag == CELL_BONUS_DOT:
        collect_bonus(world, cell)
    elif tag == CELL_TELEPORTER:
        teleport(world, cell)
    elif tag == CELL_SAFE_ZONE:
        enter_safe_zone(world, cell)


# ── Collectibles ─────────────────────────────────────────────────────

def combo_bonus(combo: int) -> int:
    step = _tun("scoring", "combo_step", 2)
    cap = _tun("scoring", "combo_cap", 10)
    return step * min(max(0, combo - 1), cap)


def register_collection(world: "WorldState") -> int:
    """Update the combo streak for a collection happening now."""
    game = world.game
    now = world.clock.time
    window = _tun("scoring", "combo_window", 1.0)
    if game.last_collect_time is not None and now - game.last_collect_time <= window:
        game.combo += 1
    else:
        game.combo = 1
    game.last_collect_time = now
    game.high_combo = max(game.high_combo, game.combo)
    return game.combo


def collect_dot(world: "WorldState", cell: tuple[int, int]) -> int:
    game = world.game
    x, y = cell
    world.grid[y][x] = CELL_EMPTY
    combo = register_collection(world)
    points = (_tun("scoring", "dot", 10) + combo_bonus(combo)) * game.multiplier
    game.score += points
    game.dots_collected += 1
    world.bus.emit(DotCollected(x=x, y=y, points=points, combo=combo))
    return points


def collect_pellet(world: "WorldState", cell: tuple[int, int]) -> int:
    game = world.game
    x, y = cell
    world.grid[y][x] = CELL_EMPTY
    points = _tun("scoring", "pellet", 50) * game.multiplier
    game.score += points
    duration = scared_duration(game.level)
    scare_all(world, duration)
    game.power_active = True
    game.power_timer = duration
    world.bus.emit(PelletCollected(x=x, y=y, points=points, duration=duration))
    return points


def collect_bonus(world: "WorldState", cell: tuple[int, int]) -> int:
    game = world.game
    x, y = cell
    world.grid[y][x] = CELL_EMPTY
    points = _tun("scoring", "bonus_dot", 100) * game.multiplier
    game.score += points
    game.lives += 1
    world.bus.emit(BonusCollected(x=x, y=y, points=points, lives=game.lives))
    return points


# ── Persistent cells ─────────────────────────────────────────────────

def teleport(world: "WorldState", cell: tuple[int, int]) -> bool:
    partner = world.teleporters.get(cell)
    if partner is None:
        return False
    world.player.place(partner)
    world.bus.emit(Teleported(src=cell, dst=partner))
    return True


def enter_safe_zone(world: "WorldState", cell: tuple[int, int]) -> None:
    """Speed the player up and schedule the reversion.

    Re-entering while boosted restarts the timer instead of stacking.
    The reversion is tagged with the current level generation so it is
    dropped if the level changes first.
    """
    game = world.game
    boost = _tun("safe_zone", "speed_boost", 1)
    min_speed = _tun("player", "min_speed", 1)
    duration = _tun("safe_zone", "duration", 3.0)

    game.player_speed = max(min_speed, game.base_speed - boost)
    game.speed_boost_active = True
    world.scheduler.cancel_kind(SPEED_RESTORE)
    evt = world.scheduler.post_delta(world.clock.time, duration, SPEED_RESTORE,
                                     game.level_generation)
    world.log.record(SYSTEM, "sim", "safe zone boost", t=world.clock.time,
                     details={"until": evt.time})
    world.bus.emit(SafeZoneEntered(x=cell[0], y=cell[1], until=evt.time))


def restore_speed(world: "WorldState", event: "DeferredEvent") -> None:
    """Scheduler handler for ``SPEED_RESTORE``."""
    game = world.game
    game.player_speed = game.base_speed
    game.speed_boost_active = False
