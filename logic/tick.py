"""logic/tick.py — One fixed simulation step.

Houses the per-tick pipeline plus the player movement system, which is
too small to warrant its own file.

Usage::

    from logic.tick import tick_world
    tick_world(world)          # called TICK_RATE times per second
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from core.constants import TICK_DT, STOP
from core.events import LevelComplete
from core.grid import is_passable
from components.dev_log import SYSTEM
from logic.ai import tick_adversaries
from logic.collection import apply_cell_effects
from logic.collisions import resolve_player_contacts

if TYPE_CHECKING:
    from simulation.world_state import WorldState


# ── Player ───────────────────────────────────────────────────────────

def resolve_direction(world: "WorldState") -> tuple[int, int]:
    """Heading for the next player step.

    The most recent queued intent whose target is open wins and the
    queue is emptied; otherwise keep the current heading.
    """
    player = world.player
    for d in reversed(player.queued):
        if is_passable(world.grid, player.x + d[0], player.y + d[1]):
            player.queued.clear()
            return d
    return player.direction


def player_system(world: "WorldState") -> bool:
    """Step the player when its timer is due.  Returns True if it moved."""
    game = world.game
    player = world.player

    player.move_timer += 1
    if player.move_timer < game.player_speed:
        return False
    player.move_timer = 0

    player.direction = resolve_direction(world)
    if player.direction == STOP:
        return False
    nx = player.x + player.direction[0]
    ny = player.y + player.direction[1]
    if not is_passable(world.grid, nx, ny):
        return False

    player.place((nx, ny))
    apply_cell_effects(world, (nx, ny))
    return True


def check_level_complete(world: "WorldState") -> bool:
    game = world.game
    if game.total_dots <= 0 or game.dots_collected < game.total_dots:
        return False
    game.level += 1
    game.is_paused = True
    game.awaiting_upgrades = True
    world.log.record(SYSTEM, "sim", "level complete", t=world.clock.time,
                     details={"next": game.level, "score": game.score})
    world.bus.emit(LevelComplete(level=game.level, score=game.score))
    print(f"[SIM] level {game.level - 1} complete — score {game.score}")
    return True


def power_system(world: "WorldState") -> None:
    game = world.game
    if not game.power_active:
        return
    game.power_timer -= 1
    if game.power_timer <= 0:
        game.power_timer = 0
        game.power_active = False


# ── Pipeline ─────────────────────────────────────────────────────────

def tick_world(world: "WorldState") -> bool:
    """Advance the world by one fixed step.

    Order: clock → due deferred events → player → level check →
    player contacts → power timer → adversaries (+ collisions) →
    event bus.  The pellet tick counts as the first scared tick: a
    pellet eaten on tick N calms the adversaries and ends the power
    state on tick N + duration - 1.
    Returns False when nothing ran (not playing or paused).
    """
    game = world.game
    if not game.is_playing or game.is_paused:
        return False

    world.clock.ticks += 1
    world.clock.time = world.clock.ticks * TICK_DT
    world.scheduler.tick(world, world.clock.time, game.level_generation)

    if player_system(world):
        if check_level_complete(world):
            world.bus.drain()
            return True
        resolve_player_contacts(world)
        if not game.is_playing:
            world.bus.drain()
            return True

    power_system(world)
    tick_adversaries(world)

    world.bus.drain()
    return True
