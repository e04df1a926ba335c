"""logic/collisions.py — Player ↔ adversary contact.

Checked twice per tick: once right after the player steps (walking
into an adversary counts), then for each adversary after it has
(maybe) moved:

* scared adversary on the player's cell → eaten: points
  ``(eat_base + eat_per_level * level) * multiplier``, sent home, calmed.
* otherwise → the player loses a life, returns to the start cell and
  loses the combo; the catcher goes home.  Zero lives ends the game.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from core.constants import STOP
from core.events import AdversaryEaten, PlayerCaught, GameOver
from core.tuning import get as _tun
from components import Adversary
from components.dev_log import SYSTEM

if TYPE_CHECKING:
    from simulation.world_state import WorldState


def capture_points(level: int, multiplier: int) -> int:
    base = _tun("scoring", "eat_base", 200)
    per_level = _tun("scoring", "eat_per_level", 50)
    return (base + per_level * level) * multiplier


def resolve_collision(world: "WorldState", adv: Adversary) -> bool:
    """Apply the contact rule if *adv* shares the player's cell."""
    if adv.cell != world.player.cell:
        return False
    if adv.scared:
        eat_adversary(world, adv)
    else:
        catch_player(world, adv)
    return True


def resolve_player_contacts(world: "WorldState") -> int:
    """Contact check for a player who just stepped.

    Every scared adversary on the cell is eaten; the first live one
    catches the player, who is then back on the start cell, so the scan
    stops there.  Returns the number of contacts.
    """
    contacts = 0
    for adv in world.adversaries:
        if adv.cell != world.player.cell:
            continue
        contacts += 1
        if adv.scared:
            eat_adversary(world, adv)
        else:
            catch_player(world, adv)
            break
    return contacts


def eat_adversary(world: "WorldState", adv: Adversary) -> int:
    game = world.game
    points = capture_points(game.level, game.multiplier)
    game.score += points
    game.adversaries_eaten += 1
    adv.place(adv.home)
    adv.calm()
    adv.move_timer = 0
    adv.patrol_target = None
    world.log.record(adv.id, "ai", "eaten", t=world.clock.time,
                     details={"points": points})
    world.bus.emit(AdversaryEaten(adversary_id=adv.id, points=points))
    return points


def catch_player(world: "WorldState", adv: Adversary) -> None:
    game = world.game
    player = world.player
    game.lives -= 1
    game.combo = 0
    player.place(world.player_start)
    player.direction = STOP
    player.move_timer = 0
    player.queued.clear()
    # The catcher would otherwise sit on the start cell and catch again.
    adv.place(adv.home)
    adv.move_timer = 0
    world.log.record(adv.id, "ai", "caught player", t=world.clock.time,
                     details={"lives": game.lives})
    world.bus.emit(PlayerCaught(adversary_id=adv.id, lives_left=game.lives))

    if game.lives <= 0:
        game.lives = 0
        game.is_playing = False
        world.log.record(SYSTEM, "sim", "game over", t=world.clock.time,
                         details={"score": game.score})
        world.bus.emit(GameOver(score=game.score, level=game.level))
        print(f"[SIM] game over — score {game.score}, level {game.level}")
