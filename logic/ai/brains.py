"""logic/ai/brains.py — Policy registry and adversary runner.

Public API
----------
``register_policy(behavior, policy)`` — add a policy to the registry
``policy_for(adversary)``             — the policy actually used (smart-wrapped)
``decide_move(adversary, world)``     — scared → flee, else policy
``scare_all(world, ticks)``           — power-pellet effect
``tick_adversaries(world)``           — per-tick countdown, movement, collisions

Policy implementations register themselves at import time via
``register_policy``.  Import order matters: this module must be
importable before ``logic.ai.behaviors`` calls ``register_policy``.
"""

from __future__ import annotations
import traceback
from typing import TYPE_CHECKING

from core.grid import is_passable
from core.tuning import get as _tun
from components import Adversary, Behavior
from logic.collisions import resolve_collision

if TYPE_CHECKING:
    from simulation.world_state import WorldState


# ── Registry ─────────────────────────────────────────────────────────

_registry: dict[Behavior, object] = {}
_smart: dict[Behavior, object] = {}


def register_policy(behavior: Behavior, policy) -> None:
    """Register *policy* as the movement policy for *behavior*."""
    _registry[behavior] = policy
    _smart.pop(behavior, None)


def policy_for(adv: Adversary):
    """Base policy for the adversary's tag, smart-wrapped if enabled."""
    base = _registry[adv.behavior]
    if not adv.smart_mode:
        return base
    wrapped = _smart.get(adv.behavior)
    if wrapped is None:
        from logic.ai.smart import SmartMode
        wrapped = _smart[adv.behavior] = SmartMode(base)
    return wrapped


# ── DevLog helper ────────────────────────────────────────────────────

def _log(world: "WorldState", adv: Adversary, cat: str, msg: str, **kw):
    world.log.record(adv.id, cat, msg,
                     name=f"{adv.behavior.value}#{adv.id}",
                     t=world.clock.time, **kw)


# ── Decisions ────────────────────────────────────────────────────────

def decide_move(adv: Adversary, world: "WorldState"):
    """One move for *adv* this tick, or ``None`` to stay put."""
    if adv.scared:
        return flee_move(adv, world)
    return policy_for(adv).decide_move(adv, world)


def scare_all(world: "WorldState", ticks: int) -> None:
    """Scare every adversary for the same *ticks*, so they calm together."""
    for adv in world.adversaries:
        adv.scare(ticks)
        _log(world, adv, "ai", "scared", details={"ticks": ticks})


def scared_duration(level: int) -> int:
    """Scare length in ticks; shrinks on later levels down to a floor."""
    base = _tun("adversary", "scared_ticks", 300)
    per_level = _tun("adversary", "scared_ticks_per_level", 15)
    floor = _tun("adversary", "scared_ticks_min", 120)
    return max(floor, base - per_level * (level - 1))


# ── Runner ───────────────────────────────────────────────────────────

def tick_adversaries(world: "WorldState") -> None:
    """Advance every adversary by one tick.

    Order per adversary: scared countdown → move (when its timer reaches
    the threshold; doubled while scared) → collision with the player.
    Stops early once the game is over.
    """
    game = world.game
    scared_mult = _tun("adversary", "scared_speed_mult", 2)

    for adv in world.adversaries:
        if adv.scared:
            adv.scared_timer -= 1
            if adv.scared_timer <= 0:
                adv.calm()
                _log(world, adv, "ai", "calm")

        adv.move_timer += 1
        threshold = game.enemy_speed * (scared_mult if adv.scared else 1)
        if adv.move_timer >= threshold:
            adv.move_timer = 0
            try:
                move = decide_move(adv, world)
            except Exception as exc:
                traceback.print_exc()
                _log(world, adv, "error", f"policy crash: {exc}")
                move = random_move(adv, world)
            if move is not None:
                nx, ny = adv.x + move[0], adv.y + move[1]
                if is_passable(world.grid, nx, ny):
                    adv.place((nx, ny))

        resolve_collision(world, adv)
        if not game.is_playing:
            return


# Import policy modules to trigger their register_policy() calls.
# These imports MUST come after the registry functions are defined.
from logic.ai.behaviors import flee_move, random_move    # noqa: E402
