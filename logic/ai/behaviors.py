"""logic/ai/behaviors.py — The six adversary movement policies.

Each policy is a small object with one capability::

    policy.decide_move(adversary, world) -> (dx, dy) | None

``None`` means "no open neighbour, stay put this tick".  Any policy that
cannot find a path degrades to ``random_move`` rather than freezing.

Policies register themselves with ``logic.ai.brains`` at import time.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from core.constants import STOP
from core.grid import (
    clamp_cell, direction_to, is_passable, manhattan,
    open_directions, open_neighbors,
)
from core.tuning import get as _tun
from components import Adversary, Behavior
from logic.ai.brains import register_policy

if TYPE_CHECKING:
    from simulation.world_state import WorldState

Direction = tuple[int, int]


# ── Shared movement helpers ──────────────────────────────────────────

def random_move(adv: Adversary, world: "WorldState") -> Direction | None:
    """Uniform pick among open adjacent cells."""
    options = open_directions(world.grid, adv.cell)
    if not options:
        return None
    return world.rng.choice(options)


def step_toward(adv: Adversary, world: "WorldState",
                target: tuple[int, int]) -> Direction | None:
    """First step of the cached A* path to *target*, else a random step."""
    path = world.paths.find_path(adv.cell, target)
    if not path:
        return random_move(adv, world)
    return direction_to(adv.cell, path[0])


def back_off(world: "WorldState", target: tuple[int, int],
             anchor: tuple[int, int]) -> tuple[int, int]:
    """Walk *target* back toward *anchor* until it lands on an open cell."""
    tx, ty = target
    while (tx, ty) != anchor and not is_passable(world.grid, tx, ty):
        sx, sy = direction_to((tx, ty), anchor)
        tx += sx
        ty += sy
    return (tx, ty)


def ambush_point(adv: Adversary, world: "WorldState") -> tuple[int, int]:
    """Cell ``4 + 4 * prediction`` steps ahead of the player, clamped."""
    player = world.player
    dx, dy = player.direction
    if (dx, dy) == STOP:
        return player.cell
    ahead = 4 + round(4 * adv.prediction)
    target = clamp_cell(world.grid, player.x + dx * ahead, player.y + dy * ahead)
    return back_off(world, target, player.cell)


# ── Policies ─────────────────────────────────────────────────────────

class Policy:
    behavior: Behavior

    def decide_move(self, adv: Adversary, world: "WorldState") -> Direction | None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Aggressive(Policy):
    """Straight A* pursuit of the player's current cell."""
    behavior = Behavior.AGGRESSIVE

    def decide_move(self, adv, world):
        return step_toward(adv, world, world.player.cell)


class Patrol(Policy):
    """Alternate between pursuit and wandering between random waypoints.

    The duty cycle runs off the global tick count, so every patroller
    switches phase at the same moment.  Waypoints are re-rolled on
    arrival.
    """
    behavior = Behavior.PATROL

    def chasing(self, world) -> bool:
        phase = max(1, int(_tun("adversary.ai", "patrol_phase_ticks", 240)))
        return (world.clock.ticks // phase) % 2 == 1

    def decide_move(self, adv, world):
        if self.chasing(world):
            return AGGRESSIVE.decide_move(adv, world)
        target = adv.patrol_target
        if (target is None or target == adv.cell
                or not is_passable(world.grid, *target)):
            cells = world.open_cells()
            if not cells:
                return random_move(adv, world)
            target = world.rng.choice(cells)
            adv.patrol_target = target
        return step_toward(adv, world, target)


class Ambush(Policy):
    """Head for where the player will be, not where it is."""
    behavior = Behavior.AMBUSH

    def decide_move(self, adv, world):
        return step_toward(adv, world, ambush_point(adv, world))


class RandomWalk(Policy):
    behavior = Behavior.RANDOM

    def decide_move(self, adv, world):
        return random_move(adv, world)


# Ring slots around the player, picked by adversary id.
_RING = ((1, 0), (0, 1), (-1, 0), (0, -1))


class Coordinator(Policy):
    """Encircle: with probability ``cooperation`` take a ring slot, else chase."""
    behavior = Behavior.COORDINATOR

    def ring_position(self, adv, world) -> tuple[int, int]:
        radius = int(_tun("adversary.ai", "ring_radius", 3))
        px, py = world.player.cell
        ox, oy = _RING[adv.id % len(_RING)]
        target = clamp_cell(world.grid, px + ox * radius, py + oy * radius)
        return back_off(world, target, world.player.cell)

    def decide_move(self, adv, world):
        if world.rng.random() >= adv.cooperation:
            return AGGRESSIVE.decide_move(adv, world)
        target = self.ring_position(adv, world)
        if target == adv.cell or target == world.player.cell:
            return AGGRESSIVE.decide_move(adv, world)
        return step_toward(adv, world, target)


class Trapper(Policy):
    """Cut the player off at the next junction along its heading.

    Falls back to ``Ambush`` when the player is standing still or facing
    a wall.
    """
    behavior = Behavior.TRAPPER
    max_lookahead = 8

    def blocking_point(self, world) -> tuple[int, int] | None:
        player = world.player
        dx, dy = player.direction
        if (dx, dy) == STOP:
            return None
        x, y = player.cell
        best = None
        for _ in range(self.max_lookahead):
            nx, ny = x + dx, y + dy
            if not is_passable(world.grid, nx, ny):
                break
            x, y = nx, ny
            best = (x, y)
            if len(open_neighbors(world.grid, best)) >= 3:
                break
        return best

    def decide_move(self, adv, world):
        target = self.blocking_point(world)
        if target is None:
            return AMBUSH.decide_move(adv, world)
        return step_toward(adv, world, target)


# ── Scared ───────────────────────────────────────────────────────────

def flee_move(adv: Adversary, world: "WorldState") -> Direction | None:
    """Pick the open neighbour farthest from the player and from peers.

    Score = distance to player + ``flee_peer_weight`` × (distance to the
    nearest other adversary, capped at ``flee_peer_cap``).  Ties are
    broken at random.
    """
    options = open_directions(world.grid, adv.cell)
    if not options:
        return None
    weight = _tun("adversary.ai", "flee_peer_weight", 0.5)
    cap = _tun("adversary.ai", "flee_peer_cap", 6)
    player = world.player.cell
    peers = [a.cell for a in world.adversaries if a is not adv]

    best_score = None
    best: list[Direction] = []
    for d in options:
        cell = (adv.x + d[0], adv.y + d[1])
        score = manhattan(cell, player)
        if peers:
            score += weight * min(cap, min(manhattan(cell, p) for p in peers))
        if best_score is None or score > best_score:
            best_score = score
            best = [d]
        elif score == best_score:
            best.append(d)
    return world.rng.choice(best)


AGGRESSIVE = Aggressive()
PATROL = Patrol()
AMBUSH = Ambush()
RANDOM = RandomWalk()
COORDINATOR = Coordinator()
TRAPPER = Trapper()

for _policy in (AGGRESSIVE, PATROL, AMBUSH, RANDOM, COORDINATOR, TRAPPER):
    register_policy(_policy.behavior, _policy)
