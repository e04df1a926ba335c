"""logic/ai/smart.py — Range-aware override composed over any policy.

    SmartMode(PATROL).decide_move(adv, world)

Close (≤ ``smart_close``)   → direct pursuit.
Medium (≤ ``smart_medium``) → path to the player's predicted position.
Far                          → coordinators keep coordinating, everyone
                               else patrols.
"""

from __future__ import annotations

from core.constants import STOP
from core.grid import is_passable, manhattan
from core.tuning import get as _tun
from components import Behavior
from logic.ai.behaviors import (
    AGGRESSIVE, PATROL, Policy, step_toward,
)


def predict_player(world, steps: int) -> tuple[int, int]:
    """Walk the player's heading up to *steps* cells, stopping at walls."""
    player = world.player
    dx, dy = player.direction
    x, y = player.cell
    if (dx, dy) == STOP:
        return (x, y)
    for _ in range(steps):
        if not is_passable(world.grid, x + dx, y + dy):
            break
        x += dx
        y += dy
    return (x, y)


class SmartMode(Policy):
    def __init__(self, inner: Policy):
        self.inner = inner
        self.behavior = inner.behavior

    def decide_move(self, adv, world):
        dist = manhattan(adv.cell, world.player.cell)
        if dist <= _tun("adversary.ai", "smart_close", 3):
            return AGGRESSIVE.decide_move(adv, world)
        if dist <= _tun("adversary.ai", "smart_medium", 8):
            steps = max(1, round(4 * adv.prediction))
            return step_toward(adv, world, predict_player(world, steps))
        if self.inner.behavior == Behavior.COORDINATOR:
            return self.inner.decide_move(adv, world)
        return PATROL.decide_move(adv, world)

    def __repr__(self) -> str:
        return f"SmartMode({self.inner!r})"
