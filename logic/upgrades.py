"""logic/upgrades.py — Between-level upgrade shop.

Catalogue (costs come from ``[upgrades.*]`` in tuning.toml):

    speed       player steps one tick sooner (floor: player.min_speed)
    lives       +1 life
    multiplier  score multiplier ×2

Purchases spend score.  Unknown or unaffordable kinds are rejected
with ``False``; nothing raises.
"""

from __future__ import annotations
from dataclasses import dataclass

from core.tuning import get as _tun
from components import GameState


@dataclass(frozen=True)
class Upgrade:
    kind: str
    label: str
    default_cost: int

    @property
    def cost(self) -> int:
        return int(_tun(f"upgrades.{self.kind}", "cost", self.default_cost))


UPGRADES: dict[str, Upgrade] = {
    "speed":      Upgrade("speed", "Speed +1", 100),
    "lives":      Upgrade("lives", "Extra life", 500),
    "multiplier": Upgrade("multiplier", "Score x2", 1000),
}


def cost_of(kind: str) -> int | None:
    up = UPGRADES.get(kind)
    return up.cost if up else None


def can_afford(game: GameState, kind: str) -> bool:
    cost = cost_of(kind)
    return cost is not None and game.score >= cost


def catalogue(game: GameState) -> list[tuple[Upgrade, bool]]:
    """Every upgrade with whether *game* can currently afford it."""
    return [(up, game.score >= up.cost) for up in UPGRADES.values()]


def apply_upgrade(game: GameState, kind: str) -> bool:
    """Buy *kind* if affordable.  Returns True on purchase."""
    if not can_afford(game, kind):
        return False

    cost = cost_of(kind)
    game.score -= cost
    if kind == "speed":
        floor = _tun("player", "min_speed", 1)
        game.base_speed = max(floor, game.base_speed - 1)
        game.player_speed = max(floor, game.player_speed - 1)
    elif kind == "lives":
        game.lives += 1
    elif kind == "multiplier":
        game.multiplier *= 2

    print(f"[UPGRADE] bought {kind} for {cost} — score {game.score}")
    return True
