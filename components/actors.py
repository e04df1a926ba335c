"""components.actors — Player and adversary records."""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from enum import Enum

from core.tuning import get as _tun


class Behavior(Enum):
    """Closed set of adversary movement policies.

    Each member maps to exactly one policy object in
    ``logic.ai.behaviors``.  Smart mode is NOT a member — it wraps
    whichever policy the adversary already has.
    """
    AGGRESSIVE  = "aggressive"
    PATROL      = "patrol"
    AMBUSH      = "ambush"
    RANDOM      = "random"
    COORDINATOR = "coordinator"
    TRAPPER     = "trapper"


# Spawn order: adversary ``i`` gets ``BEHAVIOR_CYCLE[i % 6]``.
BEHAVIOR_CYCLE = (
    Behavior.AGGRESSIVE,
    Behavior.PATROL,
    Behavior.AMBUSH,
    Behavior.RANDOM,
    Behavior.COORDINATOR,
    Behavior.TRAPPER,
)


@dataclass
class Player:
    """The player's cell, heading and step timer.

    ``direction`` is a unit vector or ``(0, 0)``.
    ``move_timer`` counts ticks since the last step.
    ``queued`` buffers direction intents that could not be taken yet
    (e.g. pressing LEFT one cell before a side corridor opens).
    """
    x: int = 1
    y: int = 1
    direction: tuple[int, int] = (0, 0)
    move_timer: int = 0
    queued: deque = field(
        default_factory=lambda: deque(maxlen=_tun("player", "queue_size", 3)))

    @property
    def cell(self) -> tuple[int, int]:
        return (self.x, self.y)

    def place(self, cell: tuple[int, int]) -> None:
        self.x, self.y = cell


@dataclass
class Adversary:
    """An AI-controlled pursuer.

    ``cooperation`` — probability a coordinator encircles instead of chasing.
    ``prediction``  — how far ahead (as a 0–1 fraction of the max horizon)
                      ambushers and smart adversaries extrapolate the player.
    ``patrol_target`` — current patrol waypoint, re-rolled on arrival.
    ``home``        — spawn cell; eaten adversaries are sent back here.
    """
    id: int = 0
    x: int = 0
    y: int = 0
    behavior: Behavior = Behavior.AGGRESSIVE
    move_timer: int = 0
    scared: bool = False
    scared_timer: int = 0              # ticks
    smart_mode: bool = False
    cooperation: float = 0.0           # 0–1
    prediction: float = 0.0            # 0–1
    patrol_target: tuple[int, int] | None = None
    home: tuple[int, int] = (0, 0)
    color: tuple[int, int, int] = (255, 0, 0)

    @property
    def cell(self) -> tuple[int, int]:
        return (self.x, self.y)

    def place(self, cell: tuple[int, int]) -> None:
        self.x, self.y = cell

    def scare(self, ticks: int) -> None:
        self.scared = True
        self.scared_timer = ticks

    def calm(self) -> None:
        self.scared = False
        self.scared_timer = 0
