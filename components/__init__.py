"""components — Plain dataclass records, organised by domain.

Submodules
----------
actors      Player, Adversary, Behavior
resources   GameClock, GameState
dev_log     DevLog

All public names are re-exported here so code can do
``from components import Player``.
"""

# ── Actors ───────────────────────────────────────────────────────────
from components.actors import Player, Adversary, Behavior, BEHAVIOR_CYCLE

# ── World resources / singletons ─────────────────────────────────────
from components.resources import GameClock, GameState

# ── Diagnostics ──────────────────────────────────────────────────────
from components.dev_log import DevLog

__all__ = [
    # actors
    "Player", "Adversary", "Behavior", "BEHAVIOR_CYCLE",
    # resources
    "GameClock", "GameState",
    # diagnostics
    "DevLog",
]
