"""logic/ai — Adversary AI subpackage.

Modules
-------
brains     — policy registry, scared state, per-tick adversary runner
behaviors  — the six movement policies + flee and random fallbacks
smart      — SmartMode decorator (range-aware override)

``brains`` is imported first so the registry exists before
``behaviors`` registers into it.
"""

from logic.ai import brains                                        # noqa: F401
from logic.ai.brains import (                                      # noqa: F401
    decide_move, policy_for, scare_all, scared_duration, tick_adversaries,
)
