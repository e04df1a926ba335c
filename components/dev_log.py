"""components.dev_log — Structured AI / system event log.

A ring buffer that records timestamped state changes of adversaries
(scared, calmed, eaten, caught the player) and simulation transitions
(level generated, upgrades bought).  Read by the diagnostics overlay
to give a live feed of what every adversary is doing and why.

Usage:
    world.log.record(adv.id, "ai", "scared", t=world.clock.time,
                     details={"ticks": 300})

Each entry is a dict:
    {"t": float, "aid": int, "name": str, "cat": str,
     "msg": str, "details": dict | None}

``aid`` is the adversary id, or ``-1`` for simulation-wide entries.
"""

from __future__ import annotations
from dataclasses import dataclass, field

SYSTEM = -1


@dataclass
class DevLog:
    """Ring-buffer of AI / system events for the diagnostics overlay."""

    entries: list[dict] = field(default_factory=list)
    max_entries: int = 300

    def record(self, aid: int, cat: str, msg: str, *,
               name: str = "", t: float = 0.0,
               details: dict | None = None) -> None:
        entry = {
            "t": t,
            "aid": aid,
            "name": name or ("sim" if aid == SYSTEM else f"adv{aid}"),
            "cat": cat,
            "msg": msg,
            "details": details,
        }
        self.entries.append(entry)
        if len(self.entries) > self.max_entries:
            self.entries = self.entries[-self.max_entries:]

    def recent(self, n: int = 50) -> list[dict]:
        """Return the *n* most recent entries (newest last)."""
        return self.entries[-n:]

