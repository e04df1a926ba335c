"""core/events.py — Lightweight event bus.

Decouples the simulation, which *signals* that something happened,
from the presentation layer, which *reacts* to it (HUD flashes, the
upgrade menu, the game-over overlay).  The bus lives on the
``WorldState``::

    world.bus.emit(AdversaryEaten(adversary_id=2, points=250))

Consumers subscribe with a callable::

    bus.subscribe("AdversaryEaten", my_handler)

And the tick drains once per step::

    bus.drain()          # calls all handlers for pending events

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends).
  - ``drain()`` processes all queued events in FIFO order.
  - Handlers may emit new events; those are processed in the same drain.
  - A failing handler is reported and skipped; it never reaches the tick.
"""

from __future__ import annotations
import traceback
from dataclasses import dataclass
from typing import Any, Callable
from collections import defaultdict


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class DotCollected:
    x: int = 0
    y: int = 0
    points: int = 0
    combo: int = 1


@dataclass
class PelletCollected:
    """A power pellet was eaten — every adversary is now scared."""
    x: int = 0
    y: int = 0
    points: int = 0
    duration: int = 0          # ticks


@dataclass
class BonusCollected:
    x: int = 0
    y: int = 0
    points: int = 0
    lives: int = 0


@dataclass
class Teleported:
    src: tuple[int, int] = (0, 0)
    dst: tuple[int, int] = (0, 0)


@dataclass
class SafeZoneEntered:
    x: int = 0
    y: int = 0
    until: float = 0.0         # game-clock time the boost ends


@dataclass
class AdversaryEaten:
    adversary_id: int = 0
    points: int = 0


@dataclass
class PlayerCaught:
    adversary_id: int = 0
    lives_left: int = 0


@dataclass
class LevelComplete:
    """All dots collected; ``level`` is the level about to be generated."""
    level: int = 0
    score: int = 0


@dataclass
class GameOver:
    score: int = 0
    level: int = 0


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Fire-and-forget event bus stored on the world state."""

    def __init__(self):
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable]] = defaultdict(list)
        self._stats: dict[str, int] = defaultdict(int)

    # ── Public API ───────────────────────────────────────────────────

    def emit(self, event) -> None:
        """Queue an event for processing on next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register *handler* to receive events of *event_type*.

        *event_type* is the class name, e.g. ``"LevelComplete"``.
        """
        self._subs[event_type].append(handler)

    def unsubscribe(self, event_type: str, handler: Callable) -> None:
        subs = self._subs.get(event_type)
        if subs and handler in subs:
            subs.remove(handler)

    def drain(self) -> int:
        """Process all queued events.  Returns number processed.

        Handlers may emit new events — those are processed in the
        same drain pass (breadth-first).
        """
        processed = 0
        safety = 1000  # prevent infinite loops
        while self._queue and safety > 0:
            batch = self._queue[:]
            self._queue.clear()
            for event in batch:
                name = type(event).__name__
                self._stats[name] += 1
                for handler in self._subs.get(name, []):
                    try:
                        handler(event)
                    except Exception as exc:
                        print(f"[EVENT] handler error for {name}: {exc}")
                        traceback.print_exc()
            processed += len(batch)
            safety -= 1
        return processed

    def clear(self) -> None:
        """Discard all pending events."""
        self._queue.clear()

    def stats(self) -> dict[str, int]:
        """Return cumulative event counts by type."""
        return dict(self._stats)

    def pending_count(self) -> int:
        """Number of events waiting to be drained."""
        return len(self._queue)

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._subs)})"
