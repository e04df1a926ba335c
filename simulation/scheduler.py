"""simulation/scheduler.py — Deferred, level-tagged effects.

Timed effects (e.g. the safe-zone speed boost wearing off) are not
free-running callbacks.  They are posted here with the game-clock time
they are due and the level generation that scheduled them:

    scheduler.post(time=12.5, kind="SPEED_RESTORE", generation=3)
    ...
    scheduler.tick(world, now=world.clock.time,
                   generation=world.game.level_generation)

``tick`` runs from the simulation tick, never in the middle of one, and
silently drops events whose generation no longer matches, so a timer
from a finished level cannot touch the new one.  The clock only moves
while the game is unpaused, so pending events freeze with the game.
"""

from __future__ import annotations
import heapq
from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass(order=True)
class DeferredEvent:
    """A single entry in the scheduler priority queue.

    Ordered by ``time`` so the heap gives us earliest-first.
    """
    time: float
    # heapq tiebreaker (insertion order)
    _seq: int = field(compare=True, repr=False)
    kind: str = field(compare=False, default="")
    generation: int = field(compare=False, default=0)
    data: dict[str, Any] = field(compare=False, default_factory=dict)
    cancelled: bool = field(compare=False, default=False)


class DeferredScheduler:
    """Priority-queue scheduler for deferred simulation effects."""

    def __init__(self) -> None:
        self._queue: list[DeferredEvent] = []
        self._seq: int = 0
        # Dispatcher: kind → handler function
        self._handlers: dict[str, Callable] = {}
        # Stats
        self.events_processed: int = 0
        self.stale_dropped: int = 0

    # ── Posting events ───────────────────────────────────────────────

    def post(self, time: float, kind: str, generation: int,
             data: dict[str, Any] | None = None) -> DeferredEvent:
        """Schedule an event at game-clock ``time`` seconds."""
        self._seq += 1
        evt = DeferredEvent(
            time=time,
            _seq=self._seq,
            kind=kind,
            generation=generation,
            data=data or {},
        )
        heapq.heappush(self._queue, evt)
        return evt

    def post_delta(self, now: float, delta: float, kind: str,
                   generation: int,
                   data: dict[str, Any] | None = None) -> DeferredEvent:
        """Post an event ``delta`` seconds after ``now``."""
        return self.post(now + delta, kind, generation, data)

    # ── Cancellation ─────────────────────────────────────────────────

    def cancel_kind(self, kind: str) -> int:
        """Cancel every pending event of *kind*.  Returns count cancelled."""
        count = 0
        for evt in self._queue:
            if not evt.cancelled and evt.kind == kind:
                evt.cancelled = True
                count += 1
        return count

    def clear(self) -> None:
        self._queue.clear()

    # ── Handler registration ─────────────────────────────────────────

    def register_handler(self, kind: str, handler: Callable) -> None:
        """Register a handler for an event kind.

        Handler signature: ``handler(world, event)``
        """
        self._handlers[kind] = handler

    # ── Tick ─────────────────────────────────────────────────────────

    def peek_time(self) -> float:
        """Return the time of the next event, or inf if empty."""
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)
        if self._queue:
            return self._queue[0].time
        return float("inf")

    def tick(self, world: Any, now: float, generation: int) -> int:
        """Process every event due at or before ``now``.

        Events from another level generation are discarded unhandled.
        Returns the number of events processed.
        """
        count = 0

        while self._queue:
            if self._queue[0].cancelled:
                heapq.heappop(self._queue)
                continue
            if self._queue[0].time > now:
                break

            evt = heapq.heappop(self._queue)
            if evt.generation != generation:
                self.stale_dropped += 1
                continue

            handler = self._handlers.get(evt.kind)
            if handler:
                handler(world, evt)
                count += 1

        self.events_processed += count
        return count

    # ── Queries ──────────────────────────────────────────────────────

    def pending_count(self) -> int:
        """Number of non-cancelled events in the queue."""
        return sum(1 for e in self._queue if not e.cancelled)

    def has_pending(self, kind: str | None = None) -> bool:
        for e in self._queue:
            if e.cancelled:
                continue
            if kind is None or e.kind == kind:
                return True
        return False

    # ── Debug ────────────────────────────────────────────────────────

    def debug_dump(self, limit: int = 10) -> list[str]:
        """Return a human-readable list of the next N events."""
        events = sorted(
            (e for e in self._queue if not e.cancelled),
            key=lambda e: (e.time, e._seq),
        )[:limit]
        return [f"{e.time:.2f}  gen={e.generation}  {e.kind}  {e.data}"
                for e in events]
