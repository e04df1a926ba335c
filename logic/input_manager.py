"""logic/input_manager.py — Intent-based input layer.

Sits between raw pygame events and game actions.  The scene feeds in
raw events; the manager maps them to *intents* based on the current
**input context** (gameplay or the upgrade menu).

Other systems read the intents — they never touch raw keycodes.

Usage (in maze_scene):

    self.input = InputManager()
    # each frame:
    self.input.begin_frame()
    for event in events:
        self.input.feed(event)

    if self.input.just("pause"):        # discrete press
        ...
    for d in self.input.direction_intents():   # press order
        sim.queue_direction(d)

Everything is edge-triggered: a direction is queued once per key press,
holding a key does not repeat it.
"""

from __future__ import annotations
from enum import Enum, auto
import pygame

from core.constants import UP, DOWN, LEFT, RIGHT


# ── Input contexts ──────────────────────────────────────────────────

class InputContext(Enum):
    """Determines which key-bindings are active."""
    GAMEPLAY = auto()   # maze running (or paused)
    UI       = auto()   # upgrade menu open


# ── Intent names (strings for flexibility, not an enum) ─────────────
# Gameplay:  move_up  move_down  move_left  move_right
#            pause  toggle_debug  restart
# UI:        buy_speed  buy_lives  buy_multiplier  ui_confirm


# ── Default key bindings ────────────────────────────────────────────

_GAMEPLAY_BINDS: dict[str, list[int]] = {
    "move_up":      [pygame.K_w, pygame.K_UP],
    "move_down":    [pygame.K_s, pygame.K_DOWN],
    "move_left":    [pygame.K_a, pygame.K_LEFT],
    "move_right":   [pygame.K_d, pygame.K_RIGHT],
    "pause":        [pygame.K_p, pygame.K_ESCAPE],
    "toggle_debug": [pygame.K_TAB, pygame.K_F3],
    "restart":      [pygame.K_r],
}

_UI_BINDS: dict[str, list[int]] = {
    "buy_speed":      [pygame.K_1, pygame.K_KP1],
    "buy_lives":      [pygame.K_2, pygame.K_KP2],
    "buy_multiplier": [pygame.K_3, pygame.K_KP3],
    "ui_confirm":     [pygame.K_RETURN, pygame.K_SPACE, pygame.K_KP_ENTER],
}

_DIRECTION_INTENTS = (
    ("move_up", UP),
    ("move_down", DOWN),
    ("move_left", LEFT),
    ("move_right", RIGHT),
)


# ── InputManager ────────────────────────────────────────────────────

class InputManager:
    """Context-aware input mapper.

    Call ``begin_frame()`` before processing events and ``feed(event)``
    for each pygame event.  Then use ``just(intent)`` for presses.
    """

    def __init__(self):
        self.context: InputContext = InputContext.GAMEPLAY
        # Intents pressed *this frame* (rising edge)
        self._pressed: set[str] = set()
        # Order matters for direction intents: the last press wins
        self._order: list[str] = []

    # ── frame lifecycle ─────────────────────────────────────────

    def begin_frame(self):
        """Call at the start of each frame before feeding events."""
        self._pressed.clear()
        self._order.clear()

    def feed(self, event: pygame.event.Event):
        """Feed a raw pygame event.  Only key presses map to intents."""
        if event.type != pygame.KEYDOWN:
            return

        for intent, keys in self._active_binds().items():
            if event.key in keys:
                self._pressed.add(intent)
                self._order.append(intent)
                break

    # ── queries ─────────────────────────────────────────────────

    def just(self, intent: str) -> bool:
        """True if the intent was triggered this frame (rising edge)."""
        return intent in self._pressed

    def direction_intents(self) -> list[tuple[int, int]]:
        """Every direction pressed this frame, in press order."""
        mapping = dict(_DIRECTION_INTENTS)
        return [mapping[i] for i in self._order if i in mapping]

    # ── internal ────────────────────────────────────────────────

    def _active_binds(self) -> dict[str, list[int]]:
        if self.context == InputContext.GAMEPLAY:
            return _GAMEPLAY_BINDS
        elif self.context == InputContext.UI:
            return _UI_BINDS
        return {}
