"""test_input.py — Key → intent mapping per input context.

Feeds synthetic pygame events; no window is opened.

Run:  python test_input.py      (or under pytest)
"""
from __future__ import annotations
import sys, traceback

import pygame

from core.constants import UP, LEFT, RIGHT
from logic.input_manager import InputManager, InputContext


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)

def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)
        raise AssertionError(f"{label}: {detail}")


def _key(key: int) -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=0, unicode="")


# ═══════════════════════════════════════════════════════════════════════
#  Tests
# ═══════════════════════════════════════════════════════════════════════

def test_gameplay_keys():
    print("\n=== 1: Gameplay context ===")
    im = InputManager()
    im.begin_frame()
    im.feed(_key(pygame.K_LEFT))
    check(im.just("move_left") and im.direction_intents() == [LEFT],
          "1a: arrow key → move intent and direction")
    im.feed(_key(pygame.K_w))
    check(im.direction_intents() == [LEFT, UP], "1b: presses kept in order")

    im.feed(_key(pygame.K_p))
    im.feed(_key(pygame.K_TAB))
    im.feed(_key(pygame.K_r))
    check(all(im.just(i) for i in ("pause", "toggle_debug", "restart")),
          "1c: pause / diagnostics / restart mapped")

    im.feed(_key(pygame.K_1))
    check(not im.just("buy_speed"), "1d: shop keys inactive during play")

    im.begin_frame()
    check(not im.just("pause") and im.direction_intents() == [],
          "1e: begin_frame clears edge-triggered intents")


def test_ui_keys():
    print("\n=== 2: Upgrade menu context ===")
    im = InputManager()
    im.context = InputContext.UI
    im.begin_frame()
    for key in (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_RETURN):
        im.feed(_key(key))
    intents = ("buy_speed", "buy_lives", "buy_multiplier", "ui_confirm")
    check(all(im.just(i) for i in intents),
          "2a: 1/2/3/Enter mapped to shop intents")
    im.feed(_key(pygame.K_RIGHT))
    check(im.direction_intents() == [] and not im.just("move_right"),
          "2b: movement keys inactive in the menu")


def test_non_key_events_ignored():
    print("\n=== 3: Non-press events ===")
    im = InputManager()
    im.begin_frame()
    im.feed(pygame.event.Event(pygame.QUIT))
    im.feed(pygame.event.Event(pygame.KEYUP, key=pygame.K_d, mod=0))
    check(not im.just("move_right") and im.direction_intents() == [],
          "3a: key release and QUIT map to nothing")
    im.feed(_key(pygame.K_d))
    check(im.direction_intents() == [RIGHT], "3b: WASD works like arrows")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Gameplay", test_gameplay_keys),
        ("Menu", test_ui_keys),
        ("Non-press events", test_non_key_events_ignored),
    ]
    for name, fn in sections:
        try:
            fn()
        except AssertionError:
            pass
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Input Tests: {_passed} passed, {_failed} failed  (total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
