"""test_maze.py — Level generator invariants across many seeds.

Checks the properties every generated level must have, regardless of
theme: solid border, dot count matching the grid, (almost) everything
reachable from the player start, and level-scaled feature counts.

Run:  python test_maze.py      (or under pytest)
"""
from __future__ import annotations
import sys, random, traceback

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from core.constants import (
    GRID_WIDTH, GRID_HEIGHT, CELL_WALL, CELL_EMPTY, CELL_DOT,
    CELL_POWER_PELLET, CELL_TELEPORTER, CELL_BONUS_DOT, CELL_SAFE_ZONE,
)
from core.grid import count_cells, make_grid
from components import Behavior
from logic.maze import generate_level, reachable_from, THEMES, theme_for_level
from logic.maze.generator import adversary_count, pellet_count
from logic.maze.features import repair_connectivity


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


LEVELS = range(1, 16)
SEEDS = (0, 1, 2, 3)


def _layouts():
    for level in LEVELS:
        for seed in SEEDS:
            yield level, seed, generate_level(level, random.Random(seed * 1000 + level))


# ═══════════════════════════════════════════════════════════════════════
#  1 — Structural invariants
# ═══════════════════════════════════════════════════════════════════════

def test_border_and_shape():
    print("\n=== 1: Grid shape and border ===")
    bad = []
    for level, seed, layout in _layouts():
        grid = layout.grid
        if len(grid) != GRID_HEIGHT or any(len(r) != GRID_WIDTH for r in grid):
            bad.append((level, seed, "shape"))
            continue
        for x in range(GRID_WIDTH):
            if grid[0][x] != CELL_WALL or grid[GRID_HEIGHT - 1][x] != CELL_WALL:
                bad.append((level, seed, f"border x={x}"))
        for y in range(GRID_HEIGHT):
            if grid[y][0] != CELL_WALL or grid[y][GRID_WIDTH - 1] != CELL_WALL:
                bad.append((level, seed, f"border y={y}"))
    check(not bad, "1a: every level is 30×20 with a wall border", str(bad[:5]))


def test_dot_count_matches_grid():
    print("\n=== 2: total_dots ===")
    bad = [(level, seed, layout.total_dots, count_cells(layout.grid, CELL_DOT))
           for level, seed, layout in _layouts()
           if layout.total_dots != count_cells(layout.grid, CELL_DOT)]
    check(not bad, "2a: total_dots equals the number of dot cells", str(bad[:5]))

    layout = generate_level(1, random.Random(5))
    sx, sy = layout.player_start
    check(layout.grid[sy][sx] == CELL_EMPTY, "2b: player start is empty",
          f"tag={layout.grid[sy][sx]}")
    check(layout.grid[1][2] == CELL_DOT and layout.grid[2][1] == CELL_DOT,
          "2c: both cells next to the start hold dots")


def test_reachability():
    print("\n=== 3: Reachability from the player start ===")
    worst = 1.0
    stranded_dots = 0
    for level, seed, layout in _layouts():
        grid = layout.grid
        open_cells = {(x, y)
                      for y in range(GRID_HEIGHT) for x in range(GRID_WIDTH)
                      if grid[y][x] != CELL_WALL}
        reached = reachable_from(grid, layout.player_start)
        worst = min(worst, len(reached & open_cells) / len(open_cells))
        stranded_dots += sum(1 for x, y in open_cells - reached
                             if grid[y][x] in (CELL_DOT, CELL_POWER_PELLET))
        if layout.adversary_spawn not in reached:
            stranded_dots += 1
    check(worst >= 0.98, f"3a: reachable ratio ≥ 0.98 (worst {worst:.3f})")
    check(stranded_dots == 0, "3b: no dot, pellet or spawn out of reach",
          f"{stranded_dots} stranded")


def test_repair_opens_sealed_pocket():
    print("\n=== 4: Connectivity repair ===")
    grid = make_grid(11, 7, CELL_EMPTY)
    for y in range(7):
        for x in range(11):
            if x in (0, 10) or y in (0, 6):
                grid[y][x] = CELL_WALL
    # Two-thick wall splits the arena in half
    for y in range(1, 6):
        grid[y][5] = CELL_WALL
        grid[y][6] = CELL_WALL
    grid[3][8] = CELL_SAFE_ZONE

    before = reachable_from(grid, (1, 1))
    check((8, 3) not in before, "4a: right half starts sealed off")

    residual = repair_connectivity(grid, (1, 1), random.Random(0))
    after = reachable_from(grid, (1, 1))
    check(residual == 0, "4b: no residual cells after repair", f"residual={residual}")
    check((8, 3) in after, "4c: safe zone reachable after tunnelling")


# ═══════════════════════════════════════════════════════════════════════
#  5 — Level scaling and features
# ═══════════════════════════════════════════════════════════════════════

def test_level_scaling():
    print("\n=== 5: Level scaling ===")
    check(adversary_count(1) == 1 and adversary_count(4) == 3,
          "5a: adversary count grows with level")
    check(adversary_count(40) == 6, "5b: adversary count capped at 6")
    check(pellet_count(1) == 4 and pellet_count(30) == 8,
          "5c: pellet count 4 → capped at 8")

    layout = generate_level(7, random.Random(3))
    kinds = [a.behavior for a in layout.adversaries]
    check(kinds == [Behavior.AGGRESSIVE, Behavior.PATROL, Behavior.AMBUSH,
                    Behavior.RANDOM],
          "5d: behaviours assigned in cycle order", str(kinds))
    check(all(a.cell == layout.adversary_spawn for a in layout.adversaries),
          "5e: adversaries start on the spawn cell")
    check(all(0.0 < a.cooperation <= 0.8 and 0.0 < a.prediction <= 0.9
              for a in layout.adversaries),
          "5f: cooperation / prediction within caps")

    early = generate_level(2, random.Random(3))
    check(not any(a.smart_mode for a in early.adversaries),
          "5g: no smart adversaries before level 3")

    pellets = count_cells(layout.grid, CELL_POWER_PELLET)
    check(0 < pellets <= pellet_count(7), f"5h: {pellets} pellets placed")


def test_themes_rotate():
    print("\n=== 6: Themes ===")
    check(theme_for_level(1) == THEMES[0] and theme_for_level(3) == THEMES[0],
          "6a: levels 1–3 share a theme")
    check(theme_for_level(4) == THEMES[1], "6b: level 4 moves to the next theme")
    check(theme_for_level(16) == THEMES[0], "6c: themes wrap after five")


def test_special_features():
    print("\n=== 7: Teleporters, bonus rooms, safe zones ===")
    tele = generate_level(5, random.Random(11))
    check(len(tele.teleporters) >= 2, "7a: level 5 has a teleporter pair",
          str(tele.teleporters))
    check(all(tele.teleporters[b] == a for a, b in tele.teleporters.items()),
          "7b: teleporter links are symmetric")
    check(all(tele.grid[y][x] == CELL_TELEPORTER for x, y in tele.teleporters),
          "7c: every linked cell is a teleporter")

    plain = generate_level(4, random.Random(11))
    check(not plain.teleporters and count_cells(plain.grid, CELL_TELEPORTER) == 0,
          "7d: level 4 has no teleporters")

    bonus = [count_cells(generate_level(3, random.Random(s)).grid, CELL_BONUS_DOT)
             for s in range(6)]
    check(any(bonus), f"7e: level 3 places bonus dots ({bonus})")

    safe = generate_level(7, random.Random(2))
    check(count_cells(safe.grid, CELL_SAFE_ZONE) > 0, "7f: level 7 has safe zones")


def test_deterministic_with_seed():
    print("\n=== 8: Determinism ===")
    a = generate_level(6, random.Random(99))
    b = generate_level(6, random.Random(99))
    check(a.grid == b.grid and a.teleporters == b.teleporters,
          "8a: same seed → same level")
    c = generate_level(6, random.Random(100))
    check(a.grid != c.grid, "8b: different seed → different level")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Border", test_border_and_shape),
        ("Dot count", test_dot_count_matches_grid),
        ("Reachability", test_reachability),
        ("Repair", test_repair_opens_sealed_pocket),
        ("Level scaling", test_level_scaling),
        ("Themes", test_themes_rotate),
        ("Features", test_special_features),
        ("Determinism", test_deterministic_with_seed),
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
    print(f"  Maze Tests: {_passed} passed, {_failed} failed  (total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
