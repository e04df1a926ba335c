"""test_simulation.py — Fixed-step tick, collection rules and level flow.

Two kinds of test:
  * hand-built arenas (``WorldState.create``) for exact scoring, combo,
    collision and timer behaviour;
  * the full ``Simulation`` on a seeded generated level for the
    end-to-end path (step on a dot, clear a level, buy upgrades).

Run:  python test_simulation.py      (or under pytest)
"""
from __future__ import annotations
import sys, traceback

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from core.constants import (
    CELL_WALL, CELL_EMPTY, CELL_DOT, CELL_BONUS_DOT, CELL_TELEPORTER,
    CELL_SAFE_ZONE, CELL_POWER_PELLET, UP, DOWN, RIGHT, STOP,
)
from core.grid import make_grid
from components import Adversary, Behavior
from logic.collection import SPEED_RESTORE, collect_dot, restore_speed
from logic.collisions import resolve_collision
from logic.tick import tick_world, resolve_direction
from simulation.game import Simulation
from simulation.world_state import WorldState


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


# ── Arena builders ───────────────────────────────────────────────────

def _make_arena(w: int = 9, h: int = 7) -> list[list[int]]:
    grid = make_grid(w, h, CELL_EMPTY)
    for y in range(h):
        for x in range(w):
            if x in (0, w - 1) or y in (0, h - 1):
                grid[y][x] = CELL_WALL
    return grid


def _world(grid, player=(1, 1), advs=None, **kw) -> WorldState:
    world = WorldState.create(grid, player=player, adversaries=advs, **kw)
    world.scheduler.register_handler(SPEED_RESTORE, restore_speed)
    return world


def _run(world: WorldState, n: int) -> None:
    for _ in range(n):
        tick_world(world)


def _collect_events(world: WorldState, name: str) -> list:
    got = []
    world.bus.subscribe(name, got.append)
    return got


# ═══════════════════════════════════════════════════════════════════════
#  1 — Collection and combo
# ═══════════════════════════════════════════════════════════════════════

def test_combo_window():
    print("\n=== 1: Combo window ===")
    grid = _make_arena()
    for x in (2, 3, 4, 5):
        grid[1][x] = CELL_DOT
    world = _world(grid)
    game = world.game

    world.clock.time = 0.0
    p1 = collect_dot(world, (2, 1))
    check(game.combo == 1 and p1 == 10, "1a: first dot → combo 1, 10 points",
          f"combo={game.combo} pts={p1}")

    world.clock.time = 0.5
    p2 = collect_dot(world, (3, 1))
    check(game.combo == 2 and p2 == 12, "1b: 0.5 s later → combo 2, 12 points",
          f"combo={game.combo} pts={p2}")

    world.clock.time = 2.0
    p3 = collect_dot(world, (4, 1))
    check(game.combo == 1 and p3 == 10, "1c: 1.5 s gap resets the combo",
          f"combo={game.combo} pts={p3}")
    check(game.high_combo == 2 and game.dots_collected == 3,
          "1d: best combo and dot count tracked")
    check(grid[1][2] == CELL_EMPTY, "1e: collected dot becomes empty")

    game.combo = 14
    game.last_collect_time = world.clock.time
    game.multiplier = 2
    p4 = collect_dot(world, (5, 1))
    check(p4 == (10 + 20) * 2, "1f: combo bonus capped, then multiplied", f"pts={p4}")


def test_bonus_and_teleporter():
    print("\n=== 2: Bonus dot and teleporter ===")
    grid = _make_arena()
    grid[1][2] = CELL_BONUS_DOT
    world = _world(grid)
    world.player.queued.append(RIGHT)
    _run(world, 4)
    check(world.player.cell == (2, 1), "2a: player stepped after 4 ticks")
    check(world.game.score == 100 and world.game.lives == 4,
          "2b: bonus dot → 100 points and +1 life",
          f"score={world.game.score} lives={world.game.lives}")

    grid = _make_arena()
    grid[1][3] = CELL_TELEPORTER
    grid[4][6] = CELL_TELEPORTER
    world = _world(grid, player=(2, 1),
                   teleporters={(3, 1): (6, 4), (6, 4): (3, 1)})
    jumps = _collect_events(world, "Teleported")
    world.player.direction = RIGHT
    _run(world, 4)
    check(world.player.cell == (6, 4), "2c: teleporter moves the player to its partner",
          str(world.player.cell))
    check(len(jumps) == 1 and jumps[0].dst == (6, 4), "2d: Teleported event emitted")
    check(grid[1][3] == CELL_TELEPORTER, "2e: teleporter cell persists")


def test_safe_zone_timer_and_pause():
    print("\n=== 3: Safe zone boost ===")
    grid = _make_arena()
    grid[1][2] = CELL_SAFE_ZONE
    world = _world(grid)
    game = world.game
    world.player.queued.append(RIGHT)
    _run(world, 4)
    check(game.player_speed == game.base_speed - 1 and game.speed_boost_active,
          "3a: safe zone lowers the step threshold by one")
    check(world.scheduler.has_pending(SPEED_RESTORE), "3b: reversion scheduled")

    game.is_paused = True
    frozen = world.clock.ticks
    _run(world, 600)
    check(world.clock.ticks == frozen and game.speed_boost_active,
          "3c: paused game freezes the clock and the boost")

    game.is_paused = False
    _run(world, 170)
    check(game.speed_boost_active, "3d: boost still active just before 3 s")
    _run(world, 20)
    check(not game.speed_boost_active and game.player_speed == game.base_speed,
          "3e: speed restored after 3 s of game time")


def test_stale_restore_discarded():
    print("\n=== 4: Level-tagged reversion ===")
    grid = _make_arena()
    world = _world(grid)
    game = world.game
    game.player_speed = 2
    world.scheduler.post(0.05, SPEED_RESTORE, game.level_generation)
    game.level_generation += 1
    _run(world, 10)
    check(game.player_speed == 2, "4a: reversion from an earlier level is ignored")
    check(world.scheduler.stale_dropped == 1, "4b: stale event counted")


# ═══════════════════════════════════════════════════════════════════════
#  5 — Player movement
# ═══════════════════════════════════════════════════════════════════════

def test_direction_queue():
    print("\n=== 5: Direction buffering ===")
    world = _world(_make_arena())
    world.player.direction = RIGHT
    world.player.queued.append(UP)
    check(resolve_direction(world) == RIGHT and list(world.player.queued) == [UP],
          "5a: blocked intent is kept, current heading continues")
    world.player.queued.append(DOWN)
    check(resolve_direction(world) == DOWN and not world.player.queued,
          "5b: newest open intent wins and the buffer empties")

    for _ in range(10):
        world.player.queued.append(DOWN)
    check(len(world.player.queued) == 3, "5c: buffer holds at most three intents")

    world = _world(_make_arena())
    world.player.direction = UP
    _run(world, 8)
    check(world.player.cell == (1, 1), "5d: walking into a wall is silently rejected")


def test_level_completion():
    print("\n=== 6: Level completion ===")
    grid = _make_arena()
    grid[1][2] = CELL_DOT
    world = _world(grid)
    done = _collect_events(world, "LevelComplete")
    world.player.queued.append(RIGHT)
    _run(world, 3)
    check(world.game.level == 1 and world.game.dots_collected == 0,
          "6a: nothing happens before the step threshold")
    _run(world, 1)
    game = world.game
    check(game.dots_collected == game.total_dots == 1, "6b: last dot collected")
    check(game.level == 2 and game.is_paused and game.awaiting_upgrades,
          "6c: level advanced and paused for upgrades")
    check(len(done) == 1 and done[0].level == 2, "6d: LevelComplete emitted once")
    check(tick_world(world) is False, "6e: no ticks while awaiting upgrades")


# ═══════════════════════════════════════════════════════════════════════
#  7 — Collisions
# ═══════════════════════════════════════════════════════════════════════

def test_eat_scared_adversary():
    print("\n=== 7: Eating a scared adversary ===")
    adv = Adversary(id=2, x=3, y=3, home=(7, 5))
    adv.scare(120)
    world = _world(_make_arena(), player=(3, 3), advs=[adv])
    world.game.level = 3
    world.game.multiplier = 2
    eaten = _collect_events(world, "AdversaryEaten")

    check(resolve_collision(world, adv), "7a: contact detected")
    world.bus.drain()
    check(world.game.score == (200 + 50 * 3) * 2, "7b: (200 + 50·L) × multiplier",
          f"score={world.game.score}")
    check(adv.cell == (7, 5) and not adv.scared, "7c: sent home and calmed")
    check(world.game.lives == 3, "7d: player unharmed")
    check(len(eaten) == 1 and eaten[0].adversary_id == 2, "7e: AdversaryEaten emitted")


def test_caught_and_game_over():
    print("\n=== 8: Caught / game over ===")
    adv = Adversary(id=0, x=4, y=3, home=(7, 5))
    world = _world(_make_arena(), player=(1, 1), advs=[adv])
    world.player.place((4, 3))
    world.player.direction = RIGHT
    world.game.combo = 5
    resolve_collision(world, adv)
    check(world.game.lives == 2 and world.player.cell == (1, 1),
          "8a: life lost, player back at start")
    check(world.player.direction == STOP and world.game.combo == 0,
          "8b: heading and combo reset")

    over = _collect_events(world, "GameOver")
    world.game.lives = 1
    world.player.place(adv.cell)
    resolve_collision(world, adv)
    world.bus.drain()
    check(not world.game.is_playing and world.game.lives == 0, "8c: last life ends the game")
    check(len(over) == 1, "8d: GameOver emitted")
    check(tick_world(world) is False, "8e: finished game does not tick")


def test_adversary_catches_through_tick():
    print("\n=== 9: Collision during the tick ===")
    adv = Adversary(id=0, x=3, y=1, behavior=Behavior.AGGRESSIVE, home=(7, 5))
    world = _world(_make_arena(), player=(1, 1), advs=[adv])
    caught = _collect_events(world, "PlayerCaught")
    _run(world, 4)
    check(len(caught) == 1 and world.game.lives == 2,
          "9a: aggressive adversary reaches a standing player")
    check(adv.cell == (7, 5), "9b: catcher sent back to its home cell")


def _walk_in(adv: Adversary, grid=None) -> WorldState:
    """Player at (3, 3) heading RIGHT into *adv*; both step this tick."""
    world = _world(grid or _make_arena(), player=(3, 3), advs=[adv])
    world.player.direction = RIGHT
    world.player.move_timer = world.game.player_speed - 1
    mult = 2 if adv.scared else 1
    adv.move_timer = world.game.enemy_speed * mult - 1
    return world


def test_player_walks_into_adversary():
    print("\n=== 9x: Player-initiated contact ===")
    live = Adversary(id=0, x=4, y=3, behavior=Behavior.AGGRESSIVE, home=(7, 5))
    world = _walk_in(live)
    caught = _collect_events(world, "PlayerCaught")
    tick_world(world)
    check(world.game.lives == 2 and len(caught) == 1,
          "9c: stepping onto a live adversary costs a life",
          f"lives={world.game.lives}")
    check(world.player.cell == (3, 3) and live.cell == (7, 5),
          "9d: player back at start, catcher gone home")

    scared = Adversary(id=1, x=4, y=3, behavior=Behavior.AGGRESSIVE, home=(7, 5))
    scared.scare(120)
    world = _walk_in(scared)
    tick_world(world)
    check(world.game.score == 250 and world.game.lives == 3,
          "9e: stepping onto a scared adversary eats it",
          f"score={world.game.score}")
    check(world.player.cell == (4, 3) and not scared.scared,
          "9f: player keeps the cell, adversary calmed")


def test_head_on_swap():
    print("\n=== 9y: Head-on in a corridor ===")
    grid = _make_arena()
    for y in range(1, 6):
        if y != 3:
            for x in range(1, 8):
                grid[y][x] = CELL_WALL
    # Either may step first; the two must never trade cells unnoticed.
    adv = Adversary(id=0, x=4, y=3, behavior=Behavior.RANDOM, home=(7, 3))
    world = _walk_in(adv, grid)
    caught = _collect_events(world, "PlayerCaught")
    tick_world(world)
    check(len(caught) == 1 and world.game.lives == 2,
          "9g: facing pair in a corridor makes contact", f"lives={world.game.lives}")
    check(world.player.cell == (3, 3) and adv.cell == (7, 3),
          "9h: neither slipped past the other")


def test_pellet_scare_through_tick():
    print("\n=== 9z: Pellet duration in the full tick ===")
    advs = [Adversary(id=i, x=7, y=5, behavior=Behavior.RANDOM, home=(7, 5))
            for i in range(2)]
    grid = _make_arena()
    grid[1][2] = CELL_POWER_PELLET
    world = _world(grid, player=(1, 1), advs=advs)
    world.game.enemy_speed = 10 ** 6
    world.player.direction = RIGHT
    world.player.move_timer = world.game.player_speed - 1

    tick_world(world)
    world.player.direction = STOP
    check(all(a.scared_timer == 299 for a in advs) and world.game.power_timer == 299,
          "9i: the pellet tick is the first scared tick",
          f"timers={[a.scared_timer for a in advs]}")
    _run(world, 298)
    check(all(a.scared for a in advs) and world.game.power_active,
          "9j: still scared 298 ticks later")
    _run(world, 1)
    check(not any(a.scared for a in advs) and not world.game.power_active,
          "9k: everyone calms together 299 ticks after the pellet tick")


# ═══════════════════════════════════════════════════════════════════════
#  10 — Simulation facade
# ═══════════════════════════════════════════════════════════════════════

def test_end_to_end_first_dot():
    print("\n=== 10: End-to-end ===")
    sim = Simulation(seed=7)
    world = sim.world
    check(world.grid[1][2] == CELL_DOT and world.player.cell == (1, 1),
          "10a: level 1 starts next to a dot")
    sim.queue_direction(RIGHT)
    for _ in range(4):
        sim.tick()
    check(world.player.cell == (2, 1), "10b: player stepped right")
    check(world.game.score == 10 * world.game.multiplier and
          world.game.dots_collected == 1,
          "10c: +10 × multiplier and one dot collected",
          f"score={world.game.score}")


def test_pause_freezes_simulation():
    print("\n=== 11: Pause ===")
    sim = Simulation(seed=1)
    check(sim.toggle_pause() is True, "11a: pause on")
    ticks = sim.world.clock.ticks
    positions = [a.cell for a in sim.world.adversaries]
    results = [sim.tick() for _ in range(30)]
    check(not any(results), "11b: paused ticks are no-ops")
    check(sim.world.clock.ticks == ticks and
          [a.cell for a in sim.world.adversaries] == positions,
          "11c: clock and adversaries frozen")
    check(sim.toggle_pause() is False, "11d: pause off")


def test_level_flow_with_upgrades():
    print("\n=== 12: Level flow and upgrades ===")
    sim = Simulation(seed=3)
    world = sim.world
    game = world.game
    game.dots_collected = game.total_dots - 1
    sim.queue_direction(RIGHT)
    for _ in range(4):
        sim.tick()
    check(game.awaiting_upgrades and game.level == 2, "12a: level cleared")
    check(sim.toggle_pause() is True, "12b: pause toggle ignored in the upgrade menu")

    game.score = 1200
    check(sim.apply_upgrade("speed") and game.base_speed == 3, "12c: speed bought")
    check(sim.apply_upgrade("lives") and game.lives == 4, "12d: life bought")
    check(not sim.apply_upgrade("multiplier") and game.score == 600,
          "12e: unaffordable upgrade rejected", f"score={game.score}")

    gen = game.level_generation
    sim.resume_after_upgrades()
    check(not game.awaiting_upgrades and not game.is_paused, "12f: play resumes")
    check(game.level_generation == gen + 1 and game.dots_collected == 0,
          "12g: fresh level generated")
    check(game.player_speed == 3 and world.player.cell == (1, 1),
          "12h: upgrade carries over, player at start")
    check(len(world.adversaries) == 2, "12i: level 2 spawns two adversaries")

    snap = sim.snapshot()
    check(snap["level"] == 2 and snap["score"] == 600 and snap["lives"] == 4,
          "12j: snapshot reflects state", str(snap))


def test_new_game_resets():
    print("\n=== 13: New game ===")
    sim = Simulation(seed=5)
    sim.world.game.score = 999
    sim.world.game.level = 4
    sim.new_game()
    check(sim.world.game.score == 0 and sim.world.game.level == 1 and
          sim.world.game.lives == 3, "13a: score, level and lives reset")
    sim.queue_direction((2, 0))
    check(not sim.world.player.queued, "13b: non-unit directions ignored")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Combo", test_combo_window),
        ("Bonus / teleporter", test_bonus_and_teleporter),
        ("Safe zone", test_safe_zone_timer_and_pause),
        ("Stale events", test_stale_restore_discarded),
        ("Direction queue", test_direction_queue),
        ("Level completion", test_level_completion),
        ("Eat", test_eat_scared_adversary),
        ("Caught", test_caught_and_game_over),
        ("Tick collision", test_adversary_catches_through_tick),
        ("Walk-in contact", test_player_walks_into_adversary),
        ("Head-on", test_head_on_swap),
        ("Pellet tick", test_pellet_scare_through_tick),
        ("End-to-end", test_end_to_end_first_dot),
        ("Pause", test_pause_freezes_simulation),
        ("Level flow", test_level_flow_with_upgrades),
        ("New game", test_new_game_resets),
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
    print(f"  Simulation Tests: {_passed} passed, {_failed} failed  (total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
