"""scenes/draw.py — Rendering helpers for the maze scene.

All pure-draw functions live here so that MazeScene.draw() stays thin.
Every function receives the data it needs as parameters and only
*reads* the world; nothing here mutates simulation state.
"""

from __future__ import annotations
import pygame
from core.app import App
from core.constants import (
    CELL_SIZE, CELL_COLORS, HUD_HEIGHT,
    CELL_WALL, CELL_DOT, CELL_POWER_PELLET, CELL_BONUS_DOT,
    CELL_TELEPORTER, CELL_SAFE_ZONE, CELL_NAMES,
    PLAYER_COLOR, SCARED_COLOR,
)
from logic.ai import scared_duration
from simulation.world_state import WorldState


def _cell_rect(x: int, y: int, oy: int) -> pygame.Rect:
    return pygame.Rect(x * CELL_SIZE, oy + y * CELL_SIZE, CELL_SIZE, CELL_SIZE)


def _center(x: int, y: int, oy: int) -> tuple[int, int]:
    return (x * CELL_SIZE + CELL_SIZE // 2, oy + y * CELL_SIZE + CELL_SIZE // 2)


# ── Grid ────────────────────────────────────────────────────────────

def draw_grid(surface: pygame.Surface, grid: list[list[int]], oy: int):
    empty = CELL_COLORS[0]
    for y, row in enumerate(grid):
        for x, tag in enumerate(row):
            rect = _cell_rect(x, y, oy)
            if tag == CELL_WALL:
                pygame.draw.rect(surface, CELL_COLORS[CELL_WALL], rect)
                continue
            if tag == CELL_SAFE_ZONE:
                pygame.draw.rect(surface, CELL_COLORS[CELL_SAFE_ZONE], rect)
            else:
                pygame.draw.rect(surface, empty, rect)

            c = _center(x, y, oy)
            if tag == CELL_DOT:
                pygame.draw.circle(surface, CELL_COLORS[CELL_DOT], c, 2)
            elif tag == CELL_POWER_PELLET:
                pygame.draw.circle(surface, CELL_COLORS[CELL_POWER_PELLET], c, 6)
            elif tag == CELL_BONUS_DOT:
                pygame.draw.circle(surface, CELL_COLORS[CELL_BONUS_DOT], c, 5)
            elif tag == CELL_TELEPORTER:
                pygame.draw.circle(surface, CELL_COLORS[CELL_TELEPORTER], c,
                                   CELL_SIZE // 2 - 3, 2)


# ── Actors ──────────────────────────────────────────────────────────

def draw_actors(surface: pygame.Surface, world: WorldState, oy: int,
                blink: bool):
    r = CELL_SIZE // 2 - 2
    for adv in world.adversaries:
        color = adv.color
        if adv.scared:
            # Flash white during the last second of the scare
            color = (255, 255, 255) if (adv.scared_timer < 60 and blink) else SCARED_COLOR
        cx, cy = _center(adv.x, adv.y, oy)
        pygame.draw.circle(surface, color, (cx, cy), r)
        if adv.smart_mode:
            pygame.draw.circle(surface, (255, 255, 255), (cx, cy), r, 1)

    px, py = _center(world.player.x, world.player.y, oy)
    pygame.draw.circle(surface, PLAYER_COLOR, (px, py), r)


# ── HUD ─────────────────────────────────────────────────────────────

def draw_hud(surface: pygame.Surface, app: App, world: WorldState):
    game = world.game
    pygame.draw.rect(surface, (10, 10, 14), (0, 0, surface.get_width(), HUD_HEIGHT))
    x = 8
    for text in (
        f"Score {game.score}",
        f"Level {game.level}",
        f"Lives {game.lives}",
        f"x{game.multiplier}",
        f"Dots {game.dots_collected}/{game.total_dots}",
    ):
        rect = app.draw_text(surface, text, x, 12, font=app.font_lg)
        x = rect.right + 18

    if game.combo > 1:
        app.draw_text(surface, f"Combo x{game.combo}", x, 14,
                      color=(255, 200, 60))
    if game.power_active:
        w = min(120, int(120 * game.power_timer / scared_duration(game.level)))
        pygame.draw.rect(surface, SCARED_COLOR, (surface.get_width() - 130, 30, w, 4))
    if game.speed_boost_active:
        app.draw_text(surface, "BOOST", surface.get_width() - 60, 4,
                      color=CELL_COLORS[CELL_SAFE_ZONE], font=app.font_sm)


# ── Overlays ────────────────────────────────────────────────────────

def draw_center_banner(surface: pygame.Surface, app: App,
                       lines: list[str], color=(255, 255, 255)):
    sw, sh = surface.get_size()
    shade = pygame.Surface((sw, sh), pygame.SRCALPHA)
    shade.fill((0, 0, 0, 150))
    surface.blit(shade, (0, 0))
    y = sh // 2 - 14 * len(lines)
    for i, line in enumerate(lines):
        font = app.font_lg if i == 0 else app.font
        img = font.render(line, True, color)
        surface.blit(img, (sw // 2 - img.get_width() // 2, y))
        y += img.get_height() + 8


def draw_diagnostics(surface: pygame.Surface, app: App, world: WorldState):
    """Tab overlay: path-cache stats, scheduler queue and the DevLog feed."""
    stats = world.paths.stats()
    sched = world.scheduler
    px, py = world.player.cell
    next_due = sched.peek_time()
    lines = [
        f"tick {world.clock.ticks}  t={world.clock.time:.1f}s  "
        f"theme={world.theme}  gen={world.game.level_generation}",
        f"paths  hits={stats['hits']} misses={stats['misses']} "
        f"size={stats['size']} evict={stats['evictions']}",
        f"sched  pending={sched.pending_count()} done={sched.events_processed} "
        f"stale={sched.stale_dropped}"
        + (f" next in {next_due - world.clock.time:.1f}s"
           if next_due != float("inf") else ""),
        f"player @{world.player.cell} on {CELL_NAMES[world.grid[py][px]]}",
    ]
    lines.extend("  " + line for line in sched.debug_dump(limit=3))
    for adv in world.adversaries:
        mode = "scared" if adv.scared else adv.behavior.value
        lines.append(f"#{adv.id} {mode:<11} @{adv.cell}"
                     f"{' smart' if adv.smart_mode else ''}")
    lines.append("")
    for e in world.log.recent(10):
        lines.append(f"{e['t']:6.1f} {e['name']:<14} {e['msg']}")

    y = HUD_HEIGHT + 6
    for line in lines:
        app.draw_text_bg(surface, line, 6, y, font=app.font_sm)
        y += 13
