"""scenes/maze_scene.py — The playing field.

Owns the ``Simulation``.  The app calls ``fixed_update`` once per
60 Hz tick of frame time, which advances the simulation by one step;
``draw`` then reads the world without touching it.

Keys (gameplay context):
    arrows / WASD  queue a direction
    P / Esc        pause
    Tab / F3       diagnostics overlay
    R              new game (any time; the only key after game over)

When a level is cleared the simulation pauses itself with
``awaiting_upgrades`` set and this scene pushes the ``UpgradeScene``.
"""

from __future__ import annotations
import pygame

from core.app import App
from core.constants import HUD_HEIGHT
from core.scene import Scene
from logic.input_manager import InputManager, InputContext
from simulation.game import Simulation
from scenes.draw import (
    draw_grid, draw_actors, draw_hud, draw_center_banner, draw_diagnostics,
)


class MazeScene(Scene):

    def __init__(self, seed: int | None = None):
        self.sim = Simulation(seed)
        self.input = InputManager()
        self._blink_t = 0.0
        self._flash: str = ""
        self._flash_t = 0.0
        self._subscribe()

    # ── bus wiring ───────────────────────────────────────────────────

    def _subscribe(self):
        bus = self.sim.world.bus

        def _on_eaten(ev):
            self._show(f"+{ev.points}")

        def _on_caught(ev):
            self._show("Caught!" if ev.lives_left > 0 else "")

        def _on_teleport(ev):
            self._show("Whoosh")

        bus.subscribe("AdversaryEaten", _on_eaten)
        bus.subscribe("PlayerCaught", _on_caught)
        bus.subscribe("Teleported", _on_teleport)

    def _show(self, text: str, secs: float = 1.0):
        self._flash = text
        self._flash_t = secs

    # ── lifecycle ────────────────────────────────────────────────────

    def on_enter(self, app: App):
        self.input.context = InputContext.GAMEPLAY

    # ── event handler ────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event, app: App):
        self.input.feed(event)

    # ── update ───────────────────────────────────────────────────────

    def update(self, dt: float, app: App):
        sim = self.sim
        game = sim.world.game

        if self.input.just("restart"):
            sim.new_game()
            self._subscribe()
            app.stepper.reset()
        elif game.is_playing:
            for d in self.input.direction_intents():
                sim.queue_direction(d)
            if self.input.just("pause"):
                sim.toggle_pause()
        if self.input.just("toggle_debug"):
            sim.toggle_diagnostics()
        self.input.begin_frame()

        self._blink_t = (self._blink_t + dt) % 0.4
        if self._flash_t > 0:
            self._flash_t -= dt

    def fixed_update(self, app: App) -> bool:
        if not self.sim.tick():
            return False
        if self.sim.world.game.awaiting_upgrades:
            from scenes.upgrade_scene import UpgradeScene
            app.push_scene(UpgradeScene(self.sim))
            return False
        return True

    # ── draw ─────────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, app: App):
        world = self.sim.world
        game = world.game
        surface.fill((0, 0, 0))

        draw_grid(surface, world.grid, HUD_HEIGHT)
        draw_actors(surface, world, HUD_HEIGHT, self._blink_t < 0.2)
        draw_hud(surface, app, world)

        if self._flash_t > 0 and self._flash:
            app.draw_text_bg(surface, self._flash, surface.get_width() // 2 - 30,
                             HUD_HEIGHT + 8, color=(255, 220, 120),
                             font=app.font_lg)

        if game.show_diagnostics:
            draw_diagnostics(surface, app, world)

        if not game.is_playing:
            draw_center_banner(surface, app, [
                "GAME OVER",
                f"Score {game.score}   Level {game.level}",
                f"Best combo {game.high_combo}   Eaten {game.adversaries_eaten}",
                "Press R to play again",
            ], color=(255, 90, 90))
        elif game.is_paused and not game.awaiting_upgrades:
            draw_center_banner(surface, app, ["PAUSED", "P to resume"])
