"""scenes/upgrade_scene.py — Between-level upgrade menu.

Pushed by the maze scene when a level is cleared.  Lists the catalogue
with costs and affordability; 1/2/3 buy, Enter/Space starts the next
level and pops back to the maze.
"""

from __future__ import annotations
import pygame

from core.app import App
from core.scene import Scene
from logic.input_manager import InputManager, InputContext
from logic.upgrades import catalogue
from simulation.game import Simulation

_BUY_INTENTS = (
    ("buy_speed", "speed"),
    ("buy_lives", "lives"),
    ("buy_multiplier", "multiplier"),
)


class UpgradeScene(Scene):

    def __init__(self, sim: Simulation):
        self.sim = sim
        self.input = InputManager()
        self.input.context = InputContext.UI
        self.message = ""

    def handle_event(self, event: pygame.event.Event, app: App):
        self.input.feed(event)

    def update(self, dt: float, app: App):
        for intent, kind in _BUY_INTENTS:
            if self.input.just(intent):
                if self.sim.apply_upgrade(kind):
                    self.message = f"Bought {kind}"
                else:
                    self.message = "Not enough score"
        confirm = self.input.just("ui_confirm")
        self.input.begin_frame()

        if confirm:
            self.sim.resume_after_upgrades()
            app.pop_scene()

    def draw(self, surface: pygame.Surface, app: App):
        game = self.sim.world.game
        surface.fill((12, 12, 24))
        sw, _ = surface.get_size()

        y = 60
        app.draw_text(surface, f"Level {game.level - 1} cleared!", sw // 2 - 110, y,
                      color=(255, 255, 0), font=app.font_lg)
        y += 40
        app.draw_text(surface, f"Score {game.score}   Lives {game.lives}   "
                      f"x{game.multiplier}", sw // 2 - 140, y)
        y += 50

        for i, (up, affordable) in enumerate(catalogue(game), start=1):
            color = (120, 255, 120) if affordable else (110, 110, 110)
            app.draw_text(surface, f"[{i}] {up.label:<12} {up.cost:>6}",
                          sw // 2 - 140, y, color=color, font=app.font_lg)
            y += 32

        y += 20
        if self.message:
            app.draw_text(surface, self.message, sw // 2 - 140, y,
                          color=(255, 200, 120))
            y += 26
        app.draw_text(surface, "Enter / Space: next level", sw // 2 - 140, y,
                      color=(180, 180, 200))
