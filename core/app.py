"""
core/app.py — Pygame application shell

Owns the window, the scene stack and the fixed-step clock.  Each frame:

    events → scene.handle_event      (top scene only)
    scene.update(dt)                 input intents, UI timers
    scene.fixed_update() × N         N whole TICK_DT steps of frame time
    scene.draw()

    app = App(title="Maze Chase", width=720, height=520)
    app.push_scene(MazeScene())
    app.run()
"""

from __future__ import annotations
import pygame

from core.constants import TICK_DT, TICK_RATE
from core.scene import Scene

# Never run more than this many ticks per frame (spiral-of-death guard)
MAX_TICKS_PER_FRAME = 8


class FixedStep:
    """Turns variable frame time into a whole number of simulation ticks.

    Leftover time carries into the next frame.  A frame that hits the
    tick cap drops its backlog instead of catching up later.
    """

    def __init__(self, step: float = TICK_DT,
                 max_steps: int = MAX_TICKS_PER_FRAME):
        self.step = step
        self.max_steps = max_steps
        self._accum = 0.0

    def advance(self, frame_dt: float) -> int:
        self._accum += frame_dt
        n = 0
        while self._accum >= self.step and n < self.max_steps:
            self._accum -= self.step
            n += 1
        if n == self.max_steps:
            self._accum = 0.0
        return n

    def reset(self) -> None:
        self._accum = 0.0


class App:
    def __init__(self, title: str = "Maze Chase", width: int = 720, height: int = 520):
        pygame.init()
        # SCALED keeps the game at its design resolution whatever the window size
        self.screen = pygame.display.set_mode((width, height), pygame.SCALED)
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.stepper = FixedStep()
        self.running = True
        self.dt = 0.0

        self._scenes: list[Scene] = []

        self.font = pygame.font.SysFont("monospace", 14)
        self.font_sm = pygame.font.SysFont("monospace", 11)
        self.font_lg = pygame.font.SysFont("monospace", 18)

    # -- Scene management --

    @property
    def scene(self) -> Scene | None:
        return self._scenes[-1] if self._scenes else None

    def push_scene(self, scene: Scene):
        if self._scenes:
            self._scenes[-1].on_exit(self)
        self._scenes.append(scene)
        self.stepper.reset()
        scene.on_enter(self)

    def pop_scene(self):
        if self._scenes:
            self._scenes[-1].on_exit(self)
            self._scenes.pop()
        self.stepper.reset()
        if self._scenes:
            self._scenes[-1].on_enter(self)

    # -- Main loop --

    def run(self):
        while self.running and self.scene:
            # Clamp long frames (window drag, breakpoint)
            self.dt = min(self.clock.tick(TICK_RATE) / 1000.0, 0.25)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                else:
                    self.scene.handle_event(event, self)

            self.scene.update(self.dt, self)
            self.run_ticks(self.stepper.advance(self.dt))

            if self.scene:
                self.scene.draw(self.screen, self)
            pygame.display.flip()

        pygame.quit()

    def run_ticks(self, n: int) -> int:
        """Give the top scene up to *n* fixed steps.

        Stops early when the scene declines a step or the stack changes
        under it (e.g. the upgrade menu was pushed mid-frame).
        """
        scene = self.scene
        done = 0
        while done < n and scene is not None and scene is self.scene:
            if not scene.fixed_update(self):
                break
            done += 1
        return done

    # -- Convenience --

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(255, 255, 255), font=None):
        """Quick text draw. Returns the rect for layout chaining."""
        img = (font or self.font).render(text, True, color)
        return surface.blit(img, (x, y))

    def draw_text_bg(self, surface: pygame.Surface, text: str, x: int, y: int,
                     color=(255, 255, 255), bg=(0, 0, 0, 160), font=None,
                     pad: int = 2):
        """Draw text on a translucent box (HUD flashes, diagnostics)."""
        img = (font or self.font).render(text, True, color)
        w, h = img.get_size()
        box = pygame.Surface((w + pad * 2, h + pad * 2), pygame.SRCALPHA)
        box.fill(bg)
        surface.blit(box, (x - pad, y - pad))
        return surface.blit(img, (x, y))
