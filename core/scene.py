"""
core/scene.py — Scene interface

Every screen in the game is a Scene: the maze itself and the upgrade
menu pushed on top of it between levels.  The app holds a stack of
them.  Only the top scene gets events, updates, ticks and draw calls;
scenes below stay frozen, which is how the maze waits while the menu
is open.

    class MyScene(Scene):
        def on_enter(self, app):     # pushed, or revealed by a pop
            ...
        def handle_event(self, event, app):
            ...
        def update(self, dt, app):   # once per frame, dt in seconds
            ...
        def fixed_update(self, app): # once per TICK_DT of frame time
            return True
        def draw(self, surface, app):
            ...
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Called when this scene becomes active (pushed or revealed)."""
        pass

    def on_exit(self, app: App):
        """Called when this scene is removed or covered."""
        pass

    def handle_event(self, event: pygame.event.Event, app: App):
        """Process a single pygame event."""
        pass

    def update(self, dt: float, app: App):
        """Per-frame work that does not belong to the simulation."""
        pass

    def fixed_update(self, app: App) -> bool:
        """Run one fixed step.  Return False to skip the frame's remaining steps."""
        return False

    def draw(self, surface: pygame.Surface, app: App):
        """Draw to the screen surface."""
        pass
