"""Main menu with inline settings."""

from __future__ import annotations

import dataclasses

import pygame

from assemblyline.models import Difficulty, GameSettings
from assemblyline.renderer import colors
from assemblyline.views.base import ViewAction, ViewContext

_DIFFICULTIES = list(Difficulty)


class MenuView:
    name = "menu"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._settings = GameSettings()
        self._font: pygame.font.Font | None = None
        self._title_font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._settings = dataclasses.replace(context.settings)

    def on_exit(self) -> None:
        pass

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN:
            return None

        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="quit")
        elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
            return ViewAction(kind="switch", target="game", context_patch={"settings": self._settings})
        elif event.key in (pygame.K_LEFT, pygame.K_RIGHT):
            step = 1 if event.key == pygame.K_RIGHT else -1
            idx = _DIFFICULTIES.index(self._settings.difficulty)
            self._settings.difficulty = _DIFFICULTIES[(idx + step) % len(_DIFFICULTIES)]
            self._save("difficulty")
        elif event.key == pygame.K_s:
            self._settings.sound_enabled = not self._settings.sound_enabled
            self._save("sound_enabled")

        return None

    def _save(self, field: str) -> None:
        """Persist the one setting the player changed.

        The rest comes from the store, so one-run command line overrides
        never reach the settings file.
        """
        store = self._context.settings_store if self._context else None
        if store is None:
            return
        stored = store.load()
        setattr(stored, field, getattr(self._settings, field))
        store.save(stored)

    def update(self, dt: float) -> ViewAction | None:
        return None

    def draw(self, surface: pygame.Surface) -> None:
        if self._font is None or self._title_font is None:
            self._font = pygame.font.SysFont("monospace", 20)
            self._title_font = pygame.font.SysFont("monospace", 40)

        surface.fill(colors.BG)
        w, h = surface.get_size()

        title = self._title_font.render("Assembly Line", True, colors.CORRECT)
        surface.blit(title, (w // 2 - title.get_width() // 2, 80))

        lines = [
            ("Drag items into the matching bin before they leave the belt.", colors.HUD_TEXT),
            ("", colors.HUD_TEXT),
            (f"Difficulty: < {self._settings.difficulty.value} >", colors.POWER_READY),
            (f"Sound: {'On' if self._settings.sound_enabled else 'Off'}  (S to toggle)", colors.HUD_TEXT),
        ]
        y = 200
        for text, color in lines:
            if text:
                rendered = self._font.render(text, True, color)
                surface.blit(rendered, (w // 2 - rendered.get_width() // 2, y))
            y += 34

        legend = self._font.render(
            "Enter: start | Left/Right: difficulty | F/T/D: sort oldest | 1-3: power-ups | Esc: quit",
            True, colors.DIM_TEXT,
        )
        surface.blit(legend, (w // 2 - legend.get_width() // 2, h - 50))
