"""Top-level application: initializes pygame, manages screens, and runs the game loop."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from assemblyline.config import FPS, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from assemblyline.settings import JsonSettingsStore, parse_difficulty
from assemblyline.views.base import ViewContext, ViewManager
from assemblyline.views.game_over_view import GameOverView
from assemblyline.views.game_view import GameView
from assemblyline.views.menu_view import MenuView

logger = logging.getLogger(__name__)


class App:
    def __init__(
        self,
        settings_store: JsonSettingsStore | None = None,
        overrides: dict | None = None,
        soundfont: str | Path | None = None,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()

        store = settings_store or JsonSettingsStore()
        settings = store.load()
        for key, val in (overrides or {}).items():
            setattr(settings, key, val)

        # Audio is optional; the game runs silently without it
        self._audio = self._try_audio(soundfont)

        context = ViewContext(
            screen_size=(WINDOW_WIDTH, WINDOW_HEIGHT),
            audio=self._audio,
            settings_store=store,
            settings=settings,
        )

        self.views = ViewManager(context)
        self.views.register(MenuView)
        self.views.register(GameView)
        self.views.register(GameOverView)
        self.views.push("menu")

    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif not self.views.handle_event(event):
                    running = False
            if running:
                if not self.views.update(dt):
                    running = False
            self.views.draw(self.screen)
            pygame.display.flip()

        self._cleanup()
        pygame.quit()

    def _cleanup(self) -> None:
        while self.views.active_view:
            self.views.pop()
        if self._audio:
            self._audio.shutdown()

    @staticmethod
    def _try_audio(soundfont: str | Path | None):
        try:
            from assemblyline.audio import AudioEngine
            return AudioEngine(soundfont_path=soundfont)
        except Exception as exc:
            logger.warning("Audio unavailable, continuing without sound: %s", exc)
            return None


def settings_overrides(difficulty: str | None, mute: bool) -> dict:
    """CLI values that take precedence over stored settings for one run."""
    overrides: dict = {}
    if difficulty:
        overrides["difficulty"] = parse_difficulty(difficulty)
    if mute:
        overrides["sound_enabled"] = False
    return overrides
