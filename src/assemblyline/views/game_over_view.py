"""Game over screen — final score and restart."""

from __future__ import annotations

import pygame

from assemblyline.models import SessionStats
from assemblyline.renderer import colors
from assemblyline.views.base import ViewAction, ViewContext


class GameOverView:
    name = "game_over"

    def __init__(self) -> None:
        self._stats = SessionStats()
        self._font: pygame.font.Font | None = None
        self._title_font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._stats = context.last_stats or SessionStats()
        self._font = pygame.font.SysFont("monospace", 22)
        self._title_font = pygame.font.SysFont("monospace", 44)

    def on_exit(self) -> None:
        pass

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN:
            return None
        if event.key in (pygame.K_RETURN, pygame.K_r):
            return ViewAction(kind="switch", target="game")
        if event.key in (pygame.K_ESCAPE, pygame.K_m):
            return ViewAction(kind="switch", target="menu")
        return None

    def update(self, dt: float) -> ViewAction | None:
        return None

    def draw(self, surface: pygame.Surface) -> None:
        if not self._font or not self._title_font:
            return

        surface.fill(colors.BG)
        w, h = surface.get_size()
        stats = self._stats

        title = self._title_font.render("GAME OVER", True, colors.INCORRECT)
        surface.blit(title, (w // 2 - title.get_width() // 2, 120))

        lines = [
            f"Final score: {stats.final_score}",
            f"Difficulty: {stats.difficulty.value}",
            f"Sorted: {stats.sorted_correct}  Wrong bin: {stats.sorted_incorrect}  Missed: {stats.missed}",
            f"Auto-sorted: {stats.auto_sorted}  Accuracy: {stats.accuracy_pct:.0f}%",
        ]
        y = 230
        for line in lines:
            rendered = self._font.render(line, True, colors.HUD_TEXT)
            surface.blit(rendered, (w // 2 - rendered.get_width() // 2, y))
            y += 36

        legend = self._font.render("Enter: play again | Esc: main menu", True, colors.DIM_TEXT)
        surface.blit(legend, (w // 2 - legend.get_width() // 2, h - 60))
