"""Pygame implementation of the session's Renderer sink."""

from __future__ import annotations

from dataclasses import dataclass

import pygame

from assemblyline.config import ITEM_SIZE, LANE_TOP, WINDOW_WIDTH
from assemblyline.models import ConveyorItem, FeedbackKind, ItemCategory, PowerUpKind, PowerUpState
from assemblyline.renderer import colors
from assemblyline.renderer.conveyor import bin_rects, item_rect, render_belt, render_bins, render_items
from assemblyline.renderer.hud import hud_buttons, render_hud

FEEDBACK_TTL = 1.0  # seconds

_FEEDBACK_COLORS = {
    FeedbackKind.CORRECT: colors.CORRECT,
    FeedbackKind.INCORRECT: colors.INCORRECT,
    FeedbackKind.MISSED: colors.MISSED,
}


@dataclass
class FloatingText:
    kind: FeedbackKind
    x: int
    y: int
    text: str
    age: float = 0.0


class SceneRenderer:
    """Collects what the session reports and draws it each frame."""

    def __init__(self, screen_size: tuple[int, int]) -> None:
        self.screen_size = screen_size
        self.items: dict[str, ConveyorItem] = {}
        self.feedback: list[FloatingText] = []
        self.score = 0
        self.lives = 0
        self.bins = bin_rects(screen_size[0])
        self.buttons = hud_buttons(screen_size[0])
        self._font: pygame.font.Font | None = None

    # Renderer protocol

    def show_item(self, item: ConveyorItem) -> None:
        self.items[item.id] = item

    def remove_item(self, item_id: str) -> None:
        self.items.pop(item_id, None)

    def show_feedback(self, kind: FeedbackKind, position: tuple[float, int], points: int) -> None:
        progress, lane_offset = position
        x = int(progress * (WINDOW_WIDTH - ITEM_SIZE))
        y = LANE_TOP + lane_offset
        self.feedback.append(FloatingText(kind, x, y, f"{points:+d}"))

    def update_score(self, score: int) -> None:
        self.score = score

    def update_lives(self, lives: int) -> None:
        self.lives = lives

    def show_game_over(self, final_score: int) -> None:
        # The game over view draws the final stats
        pass

    # Frame loop

    def update(self, dt: float) -> None:
        for text in self.feedback:
            text.age += dt
        self.feedback = [t for t in self.feedback if t.age < FEEDBACK_TTL]

    def item_at(self, pos: tuple[int, int], now_ms: float) -> str | None:
        """Topmost item under ``pos``."""
        for item in reversed(list(self.items.values())):
            if item_rect(item, now_ms).collidepoint(pos):
                return item.id
        return None

    def bin_at(self, pos: tuple[int, int]) -> ItemCategory | None:
        for category, rect in self.bins.items():
            if rect.collidepoint(pos):
                return category
        return None

    def button_at(self, pos: tuple[int, int]) -> PowerUpKind | str | None:
        """HUD button under ``pos``: a power-up kind or ``PAUSE_BUTTON``."""
        for key, rect in self.buttons.items():
            if rect.collidepoint(pos):
                return key
        return None

    def draw(
        self,
        surface: pygame.Surface,
        now_ms: float,
        power_ups: dict[PowerUpKind, PowerUpState],
        dragging: str | None = None,
        drag_pos: tuple[int, int] | None = None,
        hover_bin: ItemCategory | None = None,
        paused: bool = False,
    ) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont("monospace", 16, bold=True)

        surface.fill(colors.BG)
        render_belt(surface, now_ms)
        render_bins(surface, self.bins, self._font, hover_bin)
        render_items(surface, list(self.items.values()), now_ms, self._font, dragging, drag_pos)

        for text in self.feedback:
            rendered = self._font.render(text.text, True, _FEEDBACK_COLORS[text.kind])
            rendered.set_alpha(int(255 * (1.0 - text.age / FEEDBACK_TTL)))
            surface.blit(rendered, (text.x, text.y - int(text.age * 40)))

        render_hud(surface, self.score, self.lives, power_ups, paused=paused)
