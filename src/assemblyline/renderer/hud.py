"""Heads-up display — score, lives, power-up and pause buttons."""

from __future__ import annotations

import pygame

from assemblyline.models import PowerUpKind, PowerUpState
from assemblyline.renderer import colors

PAUSE_BUTTON = "pause"

BUTTON_WIDTH = 150
BUTTON_HEIGHT = 34
BUTTON_GAP = 12
BUTTON_TOP = 8

_POWER_LABELS = {
    PowerUpKind.SLOW: "1 Slow",
    PowerUpKind.AUTO_SORT: "2 Auto-sort",
    PowerUpKind.BONUS: "3 Bonus x2",
}


def hud_buttons(screen_width: int) -> dict[PowerUpKind | str, pygame.Rect]:
    """Clickable HUD buttons, laid out right to left from the top-right corner."""
    buttons: dict[PowerUpKind | str, pygame.Rect] = {}
    right = screen_width - BUTTON_GAP
    for key in (PAUSE_BUTTON, *reversed(list(PowerUpKind))):
        width = BUTTON_WIDTH if key != PAUSE_BUTTON else BUTTON_WIDTH // 2
        buttons[key] = pygame.Rect(right - width, BUTTON_TOP, width, BUTTON_HEIGHT)
        right -= width + BUTTON_GAP
    return buttons


def _power_color(state: PowerUpState) -> tuple[int, int, int]:
    if state.active:
        return colors.POWER_ACTIVE
    if state.on_cooldown or not state.enabled:
        return colors.POWER_COOLDOWN
    if state.ready:
        return colors.POWER_READY
    return colors.HUD_TEXT


def render_hud(
    surface: pygame.Surface,
    score: int,
    lives: int,
    power_ups: dict[PowerUpKind, PowerUpState],
    paused: bool = False,
) -> None:
    font = pygame.font.SysFont("monospace", 20)
    surface.blit(font.render(f"Score: {score}", True, colors.HUD_TEXT), (10, 10))

    for i in range(lives):
        pygame.draw.circle(surface, colors.HEART, (20 + i * 26, 52), 9)

    for key, rect in hud_buttons(surface.get_width()).items():
        if key == PAUSE_BUTTON:
            label, color = ("Resume" if paused else "Pause"), colors.HUD_TEXT
        else:
            label, color = _POWER_LABELS[key], _power_color(power_ups[key])
        pygame.draw.rect(surface, color, rect, width=2, border_radius=6)
        text = font.render(label, True, color)
        surface.blit(text, text.get_rect(center=rect.center))

    if power_ups[PowerUpKind.BONUS].active:
        banner = font.render("BONUS ACTIVE: 2x Points!", True, colors.POWER_READY)
        surface.blit(banner, banner.get_rect(midtop=(surface.get_width() // 2, 70)))
