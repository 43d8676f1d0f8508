"""Conveyor belt, items and bins."""

from __future__ import annotations

import pygame

from assemblyline.config import ITEM_SIZE, LANE_HEIGHT, LANE_TOP, WINDOW_WIDTH
from assemblyline.models import ConveyorItem, ItemCategory
from assemblyline.renderer import colors

BIN_TOP = LANE_TOP + LANE_HEIGHT + 60
BIN_HEIGHT = 160
BIN_ORDER = (ItemCategory.FRUIT, ItemCategory.TECH, ItemCategory.DEFECTIVE)


def item_rect(item: ConveyorItem, now_ms: float) -> pygame.Rect:
    """Where ``item`` sits on the belt at ``now_ms``."""
    x = item.progress(now_ms) * (WINDOW_WIDTH - ITEM_SIZE)
    return pygame.Rect(int(x), LANE_TOP + item.lane_offset, ITEM_SIZE, ITEM_SIZE)


def bin_rects(screen_width: int = WINDOW_WIDTH) -> dict[ItemCategory, pygame.Rect]:
    gap = 40
    w = (screen_width - gap * (len(BIN_ORDER) + 1)) // len(BIN_ORDER)
    return {
        category: pygame.Rect(gap + i * (w + gap), BIN_TOP, w, BIN_HEIGHT)
        for i, category in enumerate(BIN_ORDER)
    }


def render_belt(surface: pygame.Surface, now_ms: float) -> None:
    belt = pygame.Rect(0, LANE_TOP, surface.get_width(), LANE_HEIGHT)
    pygame.draw.rect(surface, colors.BELT, belt)
    # Stripes scroll with the game clock so the belt stops when paused
    offset = int(now_ms / 20) % 80
    for x in range(-80 + offset, surface.get_width(), 80):
        pygame.draw.line(surface, colors.BELT_STRIPE, (x, LANE_TOP), (x + 30, LANE_TOP + LANE_HEIGHT), 3)


def render_item(surface: pygame.Surface, item: ConveyorItem, rect: pygame.Rect, font: pygame.font.Font) -> None:
    pygame.draw.rect(surface, colors.CATEGORY_COLORS[item.category], rect, border_radius=8)
    label = font.render(item.name.split()[-1][:6], True, colors.BG)
    surface.blit(label, label.get_rect(center=rect.center))
    if item.category == ItemCategory.DEFECTIVE:
        pygame.draw.rect(surface, colors.INCORRECT, rect, width=3, border_radius=8)


def render_items(
    surface: pygame.Surface,
    items: list[ConveyorItem],
    now_ms: float,
    font: pygame.font.Font,
    dragging: str | None = None,
    drag_pos: tuple[int, int] | None = None,
) -> None:
    """Draw every item on the belt; the dragged one follows the pointer."""
    held: ConveyorItem | None = None
    for item in items:
        if item.id == dragging and drag_pos is not None:
            held = item
            continue
        render_item(surface, item, item_rect(item, now_ms), font)
    if held is not None:
        rect = pygame.Rect(0, 0, ITEM_SIZE, ITEM_SIZE)
        rect.center = drag_pos
        render_item(surface, held, rect, font)


def render_bins(
    surface: pygame.Surface,
    rects: dict[ItemCategory, pygame.Rect],
    font: pygame.font.Font,
    hover: ItemCategory | None = None,
) -> None:
    for category, rect in rects.items():
        pygame.draw.rect(surface, colors.CATEGORY_COLORS[category], rect, width=4, border_radius=12)
        if category == hover:
            pygame.draw.rect(surface, colors.HIGHLIGHT, rect.inflate(8, 8), width=2, border_radius=14)
        label = font.render(category.value.upper(), True, colors.CATEGORY_COLORS[category])
        surface.blit(label, label.get_rect(center=rect.center))
