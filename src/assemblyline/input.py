"""Player input — turns pointer, touch and keyboard events into sort attempts."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Protocol, runtime_checkable

import pygame

from assemblyline.models import ConveyorItem, ItemCategory


@dataclass
class SortAttempt:
    item_id: str
    target: ItemCategory
    timestamp: float


@runtime_checkable
class InputSource(Protocol):
    """Common interface for everything that can sort an item."""
    def poll(self) -> SortAttempt | None: ...
    def close(self) -> None: ...


# Keyboard shortcut -> bin for the oldest item on the belt
_KEY_TO_BIN: dict[int, ItemCategory] = {
    pygame.K_f: ItemCategory.FRUIT,
    pygame.K_t: ItemCategory.TECH,
    pygame.K_d: ItemCategory.DEFECTIVE,
}


class KeyboardInput:
    """Sorts the oldest item on the conveyor with a single key press."""

    def __init__(self, oldest_item: Callable[[], ConveyorItem | None]) -> None:
        self._oldest_item = oldest_item
        self._events: list[SortAttempt] = []

    def feed_event(self, event: pygame.event.Event) -> None:
        """Call from the game loop for each pygame event."""
        if event.type != pygame.KEYDOWN or event.key not in _KEY_TO_BIN:
            return
        item = self._oldest_item()
        if item is None:
            return
        self._events.append(SortAttempt(
            item_id=item.id, target=_KEY_TO_BIN[event.key], timestamp=time.time(),
        ))

    def poll(self) -> SortAttempt | None:
        if self._events:
            return self._events.pop(0)
        return None

    def close(self) -> None:
        self._events.clear()


class PointerInput:
    """Drag-and-drop with the mouse or a finger.

    ``item_at`` and ``bin_at`` hit-test screen positions; they are supplied
    by the view that knows where things are drawn.
    """

    def __init__(
        self,
        item_at: Callable[[tuple[int, int]], str | None],
        bin_at: Callable[[tuple[int, int]], ItemCategory | None],
        screen_size: tuple[int, int],
    ) -> None:
        self._item_at = item_at
        self._bin_at = bin_at
        self._screen_size = screen_size
        self._events: list[SortAttempt] = []
        self.dragging: str | None = None
        self.drag_pos: tuple[int, int] | None = None
        self.hover_bin: ItemCategory | None = None

    def _finger_pos(self, event: pygame.event.Event) -> tuple[int, int]:
        w, h = self._screen_size
        return int(event.x * w), int(event.y * h)

    def feed_event(self, event: pygame.event.Event) -> None:
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP):
            # SDL mirrors touches as mouse events; the finger events handle those.
            if getattr(event, "touch", False):
                return
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._press(event.pos)
            elif event.type == pygame.MOUSEMOTION:
                self._move(event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self._release(event.pos)
        elif event.type == pygame.FINGERDOWN:
            self._press(self._finger_pos(event))
        elif event.type == pygame.FINGERMOTION:
            self._move(self._finger_pos(event))
        elif event.type == pygame.FINGERUP:
            self._release(self._finger_pos(event))

    def _press(self, pos: tuple[int, int]) -> None:
        self.dragging = self._item_at(pos)
        self.drag_pos = pos if self.dragging else None

    def _move(self, pos: tuple[int, int]) -> None:
        if self.dragging is None:
            return
        self.drag_pos = pos
        self.hover_bin = self._bin_at(pos)

    def _release(self, pos: tuple[int, int]) -> None:
        if self.dragging is None:
            return
        target = self._bin_at(pos)
        if target is not None:
            self._events.append(SortAttempt(item_id=self.dragging, target=target, timestamp=time.time()))
        # Dropped outside a bin: the item snaps back onto the belt.
        self.cancel_drag()

    def cancel_drag(self) -> None:
        self.dragging = None
        self.drag_pos = None
        self.hover_bin = None

    def poll(self) -> SortAttempt | None:
        if self._events:
            return self._events.pop(0)
        return None

    def close(self) -> None:
        self._events.clear()
        self.cancel_drag()
