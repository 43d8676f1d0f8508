"""Spawner — puts new items on the conveyor at the difficulty's spawn rate."""

from __future__ import annotations

import logging
import random
import time
from typing import TYPE_CHECKING

from assemblyline import config
from assemblyline.models import CATALOG, ConveyorItem, ItemCategory, PowerUpKind

if TYPE_CHECKING:
    from assemblyline.clock import TimerHandle
    from assemblyline.session import GameSession

logger = logging.getLogger(__name__)

SPAWN_TIMER_KEY = "spawn"


def choose_category(roll: float) -> ItemCategory:
    """Map a uniform [0, 1) roll to a category: 10% defective, 45% fruit, 45% tech."""
    if roll < config.DEFECTIVE_THRESHOLD:
        return ItemCategory.DEFECTIVE
    if roll < config.FRUIT_THRESHOLD:
        return ItemCategory.FRUIT
    return ItemCategory.TECH


def lane_bounds() -> tuple[int, int]:
    """Half-open range of lane offsets that keep an item fully inside the lane."""
    low = config.LANE_MARGIN
    high = config.LANE_HEIGHT - config.ITEM_SIZE - config.LANE_MARGIN
    return low, high


def make_item_id(rng: random.Random) -> str:
    return f"{int(time.time() * 1000)}{rng.getrandbits(48):012x}"


class Spawner:
    def __init__(self, session: GameSession, rng: random.Random | None = None) -> None:
        self._session = session
        self.rng = rng or random.Random()
        self._timer: TimerHandle | None = None

    def start(self, interval_ms: int) -> None:
        self.stop()
        self._timer = self._session.scheduler.call_every(interval_ms, self.tick, key=SPAWN_TIMER_KEY)

    def stop(self) -> None:
        if self._timer is not None:
            self._session.scheduler.cancel(self._timer)
            self._timer = None

    def tick(self) -> ConveyorItem | None:
        session = self._session
        if not session.running or session.paused:
            return None
        item = self.spawn()
        if self.rng.random() < session.profile.power_up_probability:
            session.power_ups.offer_random(self.rng)
        return item

    def spawn(self) -> ConveyorItem:
        """Create, register and arm the miss timer for one new item."""
        session = self._session
        category = choose_category(self.rng.random())
        variant = self.rng.choice(CATALOG[category])
        low, high = lane_bounds()

        duration = session.profile.item_speed_s
        if session.power_ups.is_active(PowerUpKind.SLOW):
            duration *= config.SLOW_FACTOR

        item = ConveyorItem(
            id=make_item_id(self.rng),
            category=category,
            name=variant.name,
            glyph=variant.glyph,
            lane_offset=self.rng.randrange(low, high),
            travel_duration_s=duration,
            spawned_at_ms=session.scheduler.now_ms,
        )
        session.registry.add(item)
        if session.renderer:
            session.renderer.show_item(item)

        item_id = item.id
        session.scheduler.call_later(duration * 1000.0, lambda: session.on_miss(item_id), key=item_id)
        logger.debug("Spawned %s (%s) for %.1fs", item.name, category.value, duration)
        return item
