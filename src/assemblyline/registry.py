"""Item registry — the authoritative set of items on the conveyor."""

from __future__ import annotations

from typing import Iterator

from assemblyline.models import ConveyorItem


class ItemRegistry:
    """In-flight items in spawn order.

    Removal is exactly-once: the first caller to remove an id gets the item,
    every later caller gets ``None``.
    """

    def __init__(self) -> None:
        self._items: dict[str, ConveyorItem] = {}

    def add(self, item: ConveyorItem) -> None:
        if item.id in self._items:
            raise ValueError(f"duplicate item id {item.id!r}")
        self._items[item.id] = item

    def get(self, item_id: str) -> ConveyorItem | None:
        return self._items.get(item_id)

    def remove(self, item_id: str) -> ConveyorItem | None:
        return self._items.pop(item_id, None)

    def oldest(self) -> ConveyorItem | None:
        return next(iter(self._items.values()), None)

    def clear(self) -> list[ConveyorItem]:
        items = list(self._items.values())
        self._items.clear()
        return items

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ConveyorItem]:
        return iter(list(self._items.values()))
