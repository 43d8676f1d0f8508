"""Sort resolution — compare the targeted bin to the item's category."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from assemblyline.models import (
    ConveyorItem,
    FeedbackKind,
    ItemCategory,
    PowerUpKind,
    ScoringRules,
    Sound,
    SortOutcome,
)

if TYPE_CHECKING:
    from assemblyline.session import GameSession

logger = logging.getLogger(__name__)


def score_sort(
    item: ConveyorItem,
    target: ItemCategory,
    rules: ScoringRules,
    bonus_active: bool = False,
) -> tuple[bool, int]:
    """Grade a single sort. Returns ``(correct, points)``."""
    if item.category != target:
        return False, rules.incorrect_sort

    points = rules.defective_sort if item.category == ItemCategory.DEFECTIVE else rules.correct_sort
    if bonus_active:
        points *= rules.bonus_multiplier
    return True, points


class SortResolver:
    """Applies sorts to a session: removes the item, scores it, signals feedback."""

    def __init__(self, session: GameSession) -> None:
        self._session = session

    def resolve(
        self,
        item: ConveyorItem,
        target: ItemCategory,
        auto: bool = False,
    ) -> SortOutcome | None:
        """Resolve ``item`` into the ``target`` bin.

        Returns None when the item was already resolved or missed.
        """
        session = self._session
        # Removal comes first so a second resolve (or the miss timer) sees nothing.
        if session.registry.remove(item.id) is None:
            return None
        session.scheduler.cancel_key(item.id)

        position = (item.progress(session.scheduler.now_ms), item.lane_offset)
        if session.renderer:
            session.renderer.remove_item(item.id)

        correct, points = score_sort(
            item, target, session.scoring,
            bonus_active=session.power_ups.is_active(PowerUpKind.BONUS),
        )
        session.apply_score(points)

        stats = session.stats
        if correct:
            stats.sorted_correct += 1
            if auto:
                stats.auto_sorted += 1
            session.show_feedback(FeedbackKind.CORRECT, position, points)
            session.play(Sound.CORRECT_SORT)
        else:
            stats.sorted_incorrect += 1
            session.show_feedback(FeedbackKind.INCORRECT, position, points)
            session.play(Sound.INCORRECT_SORT)

        logger.debug(
            "Sorted %s (%s) into %s: %s %+d%s",
            item.name, item.category.value, target.value,
            "correct" if correct else "incorrect", points, " [auto]" if auto else "",
        )
        return SortOutcome(item=item, target=target, correct=correct, points=points, auto=auto)
