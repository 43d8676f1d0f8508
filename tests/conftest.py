"""Shared fixtures: recording collaborators and a seeded session."""

from __future__ import annotations

import itertools
import random

import pytest

from assemblyline.models import ConveyorItem, Difficulty, ItemCategory
from assemblyline.session import GameSession

_ids = itertools.count()


class RecordingRenderer:
    def __init__(self) -> None:
        self.shown: list[str] = []
        self.removed: list[str] = []
        self.feedback: list[tuple] = []
        self.score = 0
        self.lives = 0
        self.game_over: list[int] = []

    def show_item(self, item):
        self.shown.append(item.id)

    def remove_item(self, item_id):
        self.removed.append(item_id)

    def show_feedback(self, kind, position, points):
        self.feedback.append((kind, position, points))

    def update_score(self, score):
        self.score = score

    def update_lives(self, lives):
        self.lives = lives

    def show_game_over(self, final_score):
        self.game_over.append(final_score)


class RecordingAudio:
    def __init__(self) -> None:
        self.played = []

    def play(self, sound):
        self.played.append(sound)


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def session(renderer, audio):
    s = GameSession(
        difficulty=Difficulty.MEDIUM,
        renderer=renderer,
        audio=audio,
        rng=random.Random(1234),
    )
    s.start()
    return s


@pytest.fixture
def quiet_session(session):
    """A started session with the spawner stopped, for hand-placed items."""
    session.spawner.stop()
    return session


@pytest.fixture
def put_item():
    """Register an item by hand, with its miss timer, as the spawner would."""

    def _put(session, category=ItemCategory.FRUIT, name="banana", item_id=None, duration=10.0):
        item = ConveyorItem(
            id=item_id or f"test-{next(_ids)}-{name}",
            category=category,
            name=name,
            lane_offset=20,
            travel_duration_s=duration,
            spawned_at_ms=session.now_ms,
        )
        session.registry.add(item)
        session.scheduler.call_later(duration * 1000.0, lambda: session.on_miss(item.id), key=item.id)
        return item

    return _put
