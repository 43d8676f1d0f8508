"""Tests for session lifecycle, misses and game over."""

import random

from assemblyline import config
from assemblyline.models import Difficulty, FeedbackKind, ItemCategory, Sound
from assemblyline.session import GameSession


def test_start_resets_state(session, put_item, renderer):
    session.apply_score(40)
    session.lives = 1
    item = put_item(session)

    session.start()

    assert session.score == 0
    assert session.lives == config.INITIAL_LIVES
    assert len(session.registry) == 0
    assert session.running and not session.paused
    assert item.id in renderer.removed
    assert renderer.score == 0
    assert renderer.lives == config.INITIAL_LIVES


def test_miss_timeout_costs_points_and_a_life(quiet_session, put_item, audio, renderer):
    quiet_session.apply_score(20)
    item = put_item(quiet_session, duration=10.0)

    quiet_session.update(10_000)

    assert item.id not in quiet_session.registry
    assert quiet_session.score == 15
    assert quiet_session.lives == 2
    assert audio.played == [Sound.MISSED_ITEM]
    assert renderer.feedback[-1][0] == FeedbackKind.MISSED
    assert renderer.lives == 2


def test_miss_score_clamped_at_zero(quiet_session, put_item):
    put_item(quiet_session, duration=1.0)
    quiet_session.update(1000)
    assert quiet_session.score == 0


def test_last_life_ends_game(quiet_session, put_item, audio, renderer):
    finished = []
    quiet_session.on_game_over = finished.append
    quiet_session.lives = 1
    quiet_session.apply_score(35)
    put_item(quiet_session, duration=2.0)

    quiet_session.update(2000)

    assert quiet_session.lives == 0
    assert not quiet_session.running
    assert renderer.game_over == [30]
    assert len(finished) == 1
    assert finished[0].final_score == 30
    assert audio.played[-2:] == [Sound.MISSED_ITEM, Sound.GAME_OVER]


def test_game_over_fires_exactly_once(quiet_session, put_item, renderer):
    for _ in range(5):
        put_item(quiet_session, duration=1.0)

    quiet_session.update(1000)

    assert quiet_session.lives == 0
    assert renderer.game_over == [0]
    # Items still on the belt after game over stay frozen
    assert len(quiet_session.registry) == 2
    quiet_session.update(5000)
    assert renderer.game_over == [0]
    assert quiet_session.end() is None


def test_lives_never_below_zero(quiet_session, put_item):
    quiet_session.lives = 1
    item = put_item(quiet_session, duration=1.0)
    quiet_session.update(1000)
    # A stray miss after game over changes nothing
    quiet_session.on_miss(item.id)
    assert quiet_session.lives == 0


def test_pause_freezes_miss_timers(quiet_session, put_item):
    item = put_item(quiet_session, duration=2.0)
    quiet_session.update(1500)
    quiet_session.pause()
    quiet_session.update(60_000)
    assert item.id in quiet_session.registry

    quiet_session.resume()
    quiet_session.update(499)
    assert item.id in quiet_session.registry
    quiet_session.update(1)
    assert item.id not in quiet_session.registry


def test_pause_and_resume_require_running():
    s = GameSession()
    s.pause()
    assert not s.paused
    s.start()
    s.toggle_pause()
    assert s.paused
    s.toggle_pause()
    assert not s.paused


def test_quit_clears_without_game_over(session, renderer, audio):
    session.update(4000)
    assert len(session.registry) == 2

    session.quit()

    assert not session.running
    assert len(session.registry) == 0
    assert renderer.game_over == []
    assert Sound.GAME_OVER not in audio.played
    assert session.scheduler.pending() == 0


def test_sound_disabled_is_silent(renderer, audio):
    s = GameSession(renderer=renderer, audio=audio, sound_enabled=False)
    s.start()
    s.spawner.stop()
    item = s.spawner.spawn()
    s.sort(item.id, item.category)
    assert audio.played == []


def test_hard_difficulty_profile():
    s = GameSession(difficulty=Difficulty.HARD, rng=random.Random(5))
    s.start()
    s.update(1500)
    assert len(s.registry) == 1
    assert s.registry.oldest().travel_duration_s == 7.0


def test_works_without_collaborators():
    s = GameSession(rng=random.Random(9))
    s.start()
    s.spawner.stop()
    item = s.spawner.spawn()
    assert s.sort(item.id, ItemCategory.DEFECTIVE) is not None
    s.update(60_000)
    assert s.running


def test_stats_accuracy(quiet_session, put_item):
    a = put_item(quiet_session, ItemCategory.FRUIT)
    b = put_item(quiet_session, ItemCategory.TECH)
    quiet_session.sort(a.id, ItemCategory.FRUIT)
    quiet_session.sort(b.id, ItemCategory.FRUIT)
    assert quiet_session.stats.accuracy_pct == 50.0
