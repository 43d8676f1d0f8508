"""Tests for the power-up state machines."""

import random

import pytest

from assemblyline.models import ItemCategory, PowerUpConfig, PowerUpKind, Sound


@pytest.mark.parametrize("kind", list(PowerUpKind))
def test_cannot_reactivate_until_cooldown_elapses(quiet_session, kind):
    cfg = quiet_session.power_ups.config(kind)
    assert quiet_session.activate_power_up(kind)
    state = quiet_session.power_ups.state(kind)
    assert state.active and state.on_cooldown

    quiet_session.update(cfg.activation_ms)
    assert not state.active
    assert state.on_cooldown
    assert not quiet_session.activate_power_up(kind)

    quiet_session.update(cfg.cooldown_ms - cfg.activation_ms - 1)
    assert not quiet_session.activate_power_up(kind)

    quiet_session.update(1)
    assert not state.on_cooldown
    assert quiet_session.activate_power_up(kind)


def test_activation_plays_power_up_sound(quiet_session, audio):
    quiet_session.activate_power_up(PowerUpKind.SLOW)
    assert audio.played == [Sound.POWER_UP]


def test_power_ups_are_independent(quiet_session):
    assert quiet_session.activate_power_up(PowerUpKind.SLOW)
    assert quiet_session.activate_power_up(PowerUpKind.BONUS)
    quiet_session.update(5000)
    assert not quiet_session.power_ups.is_active(PowerUpKind.SLOW)
    assert quiet_session.power_ups.is_active(PowerUpKind.BONUS)


def test_cooldown_shorter_than_activation_is_handled(quiet_session):
    # Cooldown timer firing first must not end the effect early.
    controller = quiet_session.power_ups
    controller._configs[PowerUpKind.BONUS] = PowerUpConfig(activation_ms=3000, cooldown_ms=1000)
    assert quiet_session.activate_power_up(PowerUpKind.BONUS)

    quiet_session.update(1000)
    state = controller.state(PowerUpKind.BONUS)
    assert state.active
    assert not state.on_cooldown

    quiet_session.update(2000)
    assert not state.active


def test_activation_blocked_while_paused(quiet_session):
    quiet_session.pause()
    assert not quiet_session.activate_power_up(PowerUpKind.SLOW)


def test_auto_sort_resolves_oldest_each_second(quiet_session, put_item, audio):
    first = put_item(quiet_session, ItemCategory.FRUIT, "apple", duration=30)
    second = put_item(quiet_session, ItemCategory.DEFECTIVE, "defective laptop", duration=30)
    third = put_item(quiet_session, ItemCategory.TECH, "phone", duration=30)

    assert quiet_session.activate_power_up(PowerUpKind.AUTO_SORT)
    quiet_session.update(999)
    assert len(quiet_session.registry) == 3

    quiet_session.update(1)
    assert first.id not in quiet_session.registry
    assert second.id in quiet_session.registry

    quiet_session.update(1000)
    assert second.id not in quiet_session.registry
    assert quiet_session.score == 10 + 15

    quiet_session.update(1000)
    assert third.id not in quiet_session.registry
    assert quiet_session.stats.auto_sorted == 3
    assert audio.played.count(Sound.CORRECT_SORT) == 3


def test_auto_sort_stops_when_deactivated(quiet_session, put_item):
    assert quiet_session.activate_power_up(PowerUpKind.AUTO_SORT)
    quiet_session.update(5000)
    assert not quiet_session.power_ups.is_active(PowerUpKind.AUTO_SORT)

    item = put_item(quiet_session, duration=30)
    quiet_session.update(3000)
    assert item.id in quiet_session.registry
    assert quiet_session.scheduler.pending((PowerUpKind.AUTO_SORT, "tick")) == 0


def test_auto_sort_ticks_four_times_in_window(quiet_session, put_item):
    items = [put_item(quiet_session, duration=30) for _ in range(6)]
    quiet_session.activate_power_up(PowerUpKind.AUTO_SORT)
    quiet_session.update(6000)
    remaining = [i for i in items if i.id in quiet_session.registry]
    # Ticks at 1..4 s; the deactivation at 5 s was scheduled first and wins the tie.
    assert len(remaining) == 2


def test_offer_random_skips_cooling_down(quiet_session):
    for kind in (PowerUpKind.SLOW, PowerUpKind.AUTO_SORT):
        quiet_session.activate_power_up(kind)

    offered = quiet_session.power_ups.offer_random(random.Random(3))

    assert offered == PowerUpKind.BONUS
    assert quiet_session.power_ups.state(PowerUpKind.BONUS).ready


def test_offer_random_none_available(quiet_session):
    for kind in PowerUpKind:
        quiet_session.activate_power_up(kind)
    assert quiet_session.power_ups.offer_random(random.Random(3)) is None


def test_restart_resets_power_ups(session):
    session.activate_power_up(PowerUpKind.BONUS)
    session.start()
    state = session.power_ups.state(PowerUpKind.BONUS)
    assert not state.active and not state.on_cooldown
    assert session.activate_power_up(PowerUpKind.BONUS)
