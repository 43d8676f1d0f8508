"""Power-up controller — slow, auto-sort and bonus with independent cooldowns.

Each kind cycles Idle -> Active -> CoolingDown -> Idle. Activation starts
two timers at the same instant: one ends the effect, the other ends the
cooldown. They are independent, so either may fire first; each only touches
its own flag, and both check the activation generation so a timer left over
from an earlier activation does nothing.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from assemblyline import config
from assemblyline.models import POWER_UPS, PowerUpConfig, PowerUpKind, PowerUpState, Sound

if TYPE_CHECKING:
    from assemblyline.session import GameSession

logger = logging.getLogger(__name__)


class PowerUpController:
    def __init__(
        self,
        session: GameSession,
        configs: dict[PowerUpKind, PowerUpConfig] | None = None,
    ) -> None:
        self._session = session
        self._configs = dict(configs or POWER_UPS)
        self._states = {kind: PowerUpState() for kind in PowerUpKind}
        self._generation = {kind: 0 for kind in PowerUpKind}

    def reset(self) -> None:
        for kind in PowerUpKind:
            self._session.scheduler.cancel_key(kind)
            self._session.scheduler.cancel_key((kind, "tick"))
            self._states[kind] = PowerUpState()
            self._generation[kind] += 1

    def state(self, kind: PowerUpKind) -> PowerUpState:
        return self._states[kind]

    def states(self) -> dict[PowerUpKind, PowerUpState]:
        return dict(self._states)

    def config(self, kind: PowerUpKind) -> PowerUpConfig:
        return self._configs[kind]

    def is_active(self, kind: PowerUpKind) -> bool:
        return self._states[kind].active

    def can_activate(self, kind: PowerUpKind) -> bool:
        state = self._states[kind]
        session = self._session
        return (
            session.running and not session.paused
            and state.enabled and not state.on_cooldown
        )

    def activate(self, kind: PowerUpKind) -> bool:
        """Start ``kind`` if it is off cooldown. Returns True when activated."""
        if not self.can_activate(kind):
            return False

        state = self._states[kind]
        cfg = self._configs[kind]
        self._generation[kind] += 1
        generation = self._generation[kind]

        state.active = True
        state.on_cooldown = True
        state.enabled = False
        state.ready = False
        self._session.play(Sound.POWER_UP)

        scheduler = self._session.scheduler
        scheduler.call_later(cfg.activation_ms, lambda: self._deactivate(kind, generation), key=kind)
        scheduler.call_later(cfg.cooldown_ms, lambda: self._cooldown_done(kind, generation), key=kind)
        if kind == PowerUpKind.AUTO_SORT:
            scheduler.call_every(
                config.AUTO_SORT_INTERVAL_MS,
                lambda: self._auto_sort_tick(generation),
                key=(kind, "tick"),
            )

        logger.info("Power-up %s active for %dms (cooldown %dms)", kind.value, cfg.activation_ms, cfg.cooldown_ms)
        return True

    def offer_random(self, rng: random.Random) -> PowerUpKind | None:
        """Highlight one random power-up that is off cooldown."""
        available = [kind for kind in PowerUpKind if not self._states[kind].on_cooldown]
        if not available:
            return None
        kind = rng.choice(available)
        self._states[kind].enabled = True
        self._states[kind].ready = True
        logger.debug("Power-up %s offered", kind.value)
        return kind

    def _deactivate(self, kind: PowerUpKind, generation: int) -> None:
        if generation != self._generation[kind]:
            return
        self._states[kind].active = False
        if kind == PowerUpKind.AUTO_SORT:
            self._session.scheduler.cancel_key((kind, "tick"))
        logger.debug("Power-up %s ended", kind.value)

    def _cooldown_done(self, kind: PowerUpKind, generation: int) -> None:
        if generation != self._generation[kind]:
            return
        state = self._states[kind]
        state.on_cooldown = False
        if self._session.running and not self._session.paused:
            state.enabled = True
        logger.debug("Power-up %s cooled down", kind.value)

    def _auto_sort_tick(self, generation: int) -> None:
        kind = PowerUpKind.AUTO_SORT
        session = self._session
        if (
            generation != self._generation[kind]
            or not self._states[kind].active
            or not session.running
            or session.paused
        ):
            session.scheduler.cancel_key((kind, "tick"))
            return
        item = session.registry.oldest()
        if item is not None:
            session.resolver.resolve(item, item.category, auto=True)
