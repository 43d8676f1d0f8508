"""Game session — score, lives, run state, and the collaborators the core drives."""

from __future__ import annotations

import logging
import random
from typing import Callable, Protocol, runtime_checkable

from assemblyline import config
from assemblyline.clock import Scheduler
from assemblyline.models import (
    ConveyorItem,
    Difficulty,
    DifficultyProfile,
    FeedbackKind,
    ItemCategory,
    PowerUpKind,
    ScoringRules,
    SessionStats,
    Sound,
    SortOutcome,
)
from assemblyline.powerups import PowerUpController
from assemblyline.registry import ItemRegistry
from assemblyline.resolver import SortResolver
from assemblyline.spawner import Spawner

logger = logging.getLogger(__name__)


@runtime_checkable
class Renderer(Protocol):
    """Presentation sink for everything the player sees."""

    def show_item(self, item: ConveyorItem) -> None: ...
    def remove_item(self, item_id: str) -> None: ...
    def show_feedback(self, kind: FeedbackKind, position: tuple[float, int], points: int) -> None: ...
    def update_score(self, score: int) -> None: ...
    def update_lives(self, lives: int) -> None: ...
    def show_game_over(self, final_score: int) -> None: ...


@runtime_checkable
class AudioPlayer(Protocol):
    def play(self, sound: Sound) -> None: ...


class GameSession:
    """One player's run: owns the clock, the conveyor and the scoring state.

    All mutation happens inside :meth:`update` (timer callbacks) or the
    input entry points, on the game loop thread.
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.MEDIUM,
        renderer: Renderer | None = None,
        audio: AudioPlayer | None = None,
        sound_enabled: bool = True,
        rng: random.Random | None = None,
        scoring: ScoringRules | None = None,
        initial_lives: int = config.INITIAL_LIVES,
        on_game_over: Callable[[SessionStats], None] | None = None,
    ) -> None:
        self.difficulty = difficulty
        self.profile = DifficultyProfile.for_difficulty(difficulty)
        self.renderer = renderer
        self.audio = audio
        self.sound_enabled = sound_enabled
        self.scoring = scoring or ScoringRules()
        self.initial_lives = initial_lives
        self.on_game_over = on_game_over

        self.score = 0
        self.lives = initial_lives
        self.running = False
        self.paused = False
        self.stats = SessionStats(difficulty=difficulty)

        self.scheduler = Scheduler()
        self.registry = ItemRegistry()
        self.spawner = Spawner(self, rng)
        self.resolver = SortResolver(self)
        self.power_ups = PowerUpController(self)

    # -- lifecycle -------------------------------------------------------

    def start(self) -> None:
        """Reset to a fresh game and start the conveyor."""
        self.scheduler.cancel_all()
        self._clear_items()
        self.power_ups.reset()
        self.score = 0
        self.lives = self.initial_lives
        self.stats = SessionStats(difficulty=self.difficulty)
        self.running = True
        self.paused = False
        if self.renderer:
            self.renderer.update_score(self.score)
            self.renderer.update_lives(self.lives)
        self.spawner.start(self.profile.spawn_interval_ms)
        logger.info("Session started (difficulty=%s)", self.difficulty.value)

    def pause(self) -> None:
        if not self.running:
            return
        self.paused = True

    def resume(self) -> None:
        if not self.running:
            return
        self.paused = False

    def toggle_pause(self) -> None:
        if self.paused:
            self.resume()
        else:
            self.pause()

    def end(self) -> SessionStats | None:
        """Game over: stop the conveyor, freeze state and surface the final score.

        Only the first call after :meth:`start` has any effect.
        """
        if not self.running:
            return None
        self._stop()
        self.stats.final_score = self.score
        self.play(Sound.GAME_OVER)
        if self.renderer:
            self.renderer.show_game_over(self.score)
        logger.info(
            "Game over: score=%d correct=%d incorrect=%d missed=%d",
            self.score, self.stats.sorted_correct, self.stats.sorted_incorrect, self.stats.missed,
        )
        if self.on_game_over:
            self.on_game_over(self.stats)
        return self.stats

    def quit(self) -> None:
        """Abandon the game without game-over signalling (return to menu)."""
        if self.running:
            self._stop()
        self._clear_items()
        logger.info("Session abandoned at score=%d", self.score)

    def _stop(self) -> None:
        self.spawner.stop()
        self.scheduler.cancel_all()
        self.running = False
        self.paused = False

    def _clear_items(self) -> None:
        for item in self.registry.clear():
            if self.renderer:
                self.renderer.remove_item(item.id)

    # -- time ------------------------------------------------------------

    @property
    def now_ms(self) -> float:
        return self.scheduler.now_ms

    def update(self, dt_ms: float) -> None:
        """Advance the game clock. A paused or stopped session stands still."""
        if not self.running or self.paused:
            return
        self.scheduler.advance(dt_ms)

    # -- player actions --------------------------------------------------

    def sort(self, item_id: str, target: ItemCategory) -> SortOutcome | None:
        """Player dropped ``item_id`` on the ``target`` bin."""
        if not self.running or self.paused:
            return None
        item = self.registry.get(item_id)
        if item is None:
            return None
        return self.resolver.resolve(item, target)

    def activate_power_up(self, kind: PowerUpKind) -> bool:
        return self.power_ups.activate(kind)

    # -- miss path -------------------------------------------------------

    def on_miss(self, item_id: str) -> None:
        """An item reached the end of the conveyor unsorted."""
        if not self.running:
            return
        item = self.registry.remove(item_id)
        if item is None:
            return
        if self.renderer:
            self.renderer.remove_item(item_id)

        self.apply_score(self.scoring.missed_item)
        self.lives = max(0, self.lives - 1)
        self.stats.missed += 1
        if self.renderer:
            self.renderer.update_lives(self.lives)
        self.show_feedback(FeedbackKind.MISSED, (1.0, item.lane_offset), self.scoring.missed_item)
        self.play(Sound.MISSED_ITEM)
        logger.debug("Missed %s, lives=%d", item.name, self.lives)

        if self.lives == 0:
            self.end()

    # -- bookkeeping used by the resolver and power-ups ------------------

    def apply_score(self, delta: int) -> int:
        self.score = max(0, self.score + delta)
        if self.renderer:
            self.renderer.update_score(self.score)
        return self.score

    def show_feedback(self, kind: FeedbackKind, position: tuple[float, int], points: int) -> None:
        if self.renderer:
            self.renderer.show_feedback(kind, position, points)

    def play(self, sound: Sound) -> None:
        if self.audio and self.sound_enabled:
            self.audio.play(sound)
