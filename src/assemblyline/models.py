"""Core data models shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from assemblyline import config


class ItemCategory(Enum):
    FRUIT = "fruit"
    TECH = "tech"
    DEFECTIVE = "defective"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class PowerUpKind(Enum):
    SLOW = "slow"
    AUTO_SORT = "auto_sort"
    BONUS = "bonus"


class FeedbackKind(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    MISSED = "missed"


class Sound(Enum):
    CORRECT_SORT = "correct_sort"
    INCORRECT_SORT = "incorrect_sort"
    MISSED_ITEM = "missed_item"
    POWER_UP = "power_up"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class ItemVariant:
    name: str
    glyph: str


CATALOG: dict[ItemCategory, tuple[ItemVariant, ...]] = {
    ItemCategory.FRUIT: (
        ItemVariant("apple", "🍎"),
        ItemVariant("banana", "🍌"),
        ItemVariant("orange", "🍊"),
        ItemVariant("strawberry", "🍓"),
        ItemVariant("grapes", "🍇"),
    ),
    ItemCategory.TECH: (
        ItemVariant("phone", "📱"),
        ItemVariant("laptop", "💻"),
        ItemVariant("headphones", "🎧"),
        ItemVariant("smartwatch", "⌚"),
        ItemVariant("mouse", "🖱️"),
    ),
    ItemCategory.DEFECTIVE: (
        ItemVariant("defective apple", "🍎⚠️"),
        ItemVariant("defective phone", "📱⚠️"),
        ItemVariant("defective banana", "🍌⚠️"),
        ItemVariant("defective laptop", "💻⚠️"),
    ),
}


@dataclass
class ConveyorItem:
    """A single item travelling along the conveyor."""

    id: str
    category: ItemCategory
    name: str
    glyph: str = ""
    lane_offset: int = 0  # pixels from the top of the lane
    travel_duration_s: float = 10.0
    spawned_at_ms: float = 0.0  # scheduler time

    def progress(self, now_ms: float) -> float:
        """Fraction of the conveyor covered at ``now_ms``, clamped to [0, 1]."""
        if self.travel_duration_s <= 0:
            return 1.0
        elapsed = (now_ms - self.spawned_at_ms) / (self.travel_duration_s * 1000.0)
        return max(0.0, min(1.0, elapsed))


@dataclass(frozen=True)
class DifficultyProfile:
    item_speed_s: float
    spawn_interval_ms: int
    power_up_probability: float

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty) -> DifficultyProfile:
        speed, interval, chance = config.DIFFICULTY_PRESETS[difficulty.value]
        return cls(item_speed_s=speed, spawn_interval_ms=interval, power_up_probability=chance)


@dataclass(frozen=True)
class PowerUpConfig:
    activation_ms: int
    cooldown_ms: int


POWER_UPS: dict[PowerUpKind, PowerUpConfig] = {
    kind: PowerUpConfig(*config.POWER_UP_TIMINGS[kind.value]) for kind in PowerUpKind
}


@dataclass
class PowerUpState:
    active: bool = False
    on_cooldown: bool = False
    enabled: bool = True  # button can be pressed
    ready: bool = False  # highlighted as offered


@dataclass(frozen=True)
class ScoringRules:
    correct_sort: int = config.CORRECT_SORT_POINTS
    defective_sort: int = config.DEFECTIVE_SORT_POINTS
    missed_item: int = config.MISSED_ITEM_POINTS
    incorrect_sort: int = config.INCORRECT_SORT_POINTS
    bonus_multiplier: int = config.BONUS_MULTIPLIER


@dataclass
class SortOutcome:
    item: ConveyorItem
    target: ItemCategory
    correct: bool
    points: int
    auto: bool = False


@dataclass
class GameSettings:
    difficulty: Difficulty = Difficulty.MEDIUM
    sound_enabled: bool = True


@dataclass
class SessionStats:
    difficulty: Difficulty = Difficulty.MEDIUM
    final_score: int = 0
    sorted_correct: int = 0
    sorted_incorrect: int = 0
    missed: int = 0
    auto_sorted: int = 0

    @property
    def accuracy_pct(self) -> float:
        total = self.sorted_correct + self.sorted_incorrect + self.missed
        return round(self.sorted_correct / total * 100.0, 1) if total > 0 else 0.0
