"""Player settings persisted as JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from assemblyline.models import Difficulty, GameSettings

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".assemblyline" / "settings.json"


@runtime_checkable
class SettingsStore(Protocol):
    def load(self) -> GameSettings: ...
    def save(self, settings: GameSettings) -> None: ...


def parse_difficulty(value: object) -> Difficulty:
    """Difficulty from its string name, falling back to medium."""
    try:
        return Difficulty(str(value).lower())
    except ValueError:
        logger.warning("Unknown difficulty %r, using %s", value, Difficulty.MEDIUM.value)
        return Difficulty.MEDIUM


class JsonSettingsStore:
    """Reads and writes :class:`GameSettings` under the ``"game"`` key of a JSON file."""

    def __init__(self, path: Path = DEFAULT_SETTINGS_PATH) -> None:
        self.path = Path(path)

    def load(self) -> GameSettings:
        """Load settings from disk, returning defaults if absent or unreadable."""
        if not self.path.exists():
            return GameSettings()
        try:
            data = json.loads(self.path.read_text())
            game = data.get("game", {})
            settings = GameSettings()
            if "difficulty" in game:
                settings.difficulty = parse_difficulty(game["difficulty"])
            if "sound_enabled" in game:
                settings.sound_enabled = bool(game["sound_enabled"])
            return settings
        except (OSError, ValueError, AttributeError, TypeError) as exc:
            logger.warning("Could not read settings from %s: %s", self.path, exc)
            return GameSettings()

    def save(self, settings: GameSettings) -> None:
        """Persist settings, keeping any other keys already in the file."""
        data: dict = {}
        if self.path.exists():
            try:
                data = json.loads(self.path.read_text())
            except (OSError, ValueError):
                data = {}
            if not isinstance(data, dict):
                data = {}
        data["game"] = {
            "difficulty": settings.difficulty.value,
            "sound_enabled": settings.sound_enabled,
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2))
        except OSError as exc:
            logger.warning("Could not save settings to %s: %s", self.path, exc)
