"""Sound cues synthesized via FluidSynth + SoundFonts."""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path

import fluidsynth

from assemblyline.models import Sound

logger = logging.getLogger(__name__)

# (offset seconds, MIDI pitch, velocity, duration seconds)
Cue = list[tuple[float, int, int, float]]

CUES: dict[Sound, Cue] = {
    Sound.CORRECT_SORT: [(0.0, 72, 90, 0.08), (0.07, 79, 90, 0.12)],
    Sound.INCORRECT_SORT: [(0.0, 55, 100, 0.12), (0.1, 54, 100, 0.2)],
    Sound.MISSED_ITEM: [(0.0, 48, 110, 0.3)],
    Sound.POWER_UP: [(0.0, 67, 90, 0.06), (0.06, 72, 90, 0.06), (0.12, 76, 90, 0.06), (0.18, 84, 100, 0.2)],
    Sound.GAME_OVER: [(0.0, 67, 100, 0.3), (0.3, 63, 100, 0.3), (0.6, 60, 100, 0.3), (0.9, 55, 110, 0.8)],
}


def _detect_audio_driver() -> str:
    """Auto-detect the appropriate FluidSynth audio driver for the platform."""
    if sys.platform == "linux":
        return "pulseaudio"
    elif sys.platform == "darwin":
        return "coreaudio"
    elif sys.platform == "win32":
        return "dsound"
    return "alsa"


class AudioEngine:
    """Wraps FluidSynth for fire-and-forget game sound cues."""

    def __init__(self, soundfont_path: str | Path | None = None, gain: float = 0.5) -> None:
        self.fs = fluidsynth.Synth(gain=gain)
        self.fs.start(driver=_detect_audio_driver())
        self._sfid: int | None = None
        # (due_time, pitch, velocity, channel); velocity 0 means note off
        self._pending: list[tuple[float, int, int, int]] = []
        if soundfont_path:
            self.load_soundfont(soundfont_path)

    def load_soundfont(self, path: str | Path) -> None:
        self._sfid = self.fs.sfload(str(path))
        if self._sfid < 0:
            logger.warning("Could not load soundfont %s", path)
            self._sfid = None
            return
        self.fs.program_select(0, self._sfid, 0, 0)

    def play(self, sound: Sound, channel: int = 0) -> None:
        """Queue a cue. Playback problems are logged and never raised."""
        try:
            now = time.time()
            for offset, pitch, velocity, duration in CUES[sound]:
                self._pending.append((now + offset, pitch, velocity, channel))
                self._pending.append((now + offset + duration, pitch, 0, channel))
            self.flush_pending()
        except Exception as exc:
            logger.warning("Could not play %s: %s", sound.value, exc)

    def flush_pending(self) -> None:
        """Call each frame to start and release cue notes that are due."""
        now = time.time()
        remaining: list[tuple[float, int, int, int]] = []
        for due, pitch, velocity, channel in sorted(self._pending):
            if now < due:
                remaining.append((due, pitch, velocity, channel))
                continue
            try:
                if velocity:
                    self.fs.noteon(channel, pitch, velocity)
                else:
                    self.fs.noteoff(channel, pitch)
            except Exception as exc:
                logger.warning("Synth error on pitch %d: %s", pitch, exc)
        self._pending = remaining

    def all_notes_off(self) -> None:
        for _due, pitch, velocity, channel in self._pending:
            if velocity == 0:
                self.fs.noteoff(channel, pitch)
        self._pending.clear()

    def shutdown(self) -> None:
        self.all_notes_off()
        self.fs.delete()
