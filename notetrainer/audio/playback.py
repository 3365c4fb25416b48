from __future__ import annotations

"""FluidSynth-based sample playback implementation."""

import sys
import threading
import time
from typing import Dict

from ..theory.notes import note_at
from .synthesis import SamplePlayer, SilentPlayer


class FluidSynthPlayer(SamplePlayer):
    """Concrete SamplePlayer using pyfluidsynth.

    Each sample is rendered on a daemon thread so callers never wait for the
    note to finish sounding.
    """

    def __init__(
        self,
        soundfont_path: str,
        sample_rate: int = 44100,
        gain: float = 0.5,
        *,
        note_ms: int = 600,
        octave: int = 4,
        velocity: int = 100,
    ) -> None:
        try:
            import fluidsynth  # type: ignore
        except Exception as e:  # pragma: no cover - runtime dependency
            raise RuntimeError("pyfluidsynth is not installed") from e

        self.note_ms = int(note_ms)
        self.octave = int(octave)
        self.velocity = max(0, min(127, int(velocity)))
        self._lock = threading.Lock()
        self._sounding: int | None = None

        self._fs = fluidsynth.Synth(samplerate=sample_rate, gain=gain)
        # Prefer CoreAudio on macOS to avoid SDL warnings
        driver = None
        if sys.platform == "darwin":
            driver = "coreaudio"
        try:
            if driver:
                self._fs.start(driver=driver)
            else:
                self._fs.start()
        except Exception:
            # Fallback to default driver if preferred one fails
            self._fs.start()
        sfid = self._fs.sfload(soundfont_path)
        self._fs.program_select(0, sfid, 0, 0)  # channel 0 = Acoustic Grand

    def play_sample(self, note_index: int) -> None:
        midi = note_at(note_index).midi(self.octave)
        t = threading.Thread(target=self._render, args=(midi,), daemon=True)
        t.start()

    def _render(self, midi: int) -> None:
        with self._lock:
            # a new sample cuts off the previous one
            if self._sounding is not None:
                self._fs.noteoff(0, self._sounding)
            self._fs.noteon(0, midi, self.velocity)
            self._sounding = midi
        time.sleep(self.note_ms / 1000.0)
        with self._lock:
            if self._sounding == midi:
                self._fs.noteoff(0, midi)
                self._sounding = None

    def close(self) -> None:
        try:
            self._fs.delete()
        except Exception:
            pass


def make_player_from_config(cfg: Dict) -> SamplePlayer:
    """Factory for SamplePlayer from config dict."""
    audio = cfg.get("audio", {})
    backend = audio.get("backend", "none")
    if backend == "none":
        return SilentPlayer()
    if backend == "fluidsynth":
        return FluidSynthPlayer(
            soundfont_path=audio.get("soundfont_path"),
            sample_rate=int(audio.get("sample_rate", 44100)),
            gain=float(audio.get("gain", 0.5)),
            note_ms=int(audio.get("note_ms", 600)),
            octave=int(audio.get("octave", 4)),
        )
    raise ValueError(f"Unsupported backend: {backend}")
