"""Synthesized sound cues for game events (no external sound files)."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import numpy as np
import pygame

from falling_block_rl.game import GameListener

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
WAVEFORMS = ("sine", "square", "sawtooth", "triangle")


def synthesize_tone(
    frequency: float,
    duration: float,
    waveform: str = "sine",
    volume: float = 0.3,
    sample_rate: int = SAMPLE_RATE,
) -> np.ndarray:
    """Mono int16 samples of a tone with an exponential decay to ~0.001."""
    if waveform not in WAVEFORMS:
        raise ValueError(f"unknown waveform {waveform!r}, expected one of {WAVEFORMS}")
    n = int(sample_rate * duration)
    t = np.arange(n, dtype=np.float64) / sample_rate
    phase = (frequency * t) % 1.0
    if waveform == "sine":
        wave = np.sin(2 * np.pi * phase)
    elif waveform == "square":
        wave = np.where(phase < 0.5, 1.0, -1.0)
    elif waveform == "sawtooth":
        wave = 2.0 * phase - 1.0
    else:
        wave = 1.0 - 4.0 * np.abs(phase - 0.5)
    envelope = np.power(0.001, t / duration) if duration > 0 else np.ones(0)
    return (wave * envelope * volume * 32767).astype(np.int16)


def mix(*parts: tuple[np.ndarray, float], sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Overlay (samples, start_seconds) parts into one clip."""
    length = max((int(start * sample_rate) + len(samples) for samples, start in parts), default=0)
    out = np.zeros(length, dtype=np.int32)
    for samples, start in parts:
        offset = int(start * sample_rate)
        out[offset : offset + len(samples)] += samples
    return np.clip(out, -32768, 32767).astype(np.int16)


def build_cues(sample_rate: int = SAMPLE_RATE) -> Dict[str, np.ndarray]:
    return {
        "drop": synthesize_tone(120, 0.05, "sawtooth", sample_rate=sample_rate),
        "clear": mix(
            (synthesize_tone(440, 0.1, "triangle", sample_rate=sample_rate), 0.0),
            (synthesize_tone(523, 0.1, "triangle", sample_rate=sample_rate), 0.05),
            sample_rate=sample_rate,
        ),
        "game_over": synthesize_tone(80, 0.5, "square", sample_rate=sample_rate),
    }


class ToneNotifier(GameListener):
    """Plays a cue for lock, line clear and game over events.

    If no audio device can be opened the notifier stays silent.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        if enabled:
            self._load()

    def _load(self) -> None:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            freq, _, channels = pygame.mixer.get_init()
        except pygame.error as exc:
            logger.warning("Audio disabled: %s", exc)
            return
        for name, samples in build_cues(freq).items():
            if channels > 1:
                samples = np.repeat(samples[:, None], channels, axis=1)
            self.sounds[name] = pygame.sndarray.make_sound(np.ascontiguousarray(samples))

    def _play(self, name: str) -> None:
        sound: Optional[pygame.mixer.Sound] = self.sounds.get(name)
        if sound is not None:
            sound.play()

    def on_lock(self) -> None:
        self._play("drop")

    def on_hard_drop(self, rows: int) -> None:
        self._play("drop")

    def on_lines_cleared(self, count: int) -> None:
        self._play("clear")

    def on_game_over(self, score: int, high_score: int) -> None:
        self._play("game_over")
