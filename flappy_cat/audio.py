"""Fire-and-forget sound effects.

The session only ever calls ``play(cue)``. Playback problems never reach the
simulation: a missing mixer, a missing cue or a playback error is logged and
ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import numpy as np
import pygame

from .config import (
    ASSETS_DIR,
    SAMPLE_RATE,
    SOUND_CUES,
    SOUND_FLAP,
    SOUND_GAME_OVER,
    SOUND_HIT,
    SOUND_SCORE,
)

logger = logging.getLogger(__name__)


class SoundPlayer(Protocol):
    def play(self, cue: str) -> None:
        ...


class NullSoundPlayer:
    """Silent player used headless and as the session default."""

    def play(self, cue: str) -> None:
        pass


def _sweep(
    f_start: float, f_end: float, duration: float, rate: int, wave: str = "square"
) -> np.ndarray:
    n = max(1, int(duration * rate))
    freqs = np.linspace(f_start, f_end, n, dtype=np.float64)
    phase = 2.0 * np.pi * np.cumsum(freqs) / rate
    if wave == "square":
        s = np.sign(np.sin(phase))
    elif wave == "triangle":
        s = (2.0 / np.pi) * np.arcsin(np.sin(phase))
    else:
        s = np.sin(phase)
    # Quick attack, exponential-ish decay
    env = np.linspace(1.0, 0.0, n) ** 1.5
    attack = min(n, int(0.004 * rate))
    if attack:
        env[:attack] *= np.linspace(0.0, 1.0, attack)
    return s * env


def _noise(duration: float, rate: int, seed: int) -> np.ndarray:
    n = max(1, int(duration * rate))
    rng = np.random.default_rng(seed)
    s = rng.uniform(-1.0, 1.0, n)
    # Crude lowpass to take the hiss off
    s = np.convolve(s, np.ones(6) / 6.0, mode="same")
    return s * np.linspace(1.0, 0.0, n) ** 2


def synthesize(cue: str, rate: int = SAMPLE_RATE) -> np.ndarray:
    """Return the chiptune waveform for a cue as mono floats in [-1, 1]."""
    if cue == SOUND_FLAP:
        s = _sweep(520.0, 880.0, 0.09, rate)
    elif cue == SOUND_SCORE:
        s = np.concatenate([_sweep(988.0, 988.0, 0.07, rate), _sweep(1319.0, 1319.0, 0.16, rate)])
    elif cue == SOUND_HIT:
        s = 0.6 * _noise(0.14, rate, seed=7) + 0.4 * _sweep(220.0, 90.0, 0.14, rate, wave="sine")
    elif cue == SOUND_GAME_OVER:
        s = np.concatenate(
            [
                _sweep(440.0, 440.0, 0.14, rate, wave="triangle"),
                _sweep(330.0, 330.0, 0.14, rate, wave="triangle"),
                _sweep(262.0, 110.0, 0.42, rate, wave="triangle"),
            ]
        )
    else:
        raise ValueError(f"unknown sound cue: {cue!r}")
    return np.clip(s, -1.0, 1.0)


class PygameSoundPlayer:
    """Plays cues through ``pygame.mixer``.

    Each cue is loaded from ``<sounds_dir>/<cue>.wav`` when that file exists,
    otherwise it is synthesized. Replaying a cue restarts it.
    """

    def __init__(self, sounds_dir: Path | None = None, volume: float = 0.35) -> None:
        self.sounds_dir = sounds_dir if sounds_dir is not None else ASSETS_DIR / "sounds"
        self.volume = volume
        self._sounds: dict[str, pygame.mixer.Sound] = {}
        self._initialized = False

    def init(self) -> bool:
        """Initialize the mixer and prepare every cue. Returns False when audio is unavailable."""
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 512)
                pygame.mixer.init()
            rate, _size, channels = pygame.mixer.get_init()
        except (pygame.error, TypeError) as e:
            logger.warning(f"Audio unavailable, continuing silently: {e}")
            return False

        for cue in SOUND_CUES:
            sound = self._load(cue, rate, channels)
            if sound is not None:
                sound.set_volume(self.volume)
                self._sounds[cue] = sound
        self._initialized = True
        logger.info(f"Audio ready ({len(self._sounds)} cues at {rate} Hz)")
        return True

    def _load(self, cue: str, rate: int, channels: int) -> pygame.mixer.Sound | None:
        path = self.sounds_dir / f"{cue}.wav"
        if path.exists():
            try:
                return pygame.mixer.Sound(str(path))
            except (pygame.error, OSError) as e:
                logger.warning(f"Failed to load {path}, synthesizing instead: {e}")
        pcm = (synthesize(cue, rate) * 32767).astype(np.int16)
        if channels > 1:
            pcm = np.repeat(pcm[:, np.newaxis], channels, axis=1)
        try:
            return pygame.sndarray.make_sound(np.ascontiguousarray(pcm))
        except (pygame.error, ValueError) as e:
            logger.warning(f"Failed to build sound {cue!r}: {e}")
            return None

    def play(self, cue: str) -> None:
        if not self._initialized:
            return
        sound = self._sounds.get(cue)
        if sound is None:
            logger.debug(f"Sound not available: {cue}")
            return
        try:
            sound.stop()
            sound.play()
        except pygame.error as e:
            logger.debug(f"Playback of {cue!r} failed: {e}")
