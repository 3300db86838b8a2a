"""Game lifecycle and per-tick simulation for Flappy Cat."""

from __future__ import annotations

import logging
import math
import random
from enum import Enum

from .audio import NullSoundPlayer, SoundPlayer
from .config import (
    CAT_START_Y,
    CAT_X,
    GROUND_HEIGHT,
    SOUND_GAME_OVER,
    SOUND_HIT,
    SOUND_SCORE,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from .entities import Cat, PipeField
from .storage import MemoryScoreStore, ScoreStore

logger = logging.getLogger(__name__)


class GameState(Enum):
    START = "start"
    PLAY = "play"
    OVER = "over"


class GameSession:
    """Owns the cat, the pipes, the score and the START/PLAY/OVER state.

    Input reaches the session only through :meth:`activate`; the loop driver
    calls :meth:`tick` once per frame. Sound and persistence are injected so
    the session runs the same with or without a display.
    """

    def __init__(
        self,
        sounds: SoundPlayer | None = None,
        store: ScoreStore | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.sounds = sounds if sounds is not None else NullSoundPlayer()
        self.store = store if store is not None else MemoryScoreStore()
        self.rng = rng if rng is not None else random.Random()
        self.cat = Cat(CAT_X, CAT_START_Y, sounds=self.sounds)
        self.pipes = PipeField(rng=self.rng)
        self.state = GameState.START
        self.score = 0
        self.best = self.store.load_best()
        self.ground_x = 0.0

    def activate(self) -> None:
        """Handle the single "activate" input (key, click or touch)."""
        if self.state is GameState.START:
            self.start()
        elif self.state is GameState.PLAY:
            self.cat.flap()
        else:
            self.state = GameState.START

    def start(self) -> None:
        self.state = GameState.PLAY
        self.score = 0
        self.cat.reset()
        self.pipes.reset()
        self.pipes.spawn()
        logger.info("Round started")

    def end(self) -> None:
        """Finish the round. Calls outside PLAY are ignored."""
        if self.state is not GameState.PLAY:
            return
        self.state = GameState.OVER
        self.sounds.play(SOUND_HIT)
        self.sounds.play(SOUND_GAME_OVER)
        self.best = max(self.score, self.best)
        self.store.save_best(self.best)
        logger.info(f"Round over: score={self.score} best={self.best}")

    def add_point(self) -> None:
        if self.state is not GameState.PLAY:
            return
        self.score += 1
        self.sounds.play(SOUND_SCORE)

    def ground_contact(self) -> bool:
        return self.cat.bottom >= WINDOW_HEIGHT - GROUND_HEIGHT or self.cat.top < 0

    def update(self) -> None:
        if self.state is not GameState.PLAY:
            return

        self.cat.update()
        self.pipes.update(self.cat, on_hit=self.end, on_pass=self.add_point)
        # Stays in (-WINDOW_WIDTH, 0], like the tiled ground it drives
        self.ground_x = math.fmod(self.ground_x - self.pipes.speed, WINDOW_WIDTH)

        if self.ground_contact():
            self.end()

    tick = update
