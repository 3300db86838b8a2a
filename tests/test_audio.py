import os

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from flappy_cat.audio import NullSoundPlayer, PygameSoundPlayer, synthesize
from flappy_cat.config import SOUND_CUES


def teardown_module(module: object) -> None:
    pygame.mixer.quit()


@pytest.mark.parametrize("cue", SOUND_CUES)
def test_synthesize_cues(cue: str) -> None:
    samples = synthesize(cue, rate=8000)
    assert samples.ndim == 1
    assert len(samples) > 0
    assert np.all(np.abs(samples) <= 1.0)
    assert np.abs(samples).max() > 0.1


def test_synthesize_unknown_cue() -> None:
    with pytest.raises(ValueError):
        synthesize("meow")


def test_null_player_is_silent() -> None:
    NullSoundPlayer().play("flap")


def test_player_before_init_ignores_play() -> None:
    player = PygameSoundPlayer()
    player.play("flap")
    player.play("no-such-cue")


def test_player_prepares_every_cue(tmp_path) -> None:
    # A broken wav on disk falls back to the synthesized blip
    (tmp_path / "flap.wav").write_bytes(b"definitely not audio")
    player = PygameSoundPlayer(sounds_dir=tmp_path)
    if not player.init():
        pytest.skip("no audio device available")
    assert set(player._sounds) == set(SOUND_CUES)
    for cue in SOUND_CUES:
        player.play(cue)
        player.play(cue)
    player.play("no-such-cue")
