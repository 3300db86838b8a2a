import os

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame

from flappy_cat.utils import (
    clamp,
    gradient_ramp,
    gradient_text,
    scale_color,
    vertical_gradient_surface,
)


def setup_module(module: object) -> None:
    pygame.init()


def teardown_module(module: object) -> None:
    pygame.quit()


def test_clamp_basic() -> None:
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10
    assert clamp(0.3, -0.5, 0.5) == 0.3


def test_scale_color_clamps_channels() -> None:
    assert scale_color((100, 200, 50), 0.5) == (50, 100, 25)
    assert scale_color((100, 200, 50), 2.0) == (200, 255, 100)


def test_gradient_ramp_endpoints() -> None:
    ramp = gradient_ramp(11, ((0, 0, 0), (200, 100, 50)))
    assert ramp.shape == (11, 3)
    assert ramp.dtype == np.uint8
    assert tuple(ramp[0]) == (0, 0, 0)
    assert tuple(ramp[-1]) == (200, 100, 50)
    assert tuple(ramp[5]) == (100, 50, 25)


def test_gradient_ramp_single_stop_and_empty() -> None:
    assert gradient_ramp(0, ((1, 2, 3),)).shape == (0, 3)
    single = gradient_ramp(4, ((1, 2, 3),))
    assert single.shape == (4, 3)
    assert all(tuple(c) == (1, 2, 3) for c in single)


def test_vertical_gradient_surface_colors() -> None:
    surf = vertical_gradient_surface(8, 20, (10, 20, 30), (110, 120, 130))
    assert surf.get_size() == (8, 20)
    assert tuple(surf.get_at((0, 0)))[:3] == (10, 20, 30)
    assert tuple(surf.get_at((7, 19)))[:3] == (110, 120, 130)
    # Rows are uniform
    assert surf.get_at((0, 10)) == surf.get_at((7, 10))


def test_gradient_text_outline_padding() -> None:
    font = pygame.font.SysFont(None, 30)
    plain_w, plain_h = font.size("12")
    label = gradient_text(font, "12", ((255, 0, 0), (0, 0, 255)), outline=(0, 0, 0), outline_width=2)
    assert label.get_size() == (plain_w + 4, plain_h + 4)
    assert label.get_flags() & pygame.SRCALPHA
    assert pygame.surfarray.array_alpha(label).max() > 0

    bare = gradient_text(font, "12", ((255, 0, 0), (0, 0, 255)))
    assert bare.get_size() == (plain_w, plain_h)
