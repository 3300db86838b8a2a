"""Math, color and surface helpers used across the game."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pygame


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a numeric value into the inclusive range [lo, hi]."""
    return max(lo, min(hi, value))


def scale_color(color: tuple[int, int, int], factor: float) -> tuple[int, int, int]:
    """Scale an RGB color by factor, clamped to [0,255]."""
    r, g, b = color
    return (
        int(clamp(r * factor, 0, 255)),
        int(clamp(g * factor, 0, 255)),
        int(clamp(b * factor, 0, 255)),
    )


def gradient_ramp(n: int, stops: Sequence[tuple[int, int, int]]) -> np.ndarray:
    """Interpolate evenly spaced color stops into an (n, 3) uint8 ramp."""
    stops_arr = np.asarray(stops, dtype=np.float32)
    if n <= 0:
        return np.zeros((0, 3), dtype=np.uint8)
    if len(stops_arr) == 1:
        return np.repeat(stops_arr.astype(np.uint8), n, axis=0)
    positions = np.linspace(0.0, 1.0, len(stops_arr), dtype=np.float32)
    t = np.linspace(0.0, 1.0, n, dtype=np.float32)
    channels = [np.interp(t, positions, stops_arr[:, c]) for c in range(3)]
    return np.clip(np.stack(channels, axis=-1), 0, 255).astype(np.uint8)


def vertical_gradient_surface(
    w: int, h: int, top: tuple[int, int, int], bottom: tuple[int, int, int]
) -> pygame.Surface:
    """Precompute a top-to-bottom gradient as a surface for fast blitting."""
    ramp = gradient_ramp(h, (top, bottom))
    # surfarray is indexed [x, y, channel]
    pixels = np.broadcast_to(ramp[np.newaxis, :, :], (w, h, 3))
    return pygame.surfarray.make_surface(np.ascontiguousarray(pixels))


def gradient_text(
    font: pygame.font.Font,
    text: str,
    stops: Sequence[tuple[int, int, int]],
    outline: tuple[int, int, int] | None = None,
    outline_width: int = 2,
) -> pygame.Surface:
    """Render text filled with a left-to-right gradient and an optional outline.

    Args:
        font: Font used for both fill and outline.
        text: The string to draw.
        stops: Evenly spaced gradient colors.
        outline: Outline color, or None for no outline.
        outline_width: Outline thickness in pixels.

    Returns:
        A per-pixel alpha surface sized to fit the outline.
    """
    mask = font.render(text, True, (255, 255, 255))
    w, h = mask.get_size()
    ramp = gradient_ramp(w, stops)
    fill = pygame.Surface((w, h), pygame.SRCALPHA)
    rgb = pygame.surfarray.pixels3d(fill)
    rgb[:, :, :] = ramp[:, np.newaxis, :]
    del rgb
    alpha = pygame.surfarray.pixels_alpha(fill)
    alpha[:, :] = pygame.surfarray.array_alpha(mask)
    del alpha

    pad = outline_width if outline is not None else 0
    out = pygame.Surface((w + pad * 2, h + pad * 2), pygame.SRCALPHA)
    if outline is not None:
        edge = font.render(text, True, outline)
        for dx in (-pad, 0, pad):
            for dy in (-pad, 0, pad):
                if dx or dy:
                    out.blit(edge, (pad + dx, pad + dy))
    out.blit(fill, (pad, pad))
    return out
