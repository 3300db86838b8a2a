"""Game entities and their rendering.

Contains the player-controlled cat, a single pipe obstacle and the scrolling
field of pipes that owns spawning, collision and scoring.
"""

from __future__ import annotations

import math
import random
from collections import deque
from typing import Callable, Iterator

import pygame

from .audio import NullSoundPlayer, SoundPlayer
from .config import (
    CAT_BELLY,
    CAT_FUR,
    CAT_FUR_DARK,
    CAT_HEIGHT,
    CAT_INNER_EAR,
    CAT_WIDTH,
    COL_PIPE,
    COL_PIPE_RIM,
    COL_PIPE_SHADE,
    EYE_COLOR,
    FLAP_IMPULSE,
    GRAVITY,
    MAX_ROTATION,
    PIPE_GAP,
    PIPE_HEIGHT,
    PIPE_OFFSET_RANGE,
    PIPE_SPACING,
    PIPE_SPEED,
    PIPE_WIDTH,
    PUPIL_COLOR,
    ROTATION_DIVISOR,
    SOUND_FLAP,
    WINDOW_WIDTH,
)
from .utils import clamp, scale_color


class Cat:
    """The falling, flapping player body. Position is its top-left corner."""

    def __init__(self, x: int, y: int, sounds: SoundPlayer | None = None) -> None:
        self.x = float(x)
        self.y = float(y)
        self.w = CAT_WIDTH
        self.h = CAT_HEIGHT
        self.gravity = GRAVITY
        self.jump = FLAP_IMPULSE
        self.velocity = 0.0
        self.rotation = 0.0
        self.start_y = float(y)
        self.sounds = sounds if sounds is not None else NullSoundPlayer()
        self._sprite: pygame.Surface | None = None

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.w / 2, self.y + self.h / 2

    def reset(self) -> None:
        self.y = self.start_y
        self.velocity = 0.0
        self.rotation = 0.0

    def flap(self) -> None:
        self.velocity = self.jump
        self.sounds.play(SOUND_FLAP)

    def update(self) -> None:
        # Unbounded fall speed is part of the feel
        self.velocity += self.gravity
        self.y += self.velocity
        self.rotation = clamp(self.velocity / ROTATION_DIVISOR, -MAX_ROTATION, MAX_ROTATION)

    def _build_sprite(self) -> pygame.Surface:
        # Procedural side-view cat facing right, drawn once into its bounding box
        w, h = self.w, self.h
        s = pygame.Surface((w, h), pygame.SRCALPHA)

        # Tail
        tail = [(int(w * 0.06 + i * 2), int(h * 0.45 - math.sin(i * 0.5) * 8)) for i in range(10)]
        pygame.draw.lines(s, CAT_FUR_DARK, False, tail, 6)

        # Body and belly
        body = pygame.Rect(int(w * 0.12), int(h * 0.30), int(w * 0.58), int(h * 0.62))
        pygame.draw.ellipse(s, CAT_FUR, body)
        belly = body.inflate(-int(body.w * 0.35), -int(body.h * 0.45)).move(0, int(body.h * 0.16))
        pygame.draw.ellipse(s, CAT_BELLY, belly)
        pygame.draw.ellipse(s, CAT_FUR_DARK, body, 2)

        # Stripes
        for i in range(3):
            sx = body.x + int(body.w * (0.28 + i * 0.16))
            pygame.draw.line(s, CAT_FUR_DARK, (sx, body.y + 2), (sx - 3, body.y + int(body.h * 0.32)), 3)

        # Head
        hr = int(h * 0.30)
        hx, hy = int(w * 0.74), int(h * 0.40)
        for ex in (-1, 1):
            ear = [
                (hx + ex * int(hr * 0.85), hy - int(hr * 0.35)),
                (hx + ex * int(hr * 0.55), hy - int(hr * 1.35)),
                (hx + ex * int(hr * 0.05), hy - int(hr * 0.75)),
            ]
            pygame.draw.polygon(s, CAT_FUR, ear)
            inner = [((x + hx) // 2 + (x - hx) // 4, (y + hy) // 2 + (y - hy) // 4) for x, y in ear]
            pygame.draw.polygon(s, CAT_INNER_EAR, inner)
        pygame.draw.circle(s, CAT_FUR, (hx, hy), hr)
        pygame.draw.circle(s, CAT_FUR_DARK, (hx, hy), hr, 2)

        # Face
        eye = (hx + int(hr * 0.35), hy - int(hr * 0.15))
        pygame.draw.circle(s, EYE_COLOR, eye, max(2, hr // 3))
        pygame.draw.circle(s, PUPIL_COLOR, (eye[0] + 1, eye[1]), max(1, hr // 6))
        nose = (hx + int(hr * 0.85), hy + int(hr * 0.15))
        pygame.draw.circle(s, CAT_INNER_EAR, nose, 2)
        for dy in (-2, 2):
            pygame.draw.line(s, PUPIL_COLOR, nose, (min(w - 1, nose[0] + 10), nose[1] + dy * 2), 1)

        # Paws
        for px in (0.24, 0.55):
            pygame.draw.ellipse(s, CAT_FUR_DARK, pygame.Rect(int(w * px), int(h * 0.84), 10, 7))
        return s

    def draw(self, surf: pygame.Surface) -> None:
        if self._sprite is None:
            self._sprite = self._build_sprite()
        # Screen y grows downward, so a positive rotation tilts the nose down
        rotated = pygame.transform.rotate(self._sprite, -math.degrees(self.rotation))
        cx, cy = self.center
        surf.blit(rotated, rotated.get_rect(center=(int(cx), int(cy))))


class Pipe:
    """One obstacle: a top segment, a gap, and a bottom segment."""

    def __init__(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.scored = False

    @property
    def right(self) -> float:
        return self.x + PIPE_WIDTH

    @property
    def gap_top(self) -> float:
        return self.y + PIPE_HEIGHT

    @property
    def gap_bottom(self) -> float:
        return self.y + PIPE_HEIGHT + PIPE_GAP

    @property
    def top_rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), PIPE_WIDTH, PIPE_HEIGHT)

    @property
    def bottom_rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.gap_bottom), PIPE_WIDTH, PIPE_HEIGHT)

    def hits(self, cat: Cat) -> bool:
        """Box overlap test against the cat, kept as one combined condition."""
        return (
            cat.x < self.x + PIPE_WIDTH
            and cat.x + cat.w > self.x
            and (cat.y < self.y + PIPE_HEIGHT or cat.y + cat.h > self.y + PIPE_HEIGHT + PIPE_GAP)
        )

    def draw(self, surf: pygame.Surface) -> None:
        for rect, lip_y in ((self.top_rect, self.top_rect.bottom - 18), (self.bottom_rect, self.bottom_rect.top)):
            pygame.draw.rect(surf, COL_PIPE, rect)
            # Left-side highlight and right-side shade
            pygame.draw.rect(surf, scale_color(COL_PIPE, 1.2), (rect.x + 6, rect.y, 6, rect.h))
            pygame.draw.rect(surf, COL_PIPE_SHADE, (rect.right - 12, rect.y, 12, rect.h))
            pygame.draw.rect(surf, COL_PIPE_RIM, rect, 2)
            lip = pygame.Rect(rect.x - 4, lip_y, rect.w + 8, 18)
            pygame.draw.rect(surf, COL_PIPE, lip)
            pygame.draw.rect(surf, COL_PIPE_RIM, lip, 2)


class PipeField:
    """Ordered queue of pipes, oldest (leftmost) first."""

    def __init__(
        self,
        rng: random.Random | None = None,
        width: int = WINDOW_WIDTH,
        spacing: float = PIPE_SPACING,
        speed: float = PIPE_SPEED,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.width = width
        self.spacing = spacing
        self.speed = speed
        self._pipes: deque[Pipe] = deque()

    def __len__(self) -> int:
        return len(self._pipes)

    def __iter__(self) -> Iterator[Pipe]:
        return iter(self._pipes)

    def __getitem__(self, index: int) -> Pipe:
        return self._pipes[index]

    def reset(self) -> None:
        self._pipes.clear()

    def spawn(self) -> Pipe:
        pipe = Pipe(self.width, -PIPE_OFFSET_RANGE * self.rng.random())
        self._pipes.append(pipe)
        return pipe

    def update(self, cat: Cat, on_hit: Callable[[], None], on_pass: Callable[[], None]) -> None:
        """Advance one tick.

        Moves every pipe, reports hits and passes through the callbacks in
        queue order (collision before scoring for each pipe), drops at most one
        pipe that has left the screen and spawns a new one once the last pipe
        is ``spacing`` away from the right edge.
        """
        for pipe in self._pipes:
            pipe.x -= self.speed
            if pipe.hits(cat):
                on_hit()
            if not pipe.scored and pipe.right < cat.x:
                pipe.scored = True
                on_pass()

        if self._pipes and self._pipes[0].x < -PIPE_WIDTH:
            self._pipes.popleft()

        if not self._pipes or self.width - self._pipes[-1].x >= self.spacing:
            self.spawn()

    def draw(self, surf: pygame.Surface) -> None:
        for pipe in self._pipes:
            pipe.draw(surf)
