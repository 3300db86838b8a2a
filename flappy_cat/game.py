"""Game loop, input mapping, and rendering composition for Flappy Cat."""

from __future__ import annotations

import logging
import os
import random
import sys

import pygame

from .audio import PygameSoundPlayer, SoundPlayer
from .config import (
    COL_GROUND,
    COL_GROUND_EDGE,
    COL_GROUND_STRIPE,
    COL_SKY_BOTTOM,
    COL_SKY_TOP,
    FPS,
    GROUND_HEIGHT,
    NEON_STOPS,
    TEXT_OUTLINE,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from .session import GameSession, GameState
from .storage import JsonScoreStore, ScoreStore
from .utils import gradient_text, scale_color, vertical_gradient_surface

logger = logging.getLogger(__name__)

# Overlay labels plus a few score labels; cleared wholesale when full
TEXT_CACHE_SIZE = 16


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


class Game:
    """Top-level controller: drives the session each frame, maps input, and draws."""

    def __init__(
        self,
        sounds: SoundPlayer | None = None,
        store: ScoreStore | None = None,
        rng: random.Random | None = None,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.DOUBLEBUF)
        pygame.display.set_caption("Flappy Cat")
        self.clock = pygame.time.Clock()
        self.font_big = pygame.font.SysFont(None, 56)
        self.font_mid = pygame.font.SysFont(None, 44)
        self.font_small = pygame.font.SysFont(None, 34)
        self.font_tiny = pygame.font.SysFont(None, 26)
        self._text_cache: dict[tuple[str, int], pygame.Surface] = {}

        if sounds is None:
            player = PygameSoundPlayer()
            player.init()
            sounds = player
        if store is None:
            store = JsonScoreStore()
        self.session = GameSession(sounds=sounds, store=store, rng=rng)

        # Precompute static layers
        self.bg_gradient = vertical_gradient_surface(WINDOW_WIDTH, WINDOW_HEIGHT, COL_SKY_TOP, COL_SKY_BOTTOM)
        self.ground = self._generate_ground_surface()

    def _generate_ground_surface(self) -> pygame.Surface:
        surf = pygame.Surface((WINDOW_WIDTH, GROUND_HEIGHT))
        surf.fill(COL_GROUND)
        # Grass strip with slanted stripes, 24px step so the tile wraps cleanly
        strip_h = 14
        pygame.draw.rect(surf, COL_GROUND_STRIPE, (0, 0, WINDOW_WIDTH, strip_h))
        dark = scale_color(COL_GROUND_STRIPE, 0.8)
        for x in range(-strip_h, WINDOW_WIDTH + strip_h, 24):
            pygame.draw.polygon(surf, dark, [(x, 0), (x + 12, 0), (x + 12 + strip_h, strip_h), (x + strip_h, strip_h)])
        pygame.draw.line(surf, COL_GROUND_EDGE, (0, 0), (WINDOW_WIDTH, 0), 3)
        pygame.draw.line(surf, scale_color(COL_GROUND, 0.85), (0, strip_h), (WINDOW_WIDTH, strip_h), 3)
        return surf

    def handle_input(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_SPACE:
                self.session.activate()
            elif event.key == pygame.K_ESCAPE:
                pygame.event.post(pygame.event.Event(pygame.QUIT))
        elif event.type == pygame.MOUSEBUTTONDOWN:
            # Touches also arrive as FINGERDOWN; skip their emulated mouse clicks
            if event.button == 1 and not getattr(event, "touch", False):
                self.session.activate()
        elif event.type == pygame.FINGERDOWN:
            self.session.activate()

    def update(self) -> None:
        self.session.tick()

    def _text(self, text: str, font: pygame.font.Font) -> pygame.Surface:
        key = (text, font.get_height())
        surf = self._text_cache.get(key)
        if surf is None:
            if len(self._text_cache) >= TEXT_CACHE_SIZE:
                self._text_cache.clear()
            surf = gradient_text(font, text, NEON_STOPS, outline=TEXT_OUTLINE)
            self._text_cache[key] = surf
        return surf

    def _blit_centered(self, surf: pygame.Surface, text: str, font: pygame.font.Font, y: int) -> None:
        label = self._text(text, font)
        surf.blit(label, label.get_rect(center=(WINDOW_WIDTH // 2, y)))

    def draw_background(self, surf: pygame.Surface) -> None:
        surf.blit(self.bg_gradient, (0, 0))

    def draw_ground(self, surf: pygame.Surface) -> None:
        gx = int(self.session.ground_x)
        top = WINDOW_HEIGHT - GROUND_HEIGHT
        surf.blit(self.ground, (gx, top))
        surf.blit(self.ground, (gx + WINDOW_WIDTH, top))

    def draw(self) -> None:
        self.draw_background(self.screen)
        self.session.pipes.draw(self.screen)
        self.session.cat.draw(self.screen)
        self.draw_ground(self.screen)
        self._draw_ui(self.screen)
        pygame.display.flip()

    def _draw_ui(self, surf: pygame.Surface) -> None:
        session = self.session
        self._blit_centered(surf, str(session.score), self.font_big, 44)

        if session.state is GameState.START:
            self._blit_centered(surf, "FLAPPY CAT", self.font_big, 200)
            self._blit_centered(surf, "TAP TO START", self.font_small, 340)
            if session.best:
                self._blit_centered(surf, f"BEST {session.best}", self.font_tiny, 380)
        elif session.state is GameState.OVER:
            self._blit_centered(surf, "GAME OVER", self.font_mid, 260)
            self._blit_centered(surf, f"BEST {session.best}", self.font_small, 300)
            self._blit_centered(surf, "TAP TO RESTART", self.font_tiny, 340)

    def run(self) -> None:
        logger.info("Flappy Cat running")
        while True:
            self.clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    pygame.quit()
                    sys.exit(0)
                self.handle_input(event)

            # Simulate before drawing so a crash shows on the same frame
            self.update()
            self.draw()


def main() -> None:
    setup_logging(debug=bool(os.environ.get("FLAPPY_CAT_DEBUG")))
    Game().run()
