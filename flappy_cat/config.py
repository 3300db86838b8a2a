from __future__ import annotations

"""Game configuration constants for Flappy Cat."""

import os
from pathlib import Path

# Game configuration
WINDOW_WIDTH = 360
WINDOW_HEIGHT = 640
FPS = 60
GROUND_HEIGHT = 90

# Physics (per tick, the simulation runs at a fixed cadence)
GRAVITY = 0.1  # px/tick^2
FLAP_IMPULSE = -4.0  # px/tick
MAX_ROTATION = 0.5  # radians, symmetric
ROTATION_DIVISOR = 10.0

# Cat
CAT_X = 80
CAT_START_Y = 240
CAT_WIDTH = 100
CAT_HEIGHT = 52

# Pipes
PIPE_SPACING = 180  # min px between consecutive spawns
PIPE_SPEED = 2.1  # px/tick
PIPE_WIDTH = 60
PIPE_HEIGHT = 360  # each segment, above and below the gap
PIPE_GAP = 180
PIPE_OFFSET_RANGE = 200  # vertical offset is drawn from (-range, 0]

# Sound cues
SOUND_FLAP = "flap"
SOUND_SCORE = "score"
SOUND_HIT = "hit"
SOUND_GAME_OVER = "game_over"
SOUND_CUES = (SOUND_FLAP, SOUND_SCORE, SOUND_HIT, SOUND_GAME_OVER)
SAMPLE_RATE = 44100
ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"

# Persistence
BEST_SCORE_KEY = "best"
DATA_DIR = Path(os.environ.get("FLAPPY_CAT_HOME", Path.home() / ".flappy_cat"))
BEST_SCORE_FILE = DATA_DIR / "best.json"

# Palette (bright arcade daylight)
COL_SKY_TOP = (78, 192, 202)
COL_SKY_BOTTOM = (196, 236, 224)
COL_GROUND = (222, 216, 149)
COL_GROUND_STRIPE = (115, 191, 46)
COL_GROUND_EDGE = (84, 56, 71)
COL_PIPE = (115, 191, 46)
COL_PIPE_SHADE = (84, 128, 36)
COL_PIPE_RIM = (40, 60, 20)

CAT_FUR = (247, 160, 74)
CAT_FUR_DARK = (196, 108, 40)
CAT_BELLY = (255, 226, 186)
CAT_INNER_EAR = (240, 128, 150)
EYE_COLOR = (250, 250, 250)
PUPIL_COLOR = (28, 28, 32)

TEXT_OUTLINE = (0, 0, 0)
# Left-to-right neon gradient for HUD text
NEON_STOPS = (
    (255, 0, 76),
    (255, 153, 0),
    (255, 238, 0),
    (0, 255, 136),
    (0, 170, 255),
    (180, 0, 255),
)
