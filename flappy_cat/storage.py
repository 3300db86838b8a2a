"""Best-score persistence.

A single non-negative integer stored under a fixed key. Reads never fail:
anything missing or malformed reads back as 0. Write failures are logged and
dropped.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Protocol

from .config import BEST_SCORE_FILE, BEST_SCORE_KEY

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    def load_best(self) -> int:
        ...

    def save_best(self, best: int) -> None:
        ...


def _coerce_best(value: object) -> int:
    if isinstance(value, bool):
        raise ValueError(f"not a score: {value!r}")
    if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        raise ValueError(f"not a whole score: {value!r}")
    best = int(value)  # type: ignore[call-overload]
    if best < 0:
        raise ValueError(f"negative score: {best}")
    return best


class JsonScoreStore:
    """Keeps the best score in a small JSON object on disk."""

    def __init__(self, path: Path = BEST_SCORE_FILE, key: str = BEST_SCORE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def load_best(self) -> int:
        if not self.path.exists():
            return 0
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
            best = _coerce_best(data[self.key])
        except (OSError, ValueError, TypeError, KeyError, OverflowError) as e:
            logger.warning(f"Ignoring unreadable best score in {self.path}: {e}")
            return 0
        logger.info(f"Loaded best score {best}")
        return best

    def save_best(self, best: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump({self.key: int(best)}, f)
        except OSError as e:
            logger.error(f"Failed to save best score: {e}")


class MemoryScoreStore:
    """In-process store for headless runs and tests."""

    def __init__(self, best: int = 0) -> None:
        self.best = best
        self.saves: list[int] = []

    def load_best(self) -> int:
        return self.best

    def save_best(self, best: int) -> None:
        self.best = best
        self.saves.append(best)
