"""
Single place to:
- Read runtime settings from env (a local .env is loaded if present)
- Hold the static difficulty tiers: slots, colors and guesses per tier

Why: the store and routes read tiers from here, so a new tier is one entry.
"""

import os
from dataclasses import dataclass
from typing import Dict, List, Tuple

from dotenv import load_dotenv

from .types import ColorId, Difficulty

# 1) Load env vars from .env if present
load_dotenv()

# 2) Runtime settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
# Single-player level mode ends after this many solved codes
MAX_LEVELS = int(os.getenv("MAX_LEVELS", "100"))
CORS_ORIGINS: List[str] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

# 3) Every color the game knows, in palette order
COLORS: Tuple[ColorId, ...] = (
    "red", "green", "blue", "yellow", "purple", "orange", "cyan", "magenta",
)


@dataclass(frozen=True)
class GameConfig:
    slots: int
    alphabet: Tuple[ColorId, ...]
    max_guesses: int


# 4) Difficulty tiers
DIFFICULTY_CONFIG: Dict[Difficulty, GameConfig] = {
    "EASY": GameConfig(
        slots=3,
        alphabet=("red", "green", "blue", "yellow"),
        max_guesses=10,
    ),
    "MEDIUM": GameConfig(
        slots=4,
        alphabet=("red", "green", "blue", "yellow", "purple"),
        max_guesses=10,
    ),
    "HARD": GameConfig(
        slots=4,
        alphabet=("red", "green", "blue", "yellow", "purple", "orange"),
        max_guesses=10,
    ),
    "VERY HARD": GameConfig(
        slots=4,
        alphabet=("red", "green", "blue", "yellow", "purple", "orange", "cyan"),
        max_guesses=10,
    ),
}

DEFAULT_DIFFICULTY: Difficulty = "MEDIUM"
