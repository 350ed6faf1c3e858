"""
Labels for clarity.
"""

from typing import List, Literal

ColorId = Literal["red", "green", "blue", "yellow", "purple", "orange", "cyan", "magenta"]
Code = List[ColorId]  # secret or guess, one color per slot
GameStatus = Literal["PLAYING", "WON", "LOST", "MODE_COMPLETED"]
Difficulty = Literal["EASY", "MEDIUM", "HARD", "VERY HARD"]
GameMode = Literal["SINGLE", "MULTI"]
PlayerId = Literal[1, 2]
