"""
Explicit validation & Pydantic models
- Color names are checked here against the full palette.
- Whether a color belongs to the round's tier, and the guess length,
  depend on the round, so the store checks those.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from .types import ColorId, Difficulty, GameMode, GameStatus, PlayerId

# 1. One difficulty tier
class DifficultyOut(BaseModel):
    name: Difficulty = Field(..., description="Tier name")
    slots: int = Field(..., description="Length of the secret code")
    alphabet: List[ColorId] = Field(..., description="Colors available in this tier")
    max_guesses: int = Field(..., description="Guesses each player gets")

# 2. Represents response when a new round is started
class NewGameResponse(BaseModel):
    game_id: str = Field(..., description="Unique ID for the round; secret is never returned")
    difficulty: Difficulty = Field(..., description="Chosen difficulty")
    mode: GameMode = Field(..., description="1 player or 2 players (hot seat)")
    status: GameStatus = Field(..., description="Current state of the round")
    slots: int = Field(..., description="Length of the secret code")
    alphabet: List[ColorId] = Field(..., description="Colors available in this round")
    max_guesses: int = Field(..., description="Guesses each player gets")
    level: int = Field(..., description="Current level (level mode only counts up)")

# 3. Adds one color to the active row
class PickRequest(BaseModel):
    color: ColorId = Field(..., description="Color to add to the active player's row")

# 4. Submits a whole guess at once
class GuessRequest(BaseModel):
    guess: List[ColorId] = Field(
        ..., description="Distinct colors, one per slot. Length depends on difficulty."
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                { "guess": ["red", "green", "blue", "yellow"] },  # medium (default)
                { "guess": ["red", "green", "blue"] },            # easy
            ]
        }
    }

# 5. Feedback for a single guess
class FeedbackOut(BaseModel):
    exact: int = Field(..., description="Right color, right position")
    color_only: int = Field(..., description="Right color, wrong position")

class HistoryEntryOut(BaseModel):
    guess: List[ColorId] = Field(..., description="The submitted row")
    feedback: FeedbackOut
    message: str = Field(..., description="Feedback message")
    timestamp: float = Field(..., description="When the guess was made")

# 6. One player's board
class BoardOut(BaseModel):
    history: List[HistoryEntryOut] = Field(..., description="Submitted rows with feedback")
    row: List[ColorId] = Field(..., description="Row being built, not yet submitted")
    remaining: int = Field(..., description="Guesses left for this player")

# 7. Represents the overall state of the round
class GameState(BaseModel):
    game_id: str = Field(..., description="Unique ID for the round")
    difficulty: Difficulty
    mode: GameMode
    status: GameStatus = Field(..., description="Current state of the round")
    active_player: PlayerId = Field(..., description="Whose turn it is")
    winner: Optional[PlayerId] = Field(None, description="Player who cracked the code")
    level: int = Field(..., description="Current level")
    level_mode: bool = Field(..., description="Single player on MEDIUM or harder")
    slots: int
    alphabet: List[ColorId]
    boards: Dict[int, BoardOut] = Field(..., description="Board per player id")
    secret: Optional[List[ColorId]] = Field(None, description="Only revealed once the round is over")

# 8. Result of a submitted guess
class GuessResponse(BaseModel):
    status: GameStatus = Field(..., description="Current state of the round")
    player: PlayerId = Field(..., description="Player who made the guess")
    active_player: PlayerId = Field(..., description="Whose turn it is now")
    remaining: int = Field(..., description="Guesses left for the player who guessed")
    feedback: Optional[HistoryEntryOut] = Field(None, description="Feedback from the latest guess")
    secret: Optional[List[ColorId]] = Field(None, description="The secret code (only revealed if round is over)")
    note: Optional[str] = Field(None, description="Extra note (ex. 'Round LOST. No more guesses allowed.')")
