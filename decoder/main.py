'''
Super Decoder API

Endpoints:
GET    /difficulties               -> list difficulty tiers
POST   /games                      -> start a round (difficulty, mode)
GET    /games/{id}                 -> read state & boards
POST   /games/{id}/picks           -> add one color to the active row
DELETE /games/{id}/picks           -> remove the last color of the active row
POST   /games/{id}/submit          -> submit the active row
POST   /games/{id}/guess           -> submit a whole guess at once

Levels / replay:
POST   /games/{id}/next-level      -> next level after a level-mode win
POST   /games/{id}/restart         -> new secret, level 1 (optionally new difficulty/mode)

Rounds live in memory only; restarting the process drops them.
'''

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, DEFAULT_DIFFICULTY, DIFFICULTY_CONFIG, LOG_LEVEL
from .engine import generate_secret
from .logger import setup_logger
from .store import Round, RoundStore
from .types import Difficulty, GameMode

from .schemas import (
    BoardOut,
    DifficultyOut,
    FeedbackOut,
    GameState,
    GuessRequest,
    GuessResponse,
    HistoryEntryOut,
    NewGameResponse,
    PickRequest,
)

setup_logger(LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Super Decoder API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# One store per process; tests swap it through dependency_overrides
_store = RoundStore()

def get_store() -> RoundStore:
    return _store

# --- Small DTO builders ---

def _to_entry_out(entry) -> HistoryEntryOut:
    return HistoryEntryOut(
        guess=entry.guess,
        feedback=FeedbackOut(exact=entry.feedback.exact, color_only=entry.feedback.color_only),
        message=entry.message,
        timestamp=entry.timestamp,
    )

def _to_game_state(game: Round) -> GameState:
    boards = {}
    for player, history in game.histories.items():
        boards[player] = BoardOut(
            history=[_to_entry_out(h) for h in history],
            row=list(game.rows[player]),
            remaining=game.remaining(player),
        )
    return GameState(
        game_id=game.id,
        difficulty=game.difficulty,
        mode=game.mode,
        status=game.status,
        active_player=game.active_player,
        winner=game.winner,
        level=game.level,
        level_mode=game.level_mode,
        slots=game.config.slots,
        alphabet=list(game.config.alphabet),
        boards=boards,
        secret=list(game.secret) if game.finished else None,
    )

def _load(store: RoundStore, game_id: str) -> Round:
    game = store.get(game_id)
    if not game:
        raise HTTPException(status_code=404, detail="Game not found")
    return game

def _submit(game_id: str, action) -> GuessResponse:
    # the store reports who guessed; the turn may already have passed on
    try:
        outcome = action()
    except ValueError as ve:
        logger.debug("guess rejected for %s: %s", game_id, ve)
        raise HTTPException(status_code=400, detail=str(ve))
    if not outcome:
        raise HTTPException(status_code=404, detail="Game not found")

    return GuessResponse(
        status=outcome.status,
        player=outcome.player,
        active_player=outcome.active_player,
        remaining=outcome.remaining,
        feedback=_to_entry_out(outcome.entry) if outcome.entry else None,
        secret=outcome.secret,
        note=(f"Round {outcome.status}. No more guesses allowed."
              if outcome.status != "PLAYING" else None),
    )

# ---------------- Routes ----------------

@app.get("/difficulties", response_model=list[DifficultyOut], summary="List difficulty tiers")
def list_difficulties() -> list[DifficultyOut]:
    return [
        DifficultyOut(
            name=name,
            slots=config.slots,
            alphabet=list(config.alphabet),
            max_guesses=config.max_guesses,
        )
        for name, config in DIFFICULTY_CONFIG.items()
    ]

@app.post("/games", response_model=NewGameResponse, summary="Start a new round")
def start_game(
    difficulty: Difficulty = DEFAULT_DIFFICULTY,
    mode: GameMode = "SINGLE",
    store: RoundStore = Depends(get_store),
) -> NewGameResponse:
    """
    Difficulty tiers:
      EASY      -> 3 slots, 4 colors
      MEDIUM    -> 4 slots, 5 colors
      HARD      -> 4 slots, 6 colors
      VERY HARD -> 4 slots, 7 colors
    Every tier gives each player 10 guesses.
    """
    config = DIFFICULTY_CONFIG[difficulty]
    secret = generate_secret(config.alphabet, config.slots)
    game = store.create(secret, config, difficulty, mode)

    return NewGameResponse(
        game_id=game.id,
        difficulty=game.difficulty,
        mode=game.mode,
        status=game.status,
        slots=config.slots,
        alphabet=list(config.alphabet),
        max_guesses=config.max_guesses,
        level=game.level,
    )

@app.get("/games/{game_id}", response_model=GameState, summary="Get current round state")
def get_game(
    game_id: str,
    store: RoundStore = Depends(get_store),
) -> GameState:
    return _to_game_state(_load(store, game_id))

@app.post("/games/{game_id}/picks", response_model=GameState, summary="Add a color to the active row")
def pick_color(
    game_id: str,
    payload: PickRequest,
    store: RoundStore = Depends(get_store),
) -> GameState:
    try:
        updated = store.pick(game_id, payload.color)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    if not updated:
        raise HTTPException(status_code=404, detail="Game not found")
    return _to_game_state(updated)

@app.delete("/games/{game_id}/picks", response_model=GameState, summary="Remove the last color of the active row")
def undo_pick(
    game_id: str,
    store: RoundStore = Depends(get_store),
) -> GameState:
    updated = store.undo(game_id)
    if not updated:
        raise HTTPException(status_code=404, detail="Game not found")
    return _to_game_state(updated)

@app.post("/games/{game_id}/submit", response_model=GuessResponse, summary="Submit the active row")
def submit_row(
    game_id: str,
    store: RoundStore = Depends(get_store),
) -> GuessResponse:
    return _submit(game_id, lambda: store.submit(game_id))

@app.post("/games/{game_id}/guess", response_model=GuessResponse, summary="Submit a whole guess")
def submit_guess(
    game_id: str,
    payload: GuessRequest,
    store: RoundStore = Depends(get_store),
) -> GuessResponse:
    # store.guess() performs the length / color checks
    return _submit(game_id, lambda: store.guess(game_id, payload.guess))

@app.post("/games/{game_id}/next-level", response_model=GameState, summary="Play the next level")
def next_level(
    game_id: str,
    store: RoundStore = Depends(get_store),
) -> GameState:
    try:
        # secret is drawn only once the store allows the move
        updated = store.next_level(game_id, lambda config: generate_secret(config.alphabet, config.slots))
    except ValueError as ve:
        raise HTTPException(status_code=409, detail=str(ve))
    if not updated:
        raise HTTPException(status_code=404, detail="Game not found")
    return _to_game_state(updated)

@app.post("/games/{game_id}/restart", response_model=GameState, summary="Start over from level 1")
def restart_game(
    game_id: str,
    difficulty: Optional[Difficulty] = None,
    mode: Optional[GameMode] = None,
    store: RoundStore = Depends(get_store),
) -> GameState:
    game = _load(store, game_id)
    config = DIFFICULTY_CONFIG[difficulty] if difficulty else game.config
    secret = generate_secret(config.alphabet, config.slots)
    updated = store.restart(game_id, secret, config=config, difficulty=difficulty, mode=mode)
    return _to_game_state(updated)
