"""
In-memory round store
Holds every round in memory and runs the turn rules:
- players build a row one color at a time (unique colors only)
- a full row is scored against the shared secret
- win / loss / turn switching / level progression
"""

import logging
from dataclasses import dataclass, field
from threading import RLock
from time import time
from typing import Callable, Dict, List, Optional, Sequence
from uuid import uuid4

from .config import MAX_LEVELS, GameConfig
from .engine import Feedback, is_win, score_guess
from .types import Code, ColorId, Difficulty, GameMode, GameStatus, PlayerId

logger = logging.getLogger(__name__)

PLAYERS: tuple = (1, 2)


@dataclass
class HistoryEntry:
    guess: Code
    feedback: Feedback
    message: str
    timestamp: float


@dataclass
class Round:
    id: str
    secret: Code
    config: GameConfig
    difficulty: Difficulty = "MEDIUM"
    mode: GameMode = "SINGLE"
    status: GameStatus = "PLAYING"
    active_player: PlayerId = 1
    winner: Optional[PlayerId] = None
    level: int = 1
    # one board per player; both guess the same secret
    histories: Dict[int, List[HistoryEntry]] = field(default_factory=lambda: {1: [], 2: []})
    rows: Dict[int, Code] = field(default_factory=lambda: {1: [], 2: []})
    created_at: float = field(default_factory=time)
    updated_at: float = field(default_factory=time)

    @property
    def level_mode(self) -> bool:
        return self.mode == "SINGLE" and self.difficulty != "EASY"

    @property
    def finished(self) -> bool:
        return self.status != "PLAYING"

    def remaining(self, player: int) -> int:
        return self.config.max_guesses - len(self.histories[player])


@dataclass(frozen=True)
class GuessOutcome:
    """What one submit did, captured before anyone else can play."""
    round: Round
    player: PlayerId
    entry: Optional[HistoryEntry]
    status: GameStatus
    active_player: PlayerId
    remaining: int
    secret: Optional[Code]


def feedback_message(feedback: Feedback) -> str:
    # Never says which colors matched, only how many
    if feedback.exact == 0 and feedback.color_only == 0:
        return "no matches"
    return f"{feedback.exact} exact, {feedback.color_only} color-only"


class RoundStore:
    def __init__(self, max_levels: int = MAX_LEVELS) -> None:
        self._rounds: Dict[str, Round] = {}
        self._lock = RLock()
        self.max_levels = max_levels

    def create(
        self,
        secret: Code,
        config: GameConfig,
        difficulty: Difficulty = "MEDIUM",
        mode: GameMode = "SINGLE",
    ) -> Round:
        new_id = str(uuid4())
        game = Round(
            id=new_id,
            secret=list(secret),
            config=config,
            difficulty=difficulty,
            mode=mode,
        )
        with self._lock:
            self._rounds[new_id] = game
        logger.info("round %s created (%s, %s)", new_id, difficulty, mode)
        return game

    def get(self, round_id: str) -> Optional[Round]:
        with self._lock:
            return self._rounds.get(round_id)

    # --- Building the active row ---

    def pick(self, round_id: str, color: ColorId) -> Optional[Round]:
        with self._lock:
            game = self._rounds.get(round_id)
            if game is None:
                return None
            if game.finished:
                return game

            row = game.rows[game.active_player]
            self._check_color(game, row, color)
            if len(row) >= game.config.slots:
                raise ValueError(f"Row is full: {game.config.slots} colors already picked.")

            row.append(color)
            game.updated_at = time()
            return game

    def undo(self, round_id: str) -> Optional[Round]:
        with self._lock:
            game = self._rounds.get(round_id)
            if game is None:
                return None
            row = game.rows[game.active_player]
            if not game.finished and row:
                row.pop()
                game.updated_at = time()
            return game

    # --- Submitting ---

    def guess(self, round_id: str, attempt: Sequence[ColorId]) -> Optional[GuessOutcome]:
        """Place a whole guess as the active row and submit it."""
        with self._lock:
            game = self._rounds.get(round_id)
            if game is None:
                return None
            if game.finished:
                # If round already ended, just report it (ignore extra guesses)
                return self._outcome(game, game.winner or game.active_player)

            if len(attempt) != game.config.slots:
                raise ValueError(f"Guess must have exactly {game.config.slots} colors for this round.")
            checked: Code = []
            for color in attempt:
                self._check_color(game, checked, color)
                checked.append(color)

            game.rows[game.active_player] = checked
            return self.submit(round_id)

    def submit(self, round_id: str) -> Optional[GuessOutcome]:
        with self._lock:
            game = self._rounds.get(round_id)
            if game is None:
                return None
            if game.finished:
                return self._outcome(game, game.winner or game.active_player)

            player = game.active_player
            row = game.rows[player]
            if len(row) != game.config.slots:
                raise ValueError(f"Pick {game.config.slots} colors before submitting.")

            feedback = score_guess(game.secret, row)
            game.histories[player].append(
                HistoryEntry(
                    guess=list(row),
                    feedback=feedback,
                    message=feedback_message(feedback),
                    timestamp=time(),
                )
            )
            game.rows[player] = []
            game.updated_at = time()

            self._settle(game, player, feedback)
            return self._outcome(game, player)

    def _settle(self, game: Round, player: PlayerId, feedback: Feedback) -> None:
        # 1. Win
        if is_win(feedback, game.config.slots):
            game.winner = player
            if game.level_mode and game.level >= self.max_levels:
                game.status = "MODE_COMPLETED"
            else:
                game.status = "WON"
            logger.info("round %s %s by player %s at level %s", game.id, game.status, player, game.level)
            return

        # 2. Single player: out of guesses
        if game.mode == "SINGLE":
            if game.remaining(player) <= 0:
                game.status = "LOST"
                logger.info("round %s lost at level %s", game.id, game.level)
            return

        # 3. Two players: lost only when both boards are used up
        if all(game.remaining(p) <= 0 for p in PLAYERS):
            game.status = "LOST"
            logger.info("round %s lost by both players", game.id)
            return

        other = 2 if player == 1 else 1
        if game.remaining(other) > 0:
            game.active_player = other

    @staticmethod
    def _outcome(game: Round, player: PlayerId) -> GuessOutcome:
        # taken while the lock is held, so later turns can't leak into it
        history = game.histories[player]
        return GuessOutcome(
            round=game,
            player=player,
            entry=history[-1] if history else None,
            status=game.status,
            active_player=game.active_player,
            remaining=game.remaining(player),
            secret=list(game.secret) if game.finished else None,
        )

    # --- Level progression / restarts ---

    def next_level(self, round_id: str, make_secret: Callable[[GameConfig], Code]) -> Optional[Round]:
        """Advance after a level-mode win; `make_secret` only runs once the move is allowed."""
        with self._lock:
            game = self._rounds.get(round_id)
            if game is None:
                return None
            if not (game.status == "WON" and game.level_mode and game.level < self.max_levels):
                raise ValueError("Next level is only available after winning a level-mode round.")

            game.level += 1
            self._reset_board(game, make_secret(game.config))
            logger.info("round %s advanced to level %s", game.id, game.level)
            return game

    def restart(
        self,
        round_id: str,
        secret: Code,
        config: Optional[GameConfig] = None,
        difficulty: Optional[Difficulty] = None,
        mode: Optional[GameMode] = None,
    ) -> Optional[Round]:
        """Fresh secret, level back to 1; difficulty/mode change only if given."""
        with self._lock:
            game = self._rounds.get(round_id)
            if game is None:
                return None
            if config is not None:
                game.config = config
            if difficulty is not None:
                game.difficulty = difficulty
            if mode is not None:
                game.mode = mode

            game.level = 1
            self._reset_board(game, secret)
            logger.info("round %s restarted (%s, %s)", game.id, game.difficulty, game.mode)
            return game

    def reveal(self, round_id: str) -> Optional[Code]:
        """Return the secret ONLY for finished rounds; else None."""
        with self._lock:
            game = self._rounds.get(round_id)
            if game is None or not game.finished:
                return None
            return list(game.secret)

    # --- helpers ---

    @staticmethod
    def _check_color(game: Round, row: Sequence[ColorId], color: ColorId) -> None:
        if color not in game.config.alphabet:
            logger.debug("round %s rejected color %r", game.id, color)
            raise ValueError(f"{color} is not one of this round's colors: {', '.join(game.config.alphabet)}.")
        if color in row:
            logger.debug("round %s rejected repeated color %r", game.id, color)
            raise ValueError(f"{color} is already in the row; each color may be used once.")

    @staticmethod
    def _reset_board(game: Round, secret: Code) -> None:
        game.secret = list(secret)
        game.histories = {1: [], 2: []}
        game.rows = {1: [], 2: []}
        game.active_player = 1
        game.winner = None
        game.status = "PLAYING"
        game.updated_at = time()
