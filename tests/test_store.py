"""
Testing in-memory round store
- Build rows, submit guesses, check status/turns/levels/history, etc.
"""

import pytest

from decoder.config import DIFFICULTY_CONFIG, GameConfig
from decoder.engine import generate_secret
from decoder.store import RoundStore

SECRET = ["red", "green", "blue", "yellow"]
WRONG = ["purple", "red", "green", "blue"]  # valid colors, never a win

def test_store_pick_undo_and_submit():
    store = RoundStore()
    game = store.create(["red", "green", "blue"], DIFFICULTY_CONFIG["EASY"], "EASY")

    store.pick(game.id, "blue")
    store.pick(game.id, "red")
    assert game.rows[1] == ["blue", "red"]

    # Delete drops the last color only
    store.undo(game.id)
    assert game.rows[1] == ["blue"]

    store.pick(game.id, "green")
    store.pick(game.id, "yellow")
    store.submit(game.id)

    assert game.rows[1] == []
    entry = game.histories[1][0]
    assert entry.guess == ["blue", "green", "yellow"]
    assert entry.feedback == (1, 1)
    assert entry.message == "1 exact, 1 color-only"
    assert game.remaining(1) == 9
    assert game.status == "PLAYING"

def test_store_rejects_bad_picks():
    store = RoundStore()
    game = store.create(["red", "green", "blue"], DIFFICULTY_CONFIG["EASY"], "EASY")

    store.pick(game.id, "red")
    with pytest.raises(ValueError):
        store.pick(game.id, "red")     # repeated color
    with pytest.raises(ValueError):
        store.pick(game.id, "purple")  # not an EASY color

    store.pick(game.id, "green")
    store.pick(game.id, "blue")
    with pytest.raises(ValueError):
        store.pick(game.id, "yellow")  # row is full
    assert game.rows[1] == ["red", "green", "blue"]

def test_store_submit_needs_full_row():
    store = RoundStore()
    game = store.create(SECRET, DIFFICULTY_CONFIG["MEDIUM"], "MEDIUM")
    store.pick(game.id, "red")
    with pytest.raises(ValueError):
        store.submit(game.id)
    assert game.histories[1] == []

def test_store_guess_validates_whole_guess():
    store = RoundStore()
    game = store.create(SECRET, DIFFICULTY_CONFIG["MEDIUM"], "MEDIUM")

    with pytest.raises(ValueError):
        store.guess(game.id, ["red", "green", "blue"])
    with pytest.raises(ValueError):
        store.guess(game.id, ["red", "red", "blue", "yellow"])
    with pytest.raises(ValueError):
        store.guess(game.id, ["red", "green", "blue", "cyan"])
    assert game.histories[1] == []

def test_store_unknown_round():
    store = RoundStore()
    assert store.get("nope") is None
    assert store.pick("nope", "red") is None
    assert store.submit("nope") is None
    assert store.guess("nope", SECRET) is None
    assert store.reveal("nope") is None

def test_store_single_player_win_with_generated_secret():
    store = RoundStore()
    config = DIFFICULTY_CONFIG["MEDIUM"]
    secret = generate_secret(config.alphabet, config.slots)
    game = store.create(secret, config, "MEDIUM")

    # Secret is hidden while playing
    assert store.reveal(game.id) is None

    store.guess(game.id, secret)
    assert game.status == "WON"
    assert game.winner == 1
    assert store.reveal(game.id) == secret

def test_store_single_player_loses_after_max_guesses():
    store = RoundStore()
    game = store.create(SECRET, DIFFICULTY_CONFIG["MEDIUM"], "MEDIUM")

    for _ in range(9):
        store.guess(game.id, WRONG)
    assert game.status == "PLAYING"
    assert game.remaining(1) == 1

    store.guess(game.id, WRONG)
    assert game.status == "LOST"
    assert game.winner is None

    # Extra guesses are ignored once the round is over
    store.guess(game.id, SECRET)
    assert game.status == "LOST"
    assert len(game.histories[1]) == 10

def test_store_finished_round_ignores_picks():
    store = RoundStore()
    game = store.create(SECRET, DIFFICULTY_CONFIG["MEDIUM"], "MEDIUM")
    store.guess(game.id, SECRET)

    store.pick(game.id, "red")
    assert game.rows[1] == []

def test_store_two_players_take_turns_and_share_secret():
    store = RoundStore()
    game = store.create(SECRET, DIFFICULTY_CONFIG["MEDIUM"], "MEDIUM", mode="MULTI")

    store.guess(game.id, WRONG)
    assert game.active_player == 2
    assert len(game.histories[1]) == 1

    store.guess(game.id, SECRET)
    assert game.status == "WON"
    assert game.winner == 2

def test_store_two_players_lose_only_when_both_run_out():
    store = RoundStore()
    config = GameConfig(slots=4, alphabet=("red", "green", "blue", "yellow", "purple"), max_guesses=2)
    game = store.create(SECRET, config, "MEDIUM", mode="MULTI")

    store.guess(game.id, WRONG)  # p1: 1 left
    store.guess(game.id, WRONG)  # p2: 1 left
    store.guess(game.id, WRONG)  # p1: out
    assert game.status == "PLAYING"
    assert game.active_player == 2

    store.guess(game.id, WRONG)  # p2: out
    assert game.status == "LOST"

def test_store_level_mode_progression():
    store = RoundStore(max_levels=2)
    game = store.create(SECRET, DIFFICULTY_CONFIG["MEDIUM"], "MEDIUM")
    assert game.level_mode is True

    store.guess(game.id, SECRET)
    assert game.status == "WON"

    store.next_level(game.id, lambda config: ["yellow", "blue", "green", "red"])
    assert game.level == 2
    assert game.status == "PLAYING"
    assert game.histories[1] == []

    # Last level finishes the whole mode
    store.guess(game.id, ["yellow", "blue", "green", "red"])
    assert game.status == "MODE_COMPLETED"
    with pytest.raises(ValueError):
        store.next_level(game.id, lambda config: SECRET)

def test_store_no_levels_on_easy_or_two_players():
    store = RoundStore()
    easy = store.create(["red", "green", "blue"], DIFFICULTY_CONFIG["EASY"], "EASY")
    store.guess(easy.id, ["red", "green", "blue"])
    assert easy.status == "WON"
    with pytest.raises(ValueError):
        store.next_level(easy.id, lambda config: ["red", "green", "blue"])

    multi = store.create(SECRET, DIFFICULTY_CONFIG["MEDIUM"], "MEDIUM", mode="MULTI")
    assert multi.level_mode is False

def test_store_restart_resets_level_and_boards():
    store = RoundStore()
    game = store.create(SECRET, DIFFICULTY_CONFIG["MEDIUM"], "MEDIUM")
    store.guess(game.id, SECRET)
    store.next_level(game.id, lambda config: SECRET)
    store.guess(game.id, WRONG)

    store.restart(game.id, ["red", "green", "blue"], config=DIFFICULTY_CONFIG["EASY"], difficulty="EASY")
    assert game.level == 1
    assert game.difficulty == "EASY"
    assert game.config.slots == 3
    assert game.secret == ["red", "green", "blue"]
    assert game.histories == {1: [], 2: []}
    assert game.active_player == 1
    assert game.status == "PLAYING"

def test_store_undo_empty_row_and_finished_round():
    store = RoundStore()
    game = store.create(SECRET, DIFFICULTY_CONFIG["MEDIUM"], "MEDIUM")

    # Nothing picked yet -> nothing happens
    assert store.undo(game.id) is game
    assert game.rows[1] == []

    store.guess(game.id, SECRET)
    store.undo(game.id)
    assert game.status == "WON"
    assert game.rows[1] == []
    assert store.undo("nope") is None

def test_store_outcome_names_the_player_who_guessed():
    store = RoundStore()
    game = store.create(SECRET, DIFFICULTY_CONFIG["MEDIUM"], "MEDIUM", mode="MULTI")

    first = store.guess(game.id, WRONG)
    second = store.guess(game.id, ["yellow", "red", "green", "blue"])

    # The first outcome keeps describing player 1's turn after player 2 moved
    assert first.player == 1
    assert first.entry is game.histories[1][0]
    assert first.entry.guess == WRONG
    assert first.active_player == 2
    assert first.remaining == 9
    assert first.secret is None

    assert second.player == 2
    assert second.entry is game.histories[2][0]
    assert second.active_player == 1

def test_store_outcome_after_round_is_over():
    store = RoundStore()
    game = store.create(SECRET, DIFFICULTY_CONFIG["MEDIUM"], "MEDIUM", mode="MULTI")
    store.guess(game.id, WRONG)
    won = store.guess(game.id, SECRET)
    assert won.status == "WON"
    assert won.secret == SECRET

    # Extra guess reports the winner's last row and changes nothing
    again = store.guess(game.id, WRONG)
    assert again.player == 2
    assert again.entry.guess == SECRET
    assert len(game.histories[2]) == 1

def test_store_next_level_refused_before_drawing_a_secret():
    store = RoundStore()
    game = store.create(SECRET, DIFFICULTY_CONFIG["MEDIUM"], "MEDIUM")
    drawn = []

    def make_secret(config):
        drawn.append(config)
        return SECRET

    with pytest.raises(ValueError):
        store.next_level(game.id, make_secret)  # still playing
    assert drawn == []

    store.guess(game.id, SECRET)
    store.next_level(game.id, make_secret)
    assert drawn == [DIFFICULTY_CONFIG["MEDIUM"]]
    assert store.next_level("nope", make_secret) is None

def test_store_restart_with_mode_only():
    store = RoundStore()
    game = store.create(SECRET, DIFFICULTY_CONFIG["VERY HARD"], "VERY HARD", mode="MULTI")
    assert game.level_mode is False

    store.restart(game.id, ["cyan", "red", "green", "blue"], mode="SINGLE")
    assert game.mode == "SINGLE"
    assert game.difficulty == "VERY HARD"
    assert game.config == DIFFICULTY_CONFIG["VERY HARD"]
    assert game.level_mode is True
