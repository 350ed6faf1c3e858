"""
Pure game logic (no HTTP, no storage).

Two operations:
- generate_secret: a random code of distinct colors drawn from an alphabet
- score_guess: feedback for a guess against the secret
    exact      -> right color, right position
    color_only -> right color, wrong position (never counts an exact match twice)
"""

from secrets import randbelow
from typing import Callable, Dict, Hashable, List, NamedTuple, Sequence, TypeVar

S = TypeVar("S", bound=Hashable)


class Feedback(NamedTuple):
    exact: int
    color_only: int


def generate_secret(
    alphabet: Sequence[S],
    length: int,
    rand_index: Callable[[int], int] = randbelow,
) -> List[S]:
    """
    Draw `length` distinct symbols from `alphabet`, each remaining symbol
    equally likely at every step.

    If `length` is bigger than the alphabet we stop once the pool is empty,
    so the code comes back shorter instead of failing.

    Example:
      generate_secret(["red", "green", "blue"], 2) -> ["blue", "red"]
    """
    pool = list(alphabet)  # never touch the caller's alphabet
    code: List[S] = []

    for _ in range(length):
        if not pool:
            break
        index = rand_index(len(pool))
        # pop keeps the rest of the pool in order; each draw is still uniform
        code.append(pool.pop(index))

    return code


def score_guess(secret: Sequence[S], guess: Sequence[S]) -> Feedback:
    """
    Example:
      secret = ["red", "green", "blue", "yellow"]
      guess  = ["red", "blue", "purple", "green"]
      exact      = 1  (red in the first slot)
      color_only = 2  (blue and green are in the code, elsewhere)

    Lengths may differ: positions past the shorter sequence can't be exact
    but still take part in the color-only count.
    """

    # 1. Exact pass --> positions matched here are consumed
    exact = 0
    consumed = set()
    for i, (wanted, picked) in enumerate(zip(secret, guess)):
        if wanted == picked:
            exact += 1
            consumed.add(i)

    # 2. Frequency table of what is left in the secret
    secret_counts: Dict[S, int] = {}
    for i, symbol in enumerate(secret):
        if i not in consumed:
            secret_counts[symbol] = secret_counts.get(symbol, 0) + 1

    # 3. Each leftover guess symbol uses up one matching secret symbol
    color_only = 0
    for i, symbol in enumerate(guess):
        if i in consumed:
            continue
        if secret_counts.get(symbol, 0) > 0:
            color_only += 1
            secret_counts[symbol] -= 1

    return Feedback(exact, color_only)


def is_win(feedback: Feedback, slots: int) -> bool:
    """Win = every slot is an exact match."""
    return feedback.exact == slots
