import secrets
from typing import Callable, List, TypeVar

from deck_api.errors import ShuffleError

T = TypeVar("T")

RandBelow = Callable[[int], int]


def shuffle_cards(cards: List[T], randbelow: RandBelow = secrets.randbelow) -> None:
    """Shuffle ``cards`` in place with the Fisher-Yates algorithm.

    Args:
        cards (List[T]): Sequence to permute
        randbelow (RandBelow): Returns a uniform integer in [0, n). Defaults to the OS CSPRNG.

    Raises:
        ShuffleError: The random source failed. ``cards`` may already be partly
            permuted, so callers shuffle a copy and discard it on failure.
    """
    for i in range(len(cards) - 1, 0, -1):
        try:
            j = randbelow(i + 1)
        except (OSError, NotImplementedError) as e:
            raise ShuffleError(f"random source unavailable: {e}") from e
        cards[i], cards[j] = cards[j], cards[i]


def shuffled_copy(cards: List[T], randbelow: RandBelow = secrets.randbelow) -> List[T]:
    """Return a shuffled copy, leaving ``cards`` untouched."""
    working = list(cards)
    shuffle_cards(working, randbelow)
    return working
