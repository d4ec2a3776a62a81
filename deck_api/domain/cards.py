"""Card model and the 52-card catalog.

The catalog order (suits clubs, diamonds, hearts, spades; ranks ace, 2-10,
jack, queen, king) is the canonical unshuffled order of a new deck.
"""

from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, List, Mapping

from pydantic import BaseModel


class Suit(str, Enum):
    CLUBS = "CLUBS"
    DIAMONDS = "DIAMONDS"
    HEARTS = "HEARTS"
    SPADES = "SPADES"


class Value(str, Enum):
    ACE = "ACE"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "JACK"
    QUEEN = "QUEEN"
    KING = "KING"


class Card(BaseModel):
    value: Value
    suit: Suit

    class Config:
        frozen = True

    @property
    def code(self) -> str:
        """Short code of the card, e.g. "10S" for ten of spades, "AH" for ace of hearts."""
        value = self.value.value
        rank = value if value.isdigit() else value[0]
        return f"{rank}{self.suit.value[0]}"

    def __str__(self) -> str:
        return self.code


def all_cards() -> List[Card]:
    """Return a new list with all 52 cards in catalog order."""
    return [Card(value=value, suit=suit) for suit in Suit for value in Value]


@lru_cache(maxsize=None)
def cards_by_code() -> Mapping[str, Card]:
    """Read-only code -> Card lookup, built once per process."""
    return MappingProxyType({card.code: card for card in all_cards()})


def is_card_code(code: str) -> bool:
    return code in cards_by_code()


def build_cards(codes: Iterable[str]) -> List[Card]:
    """Resolve card codes into cards, keeping the caller's order.

    An empty code list yields the full catalog. Unknown codes are dropped
    without error, so the result may be shorter than ``codes``. The HTTP
    layer rejects unknown codes before they get here.
    """
    codes = list(codes)
    if not codes:
        return all_cards()
    catalog = cards_by_code()
    return [catalog[code] for code in codes if code in catalog]
