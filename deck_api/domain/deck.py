"""Deck aggregate: identity, creation-time shuffle flag and remaining cards."""

import secrets
from typing import Iterable, List
from uuid import UUID

from pydantic import BaseModel
from uuid6 import uuid7

from deck_api.domain.cards import Card, build_cards
from deck_api.domain.shuffle import RandBelow, shuffled_copy
from deck_api.errors import InsufficientCardsError, InvalidParam, ValidationError


class Deck(BaseModel):
    id: UUID
    shuffled: bool = False
    cards: List[Card] = []

    @property
    def remaining(self) -> int:
        return len(self.cards)

    def draw_cards(self, count: int) -> List[Card]:
        """Remove and return the first ``count`` cards.

        Not safe for concurrent use; the draw coordinator serializes callers.

        Args:
            count (int): Number of cards to draw, at least 1

        Raises:
            ValidationError: count is lower than 1
            InsufficientCardsError: count exceeds the remaining cards. The deck is left as it was.

        Returns:
            List[Card]: Drawn cards in draw order
        """
        if count < 1:
            raise ValidationError(
                InvalidParam(name="count", reason="count should be greater or equal to 1")
            )
        if count > len(self.cards):
            raise InsufficientCardsError(count, len(self.cards))

        drawn = self.cards[:count]
        self.cards = self.cards[count:]
        return drawn


def new_deck(
    card_codes: Iterable[str],
    shuffled: bool = False,
    randbelow: RandBelow = secrets.randbelow,
) -> Deck:
    """Build a new deck with a fresh identifier.

    Unknown codes are dropped (see ``build_cards``). When ``shuffled`` is set the
    cards are permuted once here; a failing random source raises ``ShuffleError``
    and no deck is produced.
    """
    cards = build_cards(card_codes)
    if shuffled:
        cards = shuffled_copy(cards, randbelow)
    return Deck(id=uuid7(), shuffled=shuffled, cards=cards)
