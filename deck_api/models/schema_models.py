from typing import List
from uuid import UUID

from pydantic import BaseModel

from deck_api.domain.cards import Card


class DeckSchema(BaseModel):
    """Row shape of the decks table."""

    deck_id: UUID
    shuffled: bool
    cards: List[Card]

    class Config:
        from_attributes = True
