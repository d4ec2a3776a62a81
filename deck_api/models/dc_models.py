from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from deck_api.domain.cards import Suit, Value
from deck_api.errors import InvalidParam


class CardResponse(BaseModel):
    value: Value
    suit: Suit
    code: str


class CardsResponse(BaseModel):
    cards: List[CardResponse]


class CreateDeckResponse(BaseModel):
    deck_id: UUID
    shuffled: bool
    remaining: int


class OpenDeckResponse(CreateDeckResponse):
    cards: List[CardResponse]


class ProblemModel(BaseModel):
    """Error body returned for every failed request."""

    title: str
    status: int
    detail: Optional[str] = None
    invalid_params: Optional[List[InvalidParam]] = None
