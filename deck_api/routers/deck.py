import logging
import re
from typing import List, Tuple
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from deck_api.converter import DataConverter
from deck_api.domain.cards import is_card_code
from deck_api.errors import InvalidParam, ValidationError
from deck_api.models.dc_models import CardsResponse, CreateDeckResponse, OpenDeckResponse
from deck_api.services.deck_service import DeckService

deck_router = APIRouter(prefix="/api/v1")
data_converter = DataConverter()

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
TRUE_STRINGS = {"1", "t", "T", "TRUE", "true", "True"}
FALSE_STRINGS = {"0", "f", "F", "FALSE", "false", "False"}


def get_deck_service(request: Request) -> DeckService:
    return request.app.state.deck_service


def parse_id(raw: str | None) -> Tuple[UUID | None, List[InvalidParam]]:
    """Parse the deck id path parameter

    Args:
        raw (str | None): Raw path value

    Returns:
        Tuple[UUID | None, List[InvalidParam]]: Parsed id (None when invalid) and the problems found
    """
    if not raw:
        return None, [InvalidParam(name="id", reason="param not provided")]
    try:
        return UUID(raw), []
    except ValueError as e:
        return None, [InvalidParam(name="id", reason=str(e))]


def parse_shuffled(raw: str | None) -> Tuple[bool, List[InvalidParam]]:
    if raw is None:
        return False, []
    if raw in TRUE_STRINGS:
        return True, []
    if raw in FALSE_STRINGS:
        return False, []
    return False, [InvalidParam(name="shuffled", reason=f"invalid boolean value: {raw!r}")]


def parse_cards(raw: str | None) -> Tuple[List[str], List[InvalidParam]]:
    """Split the comma separated card codes.

    Unlike ``build_cards``, every unrecognised code is reported here so the
    request is rejected instead of silently creating a smaller deck.
    """
    if not raw:
        return [], []
    codes = raw.split(",")
    invalid_params = [
        InvalidParam(name="cards", reason=f"unrecognised card: {code}")
        for code in codes
        if not is_card_code(code)
    ]
    return codes, invalid_params


def parse_count(raw: str | None) -> Tuple[int, List[InvalidParam]]:
    if not raw:
        return 0, [InvalidParam(name="count", reason="parameter missing")]
    if not INTEGER_PATTERN.fullmatch(raw):
        return 0, [InvalidParam(name="count", reason=f"invalid integer: {raw!r}")]
    count = int(raw)
    if count < 1:
        return count, [InvalidParam(name="count", reason="count should be greater or equal to 1")]
    return count, []


class DeckAPI:
    @staticmethod
    @deck_router.post("/deck", response_model=CreateDeckResponse)
    async def create_deck(
        cards: str | None = None,
        shuffled: str | None = None,
        deck_service: DeckService = Depends(get_deck_service),
    ) -> CreateDeckResponse:
        """Create a deck from the given card codes (all 52 cards when omitted)"""
        is_shuffled, shuffled_errors = parse_shuffled(shuffled)
        card_codes, cards_errors = parse_cards(cards)
        invalid_params = shuffled_errors + cards_errors
        if invalid_params:
            raise ValidationError(*invalid_params)

        deck = await deck_service.create(card_codes, is_shuffled)
        return data_converter.convert_deck_to_createdeckresponse(deck)

    @staticmethod
    @deck_router.post("/deck/{id}/open", response_model=OpenDeckResponse)
    async def open_deck(
        id: str,
        deck_service: DeckService = Depends(get_deck_service),
    ) -> OpenDeckResponse:
        deck_id, invalid_params = parse_id(id)
        if invalid_params:
            raise ValidationError(*invalid_params)

        deck = await deck_service.get(deck_id)
        return data_converter.convert_deck_to_opendeckresponse(deck)

    @staticmethod
    @deck_router.post("/deck/{id}/draw", response_model=CardsResponse)
    async def draw_cards(
        id: str,
        count: str | None = None,
        deck_service: DeckService = Depends(get_deck_service),
    ) -> CardsResponse:
        """Draw count cards from the front of the deck"""
        deck_id, id_errors = parse_id(id)
        card_count, count_errors = parse_count(count)
        invalid_params = id_errors + count_errors
        if invalid_params:
            raise ValidationError(*invalid_params)

        cards = await deck_service.draw_cards(deck_id, card_count)
        logging.info(f"Deck {deck_id}: drew {len(cards)} cards")
        return data_converter.convert_cards_to_cardsresponse(cards)
