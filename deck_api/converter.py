from typing import List

from deck_api.domain.cards import Card
from deck_api.domain.deck import Deck
from deck_api.models.dc_models import (
    CardResponse,
    CardsResponse,
    CreateDeckResponse,
    OpenDeckResponse,
)


class DataConverter:
    """This class is used to convert domain objects into response payloads."""

    def convert_card_to_cardresponse(self, card: Card) -> CardResponse:
        return CardResponse(value=card.value, suit=card.suit, code=card.code)

    def convert_cards_to_cardsresponse(self, cards: List[Card]) -> CardsResponse:
        """Convert drawn cards to the payload sent to the client

        Args:
            cards (List[Card]): Cards in draw order

        Returns:
            CardsResponse: Each card with its value, suit and code
        """
        return CardsResponse(cards=[self.convert_card_to_cardresponse(card) for card in cards])

    def convert_deck_to_createdeckresponse(self, deck: Deck) -> CreateDeckResponse:
        return CreateDeckResponse(deck_id=deck.id, shuffled=deck.shuffled, remaining=deck.remaining)

    def convert_deck_to_opendeckresponse(self, deck: Deck) -> OpenDeckResponse:
        """Convert a deck to the payload of the open endpoint

        Args:
            deck (Deck): The stored deck

        Returns:
            OpenDeckResponse: Deck summary plus the remaining cards in draw order
        """
        return OpenDeckResponse(
            deck_id=deck.id,
            shuffled=deck.shuffled,
            remaining=deck.remaining,
            cards=[self.convert_card_to_cardresponse(card) for card in deck.cards],
        )
