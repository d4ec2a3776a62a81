import logging
import secrets
from typing import Iterable, List
from uuid import UUID

from deck_api.domain.cards import Card
from deck_api.domain.deck import Deck, new_deck
from deck_api.domain.shuffle import RandBelow
from deck_api.draw_coordinator import DrawCoordinator
from deck_api.errors import InvalidParam, ValidationError
from deck_api.services.deck_store import DeckStore


class DeckService:
    """Create, open and draw from decks held in a DeckStore."""

    def __init__(
        self,
        store: DeckStore,
        coordinator: DrawCoordinator,
        randbelow: RandBelow = secrets.randbelow,
    ):
        self.store = store
        self.coordinator = coordinator
        self.randbelow = randbelow

    async def create(self, card_codes: Iterable[str], shuffled: bool) -> Deck:
        """Build and persist a new deck

        Args:
            card_codes (Iterable[str]): Codes of the cards to include, empty for the full deck
            shuffled (bool): Permute the cards once before storing

        Returns:
            Deck: The stored deck
        """
        deck = new_deck(card_codes, shuffled, self.randbelow)
        await self.store.insert(deck)
        logging.info(f"Created deck {deck.id} (shuffled={deck.shuffled}, remaining={deck.remaining})")
        return deck

    async def get(self, deck_id: UUID) -> Deck:
        return await self.store.find_by_id(deck_id)

    async def draw_cards(self, deck_id: UUID, count: int) -> List[Card]:
        """Draw ``count`` cards from the front of the deck

        The fetch, the draw and the replace run inside the draw coordinator, and
        cards are only handed back after the new deck state was stored.

        Args:
            deck_id (UUID): To identify the deck
            count (int): Number of cards to draw, at least 1

        Raises:
            ValidationError: count is lower than 1
            NotFoundError: No deck with deck_id
            InsufficientCardsError: Fewer than count cards remain; nothing is stored

        Returns:
            List[Card]: Drawn cards in draw order
        """
        if count < 1:
            raise ValidationError(
                InvalidParam(name="count", reason="count should be greater or equal to 1")
            )

        async def fetch_draw_replace() -> List[Card]:
            deck = await self.store.find_by_id(deck_id)
            cards = deck.draw_cards(count)
            await self.store.replace_by_id(deck_id, deck)
            return cards

        cards = await self.coordinator.coordinate(deck_id, fetch_draw_replace)
        logging.debug(f"Drew {len(cards)} cards from deck {deck_id}")
        return cards
