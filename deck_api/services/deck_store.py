"""Deck store contract.

The store is only trusted with insert, find-by-id and replace-by-id. It offers
no transactions, versions or compare-and-swap across those calls, which is why
draws go through the draw coordinator.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict
from uuid import UUID

from deck_api.domain.deck import Deck
from deck_api.errors import NotFoundError, StoreError


class DeckStore(ABC):
    @abstractmethod
    async def insert(self, deck: Deck) -> None:
        """Persist a new deck. Raises StoreError on an identifier collision."""

    @abstractmethod
    async def find_by_id(self, deck_id: UUID) -> Deck:
        """Return the stored deck. Raises NotFoundError if absent."""

    @abstractmethod
    async def replace_by_id(self, deck_id: UUID, deck: Deck) -> None:
        """Overwrite the whole stored deck. Raises NotFoundError if absent."""


def deck_not_found(deck_id: UUID) -> NotFoundError:
    return NotFoundError(f"deck with ID {deck_id} not found")


class InMemoryDeckStore(DeckStore):
    """Document store over a dict.

    Decks go in and come out as deep copies, and every call yields to the
    event loop like a network round-trip would.
    """

    def __init__(self):
        self.documents: Dict[UUID, Deck] = {}

    async def insert(self, deck: Deck) -> None:
        await asyncio.sleep(0)
        if deck.id in self.documents:
            raise StoreError(f"deck with ID {deck.id} already exists")
        self.documents[deck.id] = deck.model_copy(deep=True)
        logging.debug(f"Inserted deck {deck.id} into memory store")

    async def find_by_id(self, deck_id: UUID) -> Deck:
        await asyncio.sleep(0)
        deck = self.documents.get(deck_id)
        if deck is None:
            raise deck_not_found(deck_id)
        return deck.model_copy(deep=True)

    async def replace_by_id(self, deck_id: UUID, deck: Deck) -> None:
        await asyncio.sleep(0)
        if deck_id not in self.documents:
            raise deck_not_found(deck_id)
        self.documents[deck_id] = deck.model_copy(deep=True)
