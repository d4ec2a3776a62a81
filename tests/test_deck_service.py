"""
Tests for DeckService over the in-memory store, including concurrent draws.
"""

import asyncio
from uuid import uuid4

import pytest

from deck_api.draw_coordinator import DrawCoordinator, GlobalDrawCoordinator, PerDeckDrawCoordinator
from deck_api.errors import (
    InsufficientCardsError,
    NotFoundError,
    ShuffleError,
    StoreUnavailableError,
    ValidationError,
)
from deck_api.services.deck_service import DeckService
from deck_api.services.deck_store import InMemoryDeckStore


class NoCoordination(DrawCoordinator):
    async def coordinate(self, deck_id, fn):
        return await fn()


class FailingReplaceStore(InMemoryDeckStore):
    async def replace_by_id(self, deck_id, deck):
        raise StoreUnavailableError("replace timed out")


async def draw_concurrently(service, deck_id, requests):
    return await asyncio.gather(
        *(service.draw_cards(deck_id, 1) for _ in range(requests)),
        return_exceptions=True,
    )


class TestDeckService:
    def test_create_and_get(self, deck_service, deck_store):
        async def scenario():
            deck = await deck_service.create(["AS", "KD"], shuffled=False)
            return deck, await deck_service.get(deck.id)

        deck, stored = asyncio.run(scenario())
        assert stored == deck
        assert [card.code for card in stored.cards] == ["AS", "KD"]
        assert deck.id in deck_store.documents

    def test_get_unknown_deck(self, deck_service):
        with pytest.raises(NotFoundError):
            asyncio.run(deck_service.get(uuid4()))

    def test_draw_persists_remaining_cards(self, deck_service):
        async def scenario():
            deck = await deck_service.create([], shuffled=False)
            drawn = await deck_service.draw_cards(deck.id, 3)
            return drawn, await deck_service.get(deck.id)

        drawn, stored = asyncio.run(scenario())
        assert [card.code for card in drawn] == ["AC", "2C", "3C"]
        assert stored.remaining == 49
        assert stored.cards[0].code == "4C"

    def test_insufficient_cards_leave_deck_untouched(self, deck_service):
        async def scenario():
            deck = await deck_service.create(["AS", "2S"], shuffled=False)
            with pytest.raises(InsufficientCardsError):
                await deck_service.draw_cards(deck.id, 3)
            return await deck_service.get(deck.id)

        assert asyncio.run(scenario()).remaining == 2

    def test_non_positive_count(self, deck_service):
        with pytest.raises(ValidationError):
            asyncio.run(deck_service.draw_cards(uuid4(), 0))

    def test_draw_unknown_deck(self, deck_service):
        with pytest.raises(NotFoundError):
            asyncio.run(deck_service.draw_cards(uuid4(), 1))

    def test_failed_replace_is_not_observable(self):
        store = FailingReplaceStore()
        service = DeckService(store, GlobalDrawCoordinator())

        async def scenario():
            deck = await service.create([], shuffled=False)
            with pytest.raises(StoreUnavailableError):
                await service.draw_cards(deck.id, 5)
            return await service.get(deck.id)

        assert asyncio.run(scenario()).remaining == 52

    def test_shuffle_failure_stores_nothing(self, deck_store):
        def randbelow(n):
            raise OSError("no entropy")

        service = DeckService(deck_store, GlobalDrawCoordinator(), randbelow=randbelow)
        with pytest.raises(ShuffleError):
            asyncio.run(service.create([], shuffled=True))
        assert deck_store.documents == {}

    def test_store_hands_out_copies(self, deck_service, deck_store):
        async def scenario():
            deck = await deck_service.create([], shuffled=False)
            deck.draw_cards(10)
            return await deck_service.get(deck.id)

        assert asyncio.run(scenario()).remaining == 52


@pytest.mark.parametrize("coordinator_class", [GlobalDrawCoordinator, PerDeckDrawCoordinator])
class TestConcurrentDraws:
    def test_no_duplicates_and_no_overdraw(self, coordinator_class):
        service = DeckService(InMemoryDeckStore(), coordinator_class())

        async def scenario():
            deck = await service.create([], shuffled=True)
            results = await draw_concurrently(service, deck.id, 200)
            return results, await service.get(deck.id)

        results, stored = asyncio.run(scenario())
        drawn = [cards[0].code for cards in results if isinstance(cards, list)]
        failures = [r for r in results if not isinstance(r, list)]

        assert len(drawn) == 52
        assert len(set(drawn)) == 52
        assert len(failures) == 148
        assert all(isinstance(f, InsufficientCardsError) for f in failures)
        assert stored.remaining == 0

    def test_unrelated_decks(self, coordinator_class):
        service = DeckService(InMemoryDeckStore(), coordinator_class())

        async def scenario():
            first = await service.create(["AS", "2S", "3S"], shuffled=False)
            second = await service.create(["AH", "2H"], shuffled=False)
            await asyncio.gather(
                draw_concurrently(service, first.id, 5),
                draw_concurrently(service, second.id, 5),
            )
            return await service.get(first.id), await service.get(second.id)

        first, second = asyncio.run(scenario())
        assert first.remaining == 0
        assert second.remaining == 0


class TestUncoordinatedDraws:
    def test_unguarded_draws_lose_updates(self):
        """Without a coordinator concurrent read-modify-write hands out the same card twice."""
        service = DeckService(InMemoryDeckStore(), NoCoordination())

        async def scenario():
            deck = await service.create([], shuffled=False)
            return await draw_concurrently(service, deck.id, 10)

        results = asyncio.run(scenario())
        drawn = [cards[0].code for cards in results if isinstance(cards, list)]
        assert len(drawn) > len(set(drawn))
