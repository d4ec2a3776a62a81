"""
Unit tests for the shuffle engine.
"""

import pytest

from deck_api.domain.cards import all_cards
from deck_api.domain.shuffle import shuffle_cards, shuffled_copy
from deck_api.errors import ShuffleError


def failing_randbelow(n):
    raise OSError("entropy source unavailable")


class TestShuffle:
    def test_empty_sequence_unchanged(self):
        cards = []
        shuffle_cards(cards)
        assert cards == []

    def test_single_card_unchanged(self):
        cards = all_cards()[:1]
        before = list(cards)
        shuffle_cards(cards)
        assert cards == before

    def test_single_card_never_touches_random_source(self):
        cards = all_cards()[:1]
        shuffle_cards(cards, failing_randbelow)
        assert len(cards) == 1

    def test_fisher_yates_swaps(self):
        """With j always 0 the swaps are (2, 0) then (1, 0)."""
        calls = []

        def randbelow(n):
            calls.append(n)
            return 0

        cards = ["a", "b", "c"]
        shuffle_cards(cards, randbelow)
        assert cards == ["b", "c", "a"]
        assert calls == [3, 2]

    def test_is_permutation(self):
        cards = all_cards()
        shuffle_cards(cards)
        assert sorted(card.code for card in cards) == sorted(card.code for card in all_cards())

    def test_repeated_shuffles_vary(self):
        """Probabilistic: 30 shuffles of 5 cards landing on one order is ~(1/120)^29."""
        orders = set()
        for _ in range(30):
            cards = all_cards()[:5]
            shuffle_cards(cards)
            orders.add(tuple(card.code for card in cards))
        assert len(orders) > 1

    def test_failing_random_source(self):
        with pytest.raises(ShuffleError):
            shuffle_cards(all_cards()[:3], failing_randbelow)

    def test_shuffled_copy_leaves_input(self):
        cards = all_cards()
        before = list(cards)
        result = shuffled_copy(cards)
        assert cards == before
        assert sorted(c.code for c in result) == sorted(c.code for c in before)
