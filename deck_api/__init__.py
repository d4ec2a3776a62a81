"""Deck-of-cards HTTP service: create, open and draw from decks."""
