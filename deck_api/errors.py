from typing import List

from pydantic import BaseModel


class InvalidParam(BaseModel):
    name: str
    reason: str


class DeckServiceError(Exception):
    """Base class for errors surfaced to the caller of the deck service."""


class ValidationError(DeckServiceError):
    """Malformed or missing caller input. Never mutates state."""

    def __init__(self, *invalid_params: InvalidParam):
        self.invalid_params: List[InvalidParam] = list(invalid_params)
        reasons = ", ".join(f"{p.name}: {p.reason}" for p in self.invalid_params)
        super().__init__(f"invalid parameters ({reasons})")


class NotFoundError(DeckServiceError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class InsufficientCardsError(DeckServiceError):
    """Draw count exceeds the cards remaining in the deck."""

    def __init__(self, requested: int, remaining: int):
        self.requested = requested
        self.remaining = remaining
        super().__init__(
            f"deck does not have enough cards (requested {requested}, remaining {remaining})"
        )

    @property
    def invalid_param(self) -> InvalidParam:
        return InvalidParam(name="deck", reason="deck does not have enough cards")


class StoreError(DeckServiceError):
    """Internal failure of the deck store. Opaque to the caller."""


class StoreUnavailableError(StoreError):
    """The deck store timed out or could not be reached."""


class ShuffleError(DeckServiceError):
    """The cryptographic random source could not produce a permutation."""
