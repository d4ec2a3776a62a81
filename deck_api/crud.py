import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from deck_api.domain.deck import Deck
from deck_api.models.schema_models import DeckSchema
from deck_api.models.schemas import Base, DeckTable


async def create_table(engine: AsyncEngine) -> None:
    """Create table if not exists"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logging.info("Deck tables are ready")


def _cards_payload(deck: Deck) -> list:
    return [card.model_dump(mode="json") for card in deck.cards]


class CreateData:
    @staticmethod
    async def create_deck_data(deck: Deck, session: AsyncSession) -> None:
        """Add a new deck row. The caller owns the transaction.

        Args:
            deck (Deck): Newly built deck
            session (AsyncSession): AsyncSession object to interact with database
        """
        new_deck = DeckTable(
            deck_id=deck.id,
            shuffled=deck.shuffled,
            cards=_cards_payload(deck),
        )
        session.add(new_deck)
        await session.flush()


class ReadData:
    @staticmethod
    async def read_deck_data(deck_id: UUID, session: AsyncSession) -> Deck | None:
        """Read deck data from database

        Args:
            deck_id (UUID): To identify the deck

        Returns:
            Deck | None: The stored deck, or None when there is no such deck
        """
        stmt = select(DeckTable).where(DeckTable.deck_id == deck_id)
        result = await session.execute(stmt)
        result = result.scalars().first()

        if result is None:
            return None

        deck_data = DeckSchema.model_validate(result)
        return Deck(id=deck_data.deck_id, shuffled=deck_data.shuffled, cards=deck_data.cards)


class UpdateData:
    @staticmethod
    async def replace_deck_data(deck_id: UUID, deck: Deck, session: AsyncSession) -> bool:
        """Overwrite the whole stored deck

        Args:
            deck_id (UUID): To identify the deck
            deck (Deck): New state of the deck

        Returns:
            bool: False if no row matched deck_id
        """
        stmt = (
            update(DeckTable)
            .where(DeckTable.deck_id == deck_id)
            .values(shuffled=deck.shuffled, cards=_cards_payload(deck))
        )
        result = await session.execute(stmt)
        return result.rowcount > 0
