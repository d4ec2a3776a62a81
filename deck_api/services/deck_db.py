"""SQL-backed deck store.

- Routers and the deck service never touch DB sessions; they call this module.
- This layer owns session/transaction boundaries.
- CRUD helpers do NOT commit inside session.begin().
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar
from uuid import UUID

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from deck_api.crud import CreateData, ReadData, UpdateData
from deck_api.domain.deck import Deck
from deck_api.errors import StoreError, StoreUnavailableError
from deck_api.services.deck_store import DeckStore, deck_not_found

T = TypeVar("T")


class SqlDeckStore(DeckStore):
    def __init__(self, Session: async_sessionmaker[AsyncSession], timeout: float):
        """
        Args:
            Session (async_sessionmaker): Session factory bound to the deck engine
            timeout (float): Upper bound in seconds for each store operation
        """
        self.Session = Session
        self.timeout = timeout

    async def _run(self, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        try:
            return await asyncio.wait_for(call(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logging.error(f"Deck store timed out during {operation} after {self.timeout}s")
            raise StoreUnavailableError(f"{operation} timed out") from e
        except IntegrityError as e:
            logging.error(f"Deck store rejected {operation}: {e}")
            raise StoreError(f"{operation} violated a store constraint") from e
        except (OperationalError, InterfaceError) as e:
            logging.error(f"Deck store unavailable during {operation}: {e}")
            raise StoreUnavailableError(f"{operation} failed to reach the store") from e
        except SQLAlchemyError as e:
            logging.error(f"Deck store failed during {operation}: {e}")
            raise StoreError(f"{operation} failed") from e

    async def insert(self, deck: Deck) -> None:
        async def call():
            async with self.Session() as session:
                async with session.begin():
                    await CreateData.create_deck_data(deck, session)

        await self._run("insert", call)

    async def find_by_id(self, deck_id: UUID) -> Deck:
        async def call():
            async with self.Session() as session:
                return await ReadData.read_deck_data(deck_id, session)

        deck = await self._run("find", call)
        if deck is None:
            raise deck_not_found(deck_id)
        return deck

    async def replace_by_id(self, deck_id: UUID, deck: Deck) -> None:
        """Overwrite the stored deck in one short transaction.

        A StoreUnavailableError here is ambiguous: when the timeout or the
        connection loss hits while the commit is in flight, the new deck state
        may already be stored even though the caller sees a failure, and the
        cards of that draw are then gone from the deck. Nothing is retried.
        """

        async def call():
            async with self.Session() as session:
                async with session.begin():
                    return await UpdateData.replace_deck_data(deck_id, deck, session)

        replaced = await self._run("replace", call)
        if not replaced:
            raise deck_not_found(deck_id)
