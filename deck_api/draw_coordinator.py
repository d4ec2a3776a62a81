import logging
from abc import ABC, abstractmethod
from asyncio import Lock
from typing import Awaitable, Callable, Dict, TypeVar
from uuid import UUID

T = TypeVar("T")

GLOBAL_STRATEGY = "global"
PER_DECK_STRATEGY = "per_deck"


class DrawCoordinator(ABC):
    """Runs fetch -> draw -> replace sequences under exclusive access."""

    @abstractmethod
    async def coordinate(self, deck_id: UUID, fn: Callable[[], Awaitable[T]]) -> T:
        """Run ``fn`` once exclusive access for ``deck_id`` is held.

        If the caller is cancelled while waiting, ``fn`` never runs.
        """


class GlobalDrawCoordinator(DrawCoordinator):
    """One lock for the whole process; no two draws run at the same time."""

    def __init__(self):
        self.lock = Lock()

    async def coordinate(self, deck_id: UUID, fn: Callable[[], Awaitable[T]]) -> T:
        async with self.lock:
            return await fn()


class _LockEntry:
    def __init__(self):
        self.lock = Lock()
        self.users = 0


class PerDeckDrawCoordinator(DrawCoordinator):
    """Lock table keyed by deck_id; draws on unrelated decks run concurrently."""

    def __init__(self):
        self.locks: Dict[UUID, _LockEntry] = {}  # deck_idごとのLockを管理

    async def coordinate(self, deck_id: UUID, fn: Callable[[], Awaitable[T]]) -> T:
        # No await between lookup and the users increment, so pruning on the
        # same event loop cannot drop an entry somebody is about to wait on.
        entry = self.locks.get(deck_id)
        if entry is None:
            entry = self.locks[deck_id] = _LockEntry()
        entry.users += 1
        try:
            async with entry.lock:
                return await fn()
        finally:
            entry.users -= 1

    async def prune_idle_locks(self) -> int:
        """Drop lock entries nobody holds or waits on

        Returns:
            int: Number of entries removed
        """
        idle = [deck_id for deck_id, entry in self.locks.items() if entry.users == 0]
        for deck_id in idle:
            del self.locks[deck_id]
        if idle:
            logging.debug(f"Pruned {len(idle)} idle draw locks, {len(self.locks)} left")
        return len(idle)


def create_draw_coordinator(strategy: str) -> DrawCoordinator:
    if strategy == GLOBAL_STRATEGY:
        return GlobalDrawCoordinator()
    if strategy == PER_DECK_STRATEGY:
        return PerDeckDrawCoordinator()
    raise ValueError(f"unknown draw lock strategy: {strategy}")
