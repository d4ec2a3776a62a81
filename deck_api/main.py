import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI

from deck_api.create_engine import create_deck_engine
from deck_api.crud import create_table
from deck_api.db import create_session_factory
from deck_api.draw_coordinator import PerDeckDrawCoordinator, create_draw_coordinator
from deck_api.error_handlers import register_exception_handlers
from deck_api.load_secrets import Settings, load_settings
from deck_api.logging_utils import setup_logging
from deck_api.middleware import add_request_middleware
from deck_api.routers.deck import deck_router
from deck_api.services.deck_db import SqlDeckStore
from deck_api.services.deck_service import DeckService
from deck_api.services.deck_store import InMemoryDeckStore


def create_app(settings: Settings | None = None, deck_service: DeckService | None = None) -> FastAPI:
    """Assemble the deck API.

    Args:
        settings (Settings | None): Defaults to the environment configuration
        deck_service (DeckService | None): Prebuilt service; when omitted the store
            and draw coordinator are built from ``settings``
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    engine = None
    if deck_service is None:
        coordinator = create_draw_coordinator(settings.draw_lock_strategy)
        if settings.deck_store == "memory":
            store = InMemoryDeckStore()
        elif settings.deck_store == "sql":
            engine = create_deck_engine(settings.database_url)
            store = SqlDeckStore(create_session_factory(engine), settings.store_timeout_seconds)
        else:
            raise ValueError(f"unknown deck store: {settings.deck_store}")
        deck_service = DeckService(store, coordinator)

    scheduler = AsyncIOScheduler()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Prepare the store and the lock maintenance job.
        This function is called to start the server.
        """
        if engine is not None:
            await create_table(engine)

        coordinator = deck_service.coordinator
        if isinstance(coordinator, PerDeckDrawCoordinator):
            # Idle per-deck locks pile up as decks are drawn from; drop them periodically
            scheduler.add_job(
                coordinator.prune_idle_locks,
                "interval",
                minutes=settings.draw_lock_prune_minutes,
            )
            scheduler.start()
        logging.info(
            f"Deck API ready (store={type(deck_service.store).__name__}, "
            f"draw_lock={type(coordinator).__name__})"
        )
        try:
            yield
        finally:
            if scheduler.running:
                scheduler.shutdown()
            if engine is not None:
                await engine.dispose()
            logging.info("Stop Server")

    app = FastAPI(title="Deck API", lifespan=lifespan)
    app.state.deck_service = deck_service
    register_exception_handlers(app)
    add_request_middleware(app)
    app.include_router(deck_router)
    return app
