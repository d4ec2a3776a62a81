from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine


def create_deck_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine backing the deck store.

    PostgreSQL (asyncpg) gets a connection pool sized for concurrent requests;
    SQLite (aiosqlite) uses the driver defaults.
    """
    if database_url.startswith("sqlite"):
        return create_async_engine(url=database_url, echo=echo)
    return create_async_engine(
        database_url,
        echo=echo,
        pool_size=20,
        max_overflow=20,
        pool_pre_ping=True,
    )
