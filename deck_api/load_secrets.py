import os
import pathlib

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_SQLITE_PATH = pathlib.Path(__file__).parents[1] / "decks.sqlite3"


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    database_url: str = f"sqlite+aiosqlite:///{DEFAULT_SQLITE_PATH}"
    deck_store: str = "sql"
    draw_lock_strategy: str = "global"
    draw_lock_prune_minutes: int = 10
    store_timeout_seconds: float = 5.0
    log_level: str = "INFO"


def database_url_from_env() -> str | None:
    """Resolve the store URL: DATABASE_URL wins, then the DB_* PostgreSQL variables.

    The PostgreSQL URL is only built when DB_USER, DB_PASSWORD, DB_HOST and
    DB_NAME are all set; otherwise the SQLite default applies.
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    user = os.getenv("DB_USER")
    password = os.getenv("DB_PASSWORD")
    host = os.getenv("DB_HOST")
    port = os.getenv("DB_PORT", "5432")
    db_name = os.getenv("DB_NAME")
    if user and password and host and db_name:
        return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{db_name}"
    return None


def load_settings() -> Settings:
    values = {
        "host": os.getenv("CARDS_HOST"),
        "port": os.getenv("CARDS_PORT"),
        "database_url": database_url_from_env(),
        "deck_store": os.getenv("DECK_STORE"),
        "draw_lock_strategy": os.getenv("DRAW_LOCK_STRATEGY"),
        "draw_lock_prune_minutes": os.getenv("DRAW_LOCK_PRUNE_MINUTES"),
        "store_timeout_seconds": os.getenv("STORE_TIMEOUT_SECONDS"),
        "log_level": os.getenv("LOG_LEVEL"),
    }
    return Settings(**{key: value for key, value in values.items() if value is not None})


if __name__ == "__main__":
    print(load_settings())
