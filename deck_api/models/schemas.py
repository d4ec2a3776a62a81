from datetime import datetime

from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column
from sqlalchemy.types import JSON, Boolean, DateTime, Uuid


class Base(DeclarativeBase):
    pass


class DeckTable(Base):
    __tablename__ = "decks"
    deck_id = Column(Uuid, primary_key=True)
    shuffled = Column(Boolean, nullable=False, default=False)
    # [{"value": "ACE", "suit": "SPADES"}, ...] in draw order
    cards = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
