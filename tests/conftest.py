import pytest
from fastapi.testclient import TestClient

from deck_api.draw_coordinator import GlobalDrawCoordinator
from deck_api.load_secrets import Settings
from deck_api.main import create_app
from deck_api.services.deck_service import DeckService
from deck_api.services.deck_store import InMemoryDeckStore


@pytest.fixture
def deck_store():
    return InMemoryDeckStore()


@pytest.fixture
def deck_service(deck_store):
    return DeckService(deck_store, GlobalDrawCoordinator())


@pytest.fixture
def client(deck_service):
    app = create_app(Settings(deck_store="memory"), deck_service=deck_service)
    return TestClient(app)
