import pytest
from fastapi.testclient import TestClient

from literae.main import app
from literae.storage import BookshopStore, get_store


@pytest.fixture
def store() -> BookshopStore:
    return BookshopStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
