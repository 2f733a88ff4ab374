import pytest
from fastapi.testclient import TestClient

from catalog.database import CatalogStore
from catalog.main import create_app


@pytest.fixture
def store():
    """An empty store, so the first product created gets id 1."""
    return CatalogStore()


@pytest.fixture
def app(store):
    return create_app(store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def product_payload():
    return {
        "name": "A",
        "category": "Видеокарты",
        "description": "d",
        "price": 100,
        "stock": 1,
        "rating": 4.5,
        "image": "u",
    }
