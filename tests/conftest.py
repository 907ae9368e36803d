"""
pytest configuration and fixtures.
"""

import json
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from marketplace_api.app.api.gateway import HttpGateway
from marketplace_api.app.main import create_app
from marketplace_api.app.schemas.http import HttpRequest
from marketplace_api.app.schemas.product import Product
from marketplace_api.app.services.product_service import ProductService
from marketplace_api.app.services.product_store import ProductStore


def _make_product(product_id: str = "1", **overrides) -> Product:
    fields = {
        "id": product_id,
        "name": "Chair",
        "price": "25",
        "location": "Berlin",
        "description": "Wooden chair",
        "image": "https://example.com/chair.png",
        "owner": "alice",
    }
    fields.update(overrides)
    return Product(**fields)


def _make_request(method: str, url: str, body=None) -> HttpRequest:
    if isinstance(body, dict):
        body = json.dumps(body).encode("utf-8")
    return HttpRequest(method=method, url=url, body=body or b"")


@pytest.fixture
def make_product() -> Callable[..., Product]:
    """Factory for products with sensible defaults."""
    return _make_product


@pytest.fixture
def make_request() -> Callable[..., HttpRequest]:
    """Factory for HTTP records; dict bodies are JSON-encoded."""
    return _make_request


@pytest.fixture
def database_url(tmp_path) -> str:
    """Absolute path of a fresh SQLite file."""
    return str(tmp_path / "marketplace.db")


@pytest.fixture
def store(database_url: str) -> ProductStore:
    """Migrated product store on a temporary database."""
    product_store = ProductStore(database_url)
    product_store.init_db()
    return product_store


@pytest.fixture
def service(store: ProductStore) -> ProductService:
    return ProductService(store)


@pytest.fixture
def gateway(service: ProductService) -> HttpGateway:
    return HttpGateway(service)


@pytest.fixture
def client(database_url: str) -> Generator[TestClient, None, None]:
    """Test client for an app backed by a temporary database."""
    app = create_app(store=ProductStore(database_url))
    with TestClient(app) as test_client:
        yield test_client
