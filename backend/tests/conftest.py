"""
Fixtures compartidas de los tests.

Ningún test necesita PostgreSQL ni Redis: el carrito usa el almacenamiento en
memoria y las llamadas CRUD se sustituyen con AsyncMock.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from storefront.api import deps
from storefront.core.config import Settings
from storefront.core.exceptions import PersistenceWriteFailed
from storefront.main import app
from storefront.schemas.product_schema import CatalogItem
from storefront.services.cart_service import CartAggregator
from storefront.services.cart_storage import InMemoryCartStorage


class FailingStorage(InMemoryCartStorage):
    """Lee normalmente pero toda escritura falla."""

    def set(self, key, value):
        raise PersistenceWriteFailed("disk full")


def make_item(id="p1", quantity=5, offer_price=100, **overrides) -> CatalogItem:
    data = {
        "id": id,
        "title": f"Product {id}",
        "category": "Toys",
        "original_price": max(offer_price, 150),
        "offer_price": offer_price,
        "images": [f"https://img.example.com/{id}.jpg"],
        "color_variants": None,
        "quantity": quantity,
        "created_at": 1700000000000,
    }
    data.update(overrides)
    return CatalogItem(**data)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        CART_STORAGE_BACKEND="memory",
        ADMIN_TOKEN="admin-secret",
        RAZORPAY_KEY_ID="rzp_test_key",
        RAZORPAY_KEY_SECRET="rzp_test_secret",
        WHATSAPP_NUMBER="910000000000",
    )


@pytest.fixture
def storage() -> InMemoryCartStorage:
    return InMemoryCartStorage()


@pytest.fixture
def cart(storage) -> CartAggregator:
    return CartAggregator(storage, "popandfun-cart:test")


@pytest.fixture
def payment_link_service():
    service = MagicMock()
    service.create_payment_link = AsyncMock(return_value="https://rzp.io/i/abc123")
    return service


@pytest.fixture
def db_session():
    return MagicMock(name="AsyncSession")


@pytest.fixture
def client(test_settings, storage, payment_link_service, db_session):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_settings] = lambda: test_settings
    app.dependency_overrides[deps.get_storage] = lambda: storage
    app.dependency_overrides[deps.get_payment_link_service] = lambda: payment_link_service

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(test_settings):
    return {"X-Admin-Token": test_settings.ADMIN_TOKEN}
