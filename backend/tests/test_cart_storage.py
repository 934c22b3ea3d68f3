"""
Tests de la ranura clave-valor del carrito. El cliente de Redis se sustituye
con MagicMock; no hace falta un servidor.
"""
from unittest.mock import MagicMock

import pytest
import redis

from storefront.core.exceptions import PersistenceWriteFailed
from storefront.services import cart_storage
from storefront.services.cart_service import CartAggregator
from storefront.services.cart_storage import (
    InMemoryCartStorage,
    RedisCartStorage,
    cart_storage_key,
    get_cart_storage,
)

from conftest import make_item


class TestRedisCartStorage:

    def test_set_writes_single_value(self):
        client = MagicMock()
        storage = RedisCartStorage(client)

        storage.set("popandfun-cart:s1", '{"lines": []}')

        client.set.assert_called_once_with("popandfun-cart:s1", '{"lines": []}')

    def test_write_error_becomes_persistence_failure(self):
        client = MagicMock()
        client.set.side_effect = redis.ConnectionError("connection refused")

        with pytest.raises(PersistenceWriteFailed):
            RedisCartStorage(client).set("popandfun-cart:s1", "{}")

    def test_read_error_is_treated_as_missing(self):
        client = MagicMock()
        client.get.side_effect = redis.RedisError("timeout")

        assert RedisCartStorage(client).get("popandfun-cart:s1") is None

    def test_aggregator_survives_redis_outage(self):
        client = MagicMock()
        client.get.side_effect = redis.RedisError("timeout")
        client.set.side_effect = redis.RedisError("timeout")

        cart = CartAggregator(RedisCartStorage(client), "popandfun-cart:s1")
        cart.add_item(make_item("p1", offer_price=100))

        assert cart.lines[0].requested_quantity == 1
        assert cart.persisted is False


class TestStorageSelection:

    def test_memory_backend(self, test_settings):
        assert isinstance(get_cart_storage(test_settings), InMemoryCartStorage)

    def test_redis_backend_is_created_once(self, test_settings, monkeypatch):
        monkeypatch.setattr(cart_storage, "_redis_storage", None)
        settings = test_settings.model_copy(update={"CART_STORAGE_BACKEND": "Redis"})

        first = get_cart_storage(settings)

        assert isinstance(first, RedisCartStorage)
        assert get_cart_storage(settings) is first

    def test_unknown_backend(self, test_settings):
        settings = test_settings.model_copy(update={"CART_STORAGE_BACKEND": "sqlite"})

        with pytest.raises(ValueError):
            get_cart_storage(settings)

    def test_key_is_per_session(self, test_settings):
        assert cart_storage_key(test_settings, "abc") == "popandfun-cart:abc"
