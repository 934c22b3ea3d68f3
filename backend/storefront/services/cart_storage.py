# backend/storefront/services/cart_storage.py
"""
Ranura clave-valor donde se guarda el carrito de cada sesión.

El carrito se serializa entero y se escribe con una sola operación, de modo
que un lector nunca ve un estado a medio actualizar.
"""
import logging
from typing import Dict, Optional

import redis

from storefront.core.config import Settings
from storefront.core.exceptions import PersistenceWriteFailed

logger = logging.getLogger(__name__)


class InMemoryCartStorage:
    """Guarda los carritos en un diccionario del proceso. Útil en desarrollo y tests."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class RedisCartStorage:
    """Guarda cada carrito como un único valor JSON en Redis."""

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisCartStorage":
        client = redis.Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            decode_responses=True,
        )
        return cls(client)

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(key)
        except redis.RedisError as e:
            logger.error(f"Error leyendo el carrito '{key}' de Redis: {e}")
            return None

    def set(self, key: str, value: str) -> None:
        try:
            self.client.set(key, value)
        except redis.RedisError as e:
            raise PersistenceWriteFailed(f"Redis write failed for '{key}': {e}") from e


_memory_storage = InMemoryCartStorage()
_redis_storage: Optional[RedisCartStorage] = None


def get_cart_storage(settings: Settings):
    """Devuelve el almacenamiento configurado en CART_STORAGE_BACKEND (lazy para Redis)."""
    global _redis_storage
    backend = settings.CART_STORAGE_BACKEND.lower()
    if backend == "memory":
        return _memory_storage
    if backend == "redis":
        if _redis_storage is None:
            _redis_storage = RedisCartStorage.from_settings(settings)
        return _redis_storage
    raise ValueError(f"CART_STORAGE_BACKEND desconocido: {settings.CART_STORAGE_BACKEND}")


def cart_storage_key(settings: Settings, session_id: str) -> str:
    """Genera la clave del carrito de una sesión."""
    return f"{settings.CART_STORAGE_KEY}:{session_id}"
