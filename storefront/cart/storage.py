"""Durable storage for the serialized cart."""
import json
from typing import Dict, Optional

from storefront.db import get_redis, RedisKeys
from .models import Cart


def serialize_cart(cart: Cart) -> str:
    return json.dumps(cart.to_list())


def deserialize_cart(payload: str) -> Cart:
    """Parse a stored cart. Raises ValueError, KeyError or TypeError when malformed."""
    return Cart.from_list(json.loads(payload))


class CartStorage:
    """Key-value mirror of the cart. Read once at startup, written after every commit."""

    key = RedisKeys.CART

    async def load(self) -> Optional[str]:
        raise NotImplementedError

    async def save(self, payload: str) -> None:
        raise NotImplementedError


class RedisCartStorage(CartStorage):
    """Cart mirror kept in Upstash Redis, without TTL."""

    def __init__(self, redis=None, key: Optional[str] = None):
        self._redis = redis  # Lazy initialization
        if key:
            self.key = key

    @property
    def redis(self):
        if self._redis is None:
            self._redis = get_redis()
        return self._redis

    async def load(self) -> Optional[str]:
        return await self.redis.get(self.key)

    async def save(self, payload: str) -> None:
        await self.redis.set(self.key, payload)


class MemoryCartStorage(CartStorage):
    """In-process storage, for tests and local runs."""

    def __init__(self, initial: Optional[str] = None, key: Optional[str] = None):
        if key:
            self.key = key
        self.data: Dict[str, str] = {}
        if initial is not None:
            self.data[self.key] = initial

    async def load(self) -> Optional[str]:
        return self.data.get(self.key)

    async def save(self, payload: str) -> None:
        self.data[self.key] = payload
