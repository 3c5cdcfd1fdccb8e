"""Cart package: models, storage, and store."""
from .models import LineItem, Cart
from .service import CartStore, create_cart_store
from .storage import CartStorage, MemoryCartStorage, RedisCartStorage

__all__ = [
    "LineItem",
    "Cart",
    "CartStore",
    "create_cart_store",
    "CartStorage",
    "MemoryCartStorage",
    "RedisCartStorage",
]
