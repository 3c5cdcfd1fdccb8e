"""
RocketShoes Storefront Core

This package contains the client-side cart infrastructure:
- cart: cart store with stock validation and durable persistence
- db: Upstash Redis client
- services: storefront API client, notification sinks, money helpers
- i18n: user-facing messages

Note: Imports are lazy to keep module loading cheap.
"""

__all__ = [
    "CartStore",
    "create_cart_store",
    "get_redis",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "CartStore":
        from storefront.cart import CartStore
        return CartStore
    elif name == "create_cart_store":
        from storefront.cart import create_cart_store
        return create_cart_store
    elif name == "get_redis":
        from storefront.db import get_redis
        return get_redis
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
