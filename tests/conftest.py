"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock, AsyncMock

# Set test environment variables
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")
os.environ.setdefault("CART_LANGUAGE", "pt")

from storefront.cart import CartStore, MemoryCartStorage  # noqa: E402
from storefront.errors import ServiceFailureError  # noqa: E402
from storefront.services import MemoryNotificationSink, Product, Stock  # noqa: E402


@pytest.fixture
def catalog():
    """Sample catalog keyed by product id"""
    return {
        7: {
            "id": 7,
            "title": "Tênis de Caminhada Leve Confortável",
            "price": 179.9,
            "image": "https://example.com/shoe-7.jpg",
        },
        9: {
            "id": 9,
            "title": "Tênis VR Caminhada Confortável",
            "price": 139.9,
            "image": "https://example.com/shoe-9.jpg",
        },
    }


@pytest.fixture
def stock():
    """Available units keyed by product id"""
    return {7: 3, 9: 5}


@pytest.fixture
def mock_api(catalog, stock):
    """Mock storefront API backed by the catalog and stock fixtures"""
    api = Mock()

    async def get_stock(product_id):
        if product_id not in stock:
            raise ServiceFailureError(f"no stock record for {product_id}")
        return Stock(id=product_id, amount=stock[product_id])

    async def get_product(product_id):
        if product_id not in catalog:
            raise ServiceFailureError(f"no product {product_id}")
        return Product(**catalog[product_id])

    api.get_stock = AsyncMock(side_effect=get_stock)
    api.get_product = AsyncMock(side_effect=get_product)
    return api


@pytest.fixture
def storage():
    return MemoryCartStorage()


@pytest.fixture
def notifier():
    return MemoryNotificationSink()


@pytest.fixture
def cart_store(mock_api, storage, notifier):
    """Loaded-from-empty cart store"""
    return CartStore(api=mock_api, storage=storage, notifier=notifier, language="pt")
