"""
Storefront API Client

Talks to the stock and product catalog endpoints:
- GET /stock/{product_id}    -> {"id": int, "amount": int}
- GET /products/{product_id} -> {"id": int, "title": str, "price": ..., "image": str}

Every transport or validation problem surfaces as ServiceFailureError.
"""
import os
from typing import Optional

import httpx
from pydantic import ValidationError

from storefront.errors import ERROR_SERVICE_UNAVAILABLE, ServiceFailureError
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.models import Product, Stock

logger = get_logger(__name__)

STOREFRONT_API_URL = os.environ.get("STOREFRONT_API_URL", "http://localhost:3333")
STOREFRONT_API_TIMEOUT = float(os.environ.get("STOREFRONT_API_TIMEOUT", "10"))


class StorefrontAPI:
    """Async client for the stock and catalog services."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or STOREFRONT_API_URL).rstrip("/")
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazily create the shared httpx client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(STOREFRONT_API_TIMEOUT, connect=5.0),
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
                transport=self._transport,
            )
        return self._http_client

    async def _get_json(self, path: str) -> dict:
        client = await self._get_http_client()
        try:
            response = await client.get(path)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"{path} returned {e.response.status_code}")
            raise ServiceFailureError(f"{ERROR_SERVICE_UNAVAILABLE}: {path} -> {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.warning(f"Request to {path} failed: {e}")
            raise ServiceFailureError(f"{ERROR_SERVICE_UNAVAILABLE}: {path}") from e
        except ValueError as e:
            # Body was not JSON
            raise ServiceFailureError(f"Malformed response from {path}") from e

    async def get_stock(self, product_id: int) -> Stock:
        """Fetch current available quantity for a product."""
        data = await self._get_json(f"/stock/{product_id}")
        try:
            return Stock.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Malformed stock record for product {sanitize_id_for_logging(product_id)}: {e}")
            raise ServiceFailureError(f"Malformed stock record for product {product_id}") from e

    async def get_product(self, product_id: int) -> Product:
        """Fetch product metadata (title, price, image)."""
        data = await self._get_json(f"/products/{product_id}")
        try:
            return Product.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Malformed product record {sanitize_id_for_logging(product_id)}: {e}")
            raise ServiceFailureError(f"Malformed product record {product_id}") from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
