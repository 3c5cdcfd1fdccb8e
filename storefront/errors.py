"""
Cart Errors

Exception types raised at the collaborator boundary and absorbed by the
cart store, plus shared log message constants.
"""

# Log message constants
ERROR_INSUFFICIENT_STOCK = "Requested amount exceeds available stock"
ERROR_PRODUCT_NOT_IN_CART = "Product not in cart"
ERROR_SERVICE_UNAVAILABLE = "Storefront service unavailable"
ERROR_CART_STORAGE = "Cart storage unavailable"


class CartError(Exception):
    """Base class for cart failures."""


class InsufficientStockError(CartError):
    """Requested quantity exceeds the stock available system-wide."""

    def __init__(self, product_id: int, requested: int, available: int):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"{ERROR_INSUFFICIENT_STOCK}: product={product_id} "
            f"requested={requested} available={available}"
        )


class CartItemNotFoundError(CartError):
    """Operation targets a product that is not in the cart."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"{ERROR_PRODUCT_NOT_IN_CART}: {product_id}")


class ServiceFailureError(CartError):
    """Stock or catalog lookup failed (transport error or malformed response)."""


class CartStorageError(CartError):
    """Writing the cart mirror to durable storage failed."""
