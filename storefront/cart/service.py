"""Cart store: stock-checked mutations with a durable mirror."""
import asyncio
from typing import Callable, List, Optional

from storefront.errors import (
    ERROR_CART_STORAGE,
    CartItemNotFoundError,
    CartStorageError,
    InsufficientStockError,
    ServiceFailureError,
)
from storefront.i18n import get_text
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.api import StorefrontAPI
from storefront.services.notifications import LogNotificationSink, NotificationSink
from .models import Cart, LineItem
from .storage import CartStorage, RedisCartStorage, deserialize_cart, serialize_cart

logger = get_logger(__name__)

CartListener = Callable[[Cart], None]


class CartStore:
    """
    Holds the shopper's cart and keeps its durable mirror in sync.

    Features:
    - Stock is checked before every add / amount change
    - Mutations run one at a time per store
    - Memory and storage change together or not at all
    - Failures never reach the caller; they become notifications

    Call load() once before use (or build the store with create_cart_store).
    """

    def __init__(
        self,
        api: Optional[StorefrontAPI] = None,
        storage: Optional[CartStorage] = None,
        notifier: Optional[NotificationSink] = None,
        language: Optional[str] = None,
    ):
        self.api = api or StorefrontAPI()
        self.storage = storage or RedisCartStorage()
        self.notifier = notifier or LogNotificationSink()
        self.language = language
        self._cart = Cart()
        self._lock = asyncio.Lock()
        self._listeners: List[CartListener] = []
        self._loaded = False

    @property
    def cart(self) -> Cart:
        """Last committed cart."""
        return self._cart

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> Cart:
        """Seed memory from storage. Malformed or unreadable data yields an empty cart."""
        try:
            payload = await self.storage.load()
        except Exception as e:
            logger.error(f"Failed to read stored cart: {e}")
            payload = None

        cart = Cart()
        if payload:
            try:
                cart = deserialize_cart(payload)
            except (ValueError, KeyError, TypeError) as e:
                logger.warning(f"Corrupted stored cart, starting empty: {e}")

        self._cart = cart
        self._loaded = True
        logger.info(f"Cart loaded with {cart.size} item(s)")
        return cart

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Call listener with the new cart after each commit. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def add_product(self, product_id: int) -> bool:
        """Add one unit of a product if stock allows. Returns True when the cart changed."""
        async with self._lock:
            try:
                await self._ensure_loaded()
                stock = await self.api.get_stock(product_id)
                current = self._cart
                existing = current.find(product_id)

                if existing:
                    # The new total must not exceed availability
                    if stock.amount <= existing.amount:
                        raise InsufficientStockError(product_id, existing.amount + 1, stock.amount)
                    updated = current.with_amount(product_id, existing.amount + 1)
                else:
                    if stock.amount <= 0:
                        raise InsufficientStockError(product_id, 1, stock.amount)
                    product = await self.api.get_product(product_id)
                    if product.id != product_id:
                        raise ServiceFailureError(f"Catalog returned product {product.id} for {product_id}")
                    updated = current.with_item(LineItem.from_product(product))

                await self._commit(updated)
                return True
            except InsufficientStockError as e:
                logger.info(str(e))
                self._notify("insufficient_stock")
            except (ServiceFailureError, CartStorageError) as e:
                logger.error(f"Failed to add product {sanitize_id_for_logging(product_id)}: {e}")
                self._notify("add_product_failed")
            except Exception as e:
                logger.exception(f"Unexpected error adding product {sanitize_id_for_logging(product_id)}: {e}")
                self._notify("add_product_failed")
            return False

    async def remove_product(self, product_id: int) -> bool:
        """Remove a product from the cart. Returns True when the cart changed."""
        async with self._lock:
            try:
                await self._ensure_loaded()
                current = self._cart
                if current.find(product_id) is None:
                    raise CartItemNotFoundError(product_id)
                await self._commit(current.without(product_id))
                return True
            except CartItemNotFoundError as e:
                logger.warning(str(e))
                self._notify("remove_product_failed")
            except CartStorageError as e:
                logger.error(f"Failed to remove product {sanitize_id_for_logging(product_id)}: {e}")
                self._notify("remove_product_failed")
            return False

    async def update_product_amount(self, product_id: int, amount: int) -> bool:
        """
        Set a product's amount exactly, if stock allows.

        A non-integer amount or amount <= 0 is a silent no-op; use remove_product
        to drop an item. Returns True when the cart changed.
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            return False

        async with self._lock:
            try:
                stock = await self.api.get_stock(product_id)
                if stock.amount < amount:
                    raise InsufficientStockError(product_id, amount, stock.amount)

                await self._ensure_loaded()
                current = self._cart
                if current.find(product_id) is None:
                    raise CartItemNotFoundError(product_id)

                await self._commit(current.with_amount(product_id, amount))
                return True
            except InsufficientStockError as e:
                logger.info(str(e))
                self._notify("insufficient_stock")
            except CartItemNotFoundError as e:
                logger.warning(str(e))
                self._notify("update_amount_failed")
            except (ServiceFailureError, CartStorageError) as e:
                logger.error(f"Failed to update amount of product {sanitize_id_for_logging(product_id)}: {e}")
                self._notify("update_amount_failed")
            except Exception as e:
                logger.exception(f"Unexpected error updating product {sanitize_id_for_logging(product_id)}: {e}")
                self._notify("update_amount_failed")
            return False

    async def _ensure_loaded(self) -> None:
        """Load the stored cart before the first mutation."""
        if not self._loaded:
            await self.load()

    async def _commit(self, cart: Cart) -> None:
        """Persist first, then publish; a failed write leaves memory untouched."""
        try:
            await self.storage.save(serialize_cart(cart))
        except Exception as e:
            raise CartStorageError(f"{ERROR_CART_STORAGE}: {e}") from e

        self._cart = cart

        for listener in list(self._listeners):
            try:
                listener(cart)
            except Exception:
                logger.exception("Cart listener failed")

    def _notify(self, message_key: str) -> None:
        try:
            self.notifier.notify(get_text(message_key, self.language))
        except Exception:
            logger.exception("Notification sink failed")


async def create_cart_store(
    api: Optional[StorefrontAPI] = None,
    storage: Optional[CartStorage] = None,
    notifier: Optional[NotificationSink] = None,
    language: Optional[str] = None,
) -> CartStore:
    """Build a cart store and load the stored cart into it."""
    store = CartStore(api=api, storage=storage, notifier=notifier, language=language)
    await store.load()
    return store
