"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Iterator, List, Optional, Tuple

from storefront.services.money import to_decimal, round_money, multiply
from storefront.services.models import Product


def _stored_int(data: dict, key: str) -> int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


def _stored_price(data: dict) -> Decimal:
    value = data["price"]
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"price must be a number, got {value!r}")
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"price must be a number, got {value!r}")
    if not price.is_finite() or price < 0:
        raise ValueError(f"price must be a non-negative number, got {value!r}")
    return price


@dataclass(frozen=True)
class LineItem:
    """
    One product in the cart.

    title/price/image are snapshotted when the product is first added and
    are not refreshed afterwards.
    """
    product_id: int
    amount: int
    title: str = ""
    price: Decimal = Decimal("0")
    image: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError(f"amount must be an integer, got {self.amount!r}")
        if self.amount < 1:
            raise ValueError(f"amount must be >= 1, got {self.amount}")
        object.__setattr__(self, "price", to_decimal(self.price))

    @classmethod
    def from_product(cls, product: Product, amount: int = 1) -> "LineItem":
        return cls(
            product_id=product.id,
            amount=amount,
            title=product.title,
            price=product.price,
            image=product.image,
        )

    @property
    def subtotal(self) -> Decimal:
        """Price for all units."""
        return round_money(multiply(self.price, self.amount))

    def to_dict(self) -> dict:
        """Convert to the stored record shape."""
        return {
            "id": self.product_id,
            "title": self.title,
            "price": str(self.price),
            "image": self.image,
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """Create from a stored record. Raises ValueError on a malformed record."""
        return cls(
            product_id=_stored_int(data, "id"),
            amount=_stored_int(data, "amount"),
            title=data.get("title", ""),
            price=_stored_price(data),
            image=data.get("image"),
        )


@dataclass(frozen=True)
class Cart:
    """Immutable snapshot of the cart, in insertion order."""
    items: Tuple[LineItem, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))
        seen = set()
        for item in self.items:
            if item.product_id in seen:
                raise ValueError(f"duplicate product in cart: {item.product_id}")
            seen.add(item.product_id)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def find(self, product_id: int) -> Optional[LineItem]:
        return next((item for item in self.items if item.product_id == product_id), None)

    def with_item(self, item: LineItem) -> "Cart":
        """New cart with item appended at the end."""
        return Cart(self.items + (item,))

    def with_amount(self, product_id: int, amount: int) -> "Cart":
        """New cart with one item's amount replaced, position unchanged."""
        return Cart(tuple(
            replace(item, amount=amount) if item.product_id == product_id else item
            for item in self.items
        ))

    def without(self, product_id: int) -> "Cart":
        return Cart(tuple(item for item in self.items if item.product_id != product_id))

    @property
    def size(self) -> int:
        """Number of distinct products."""
        return len(self.items)

    @property
    def total_items(self) -> int:
        """Total number of units in cart."""
        return sum(item.amount for item in self.items)

    @property
    def total(self) -> Decimal:
        return round_money(sum((item.subtotal for item in self.items), Decimal("0")))

    def to_list(self) -> List[dict]:
        """Convert to the stored list of records."""
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_list(cls, data: list) -> "Cart":
        if not isinstance(data, list):
            raise TypeError(f"expected a list of cart records, got {type(data).__name__}")
        return cls(tuple(LineItem.from_dict(record) for record in data))
