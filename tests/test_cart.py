"""
Tests for cart models
"""

import json
from decimal import Decimal

import pytest

from storefront.cart import Cart, LineItem
from storefront.cart.storage import deserialize_cart, serialize_cart
from storefront.services import Product


class TestLineItem:
    """Tests for LineItem dataclass."""

    def test_from_product_snapshots_metadata(self):
        product = Product(id=7, title="Tênis", price="179.90", image="shoe.jpg")

        item = LineItem.from_product(product)

        assert item.product_id == 7
        assert item.amount == 1
        assert item.title == "Tênis"
        assert item.price == Decimal("179.90")
        assert item.image == "shoe.jpg"

    def test_non_positive_amount_rejected(self):
        with pytest.raises(ValueError):
            LineItem(product_id=7, amount=0)

    @pytest.mark.parametrize("amount", [2.5, "2", True])
    def test_non_integer_amount_rejected(self, amount):
        with pytest.raises(TypeError):
            LineItem(product_id=7, amount=amount)

    def test_subtotal(self):
        item = LineItem(product_id=7, amount=3, price=139.9)

        assert item.subtotal == Decimal("419.70")

    def test_to_dict_uses_stored_record_shape(self):
        item = LineItem(product_id=7, amount=2, title="Tênis", price="10.50", image=None)

        assert item.to_dict() == {
            "id": 7,
            "title": "Tênis",
            "price": "10.50",
            "image": None,
            "amount": 2,
        }

    def test_from_dict_accepts_numeric_price(self):
        item = LineItem.from_dict({"id": 9, "title": "X", "price": 139.9, "image": "x.jpg", "amount": 1})

        assert item.price == Decimal("139.9")

    @pytest.mark.parametrize("record", [
        {"id": 7, "title": "X", "price": "abc", "amount": 1},
        {"id": 7, "title": "X", "price": None, "amount": 1},
        {"id": 7, "title": "X", "price": "-1.00", "amount": 1},
        {"id": 7, "title": "X", "price": "NaN", "amount": 1},
        {"id": 7, "title": "X", "price": "10.00", "amount": 1.9},
        {"id": 7, "title": "X", "price": "10.00", "amount": "2"},
        {"id": "7", "title": "X", "price": "10.00", "amount": 1},
    ])
    def test_from_dict_rejects_malformed_record(self, record):
        with pytest.raises(ValueError):
            LineItem.from_dict(record)


class TestCart:
    """Tests for Cart snapshots."""

    def test_empty_cart(self):
        cart = Cart()

        assert cart.size == 0
        assert cart.total_items == 0
        assert cart.total == Decimal("0")

    def test_duplicate_product_rejected(self):
        with pytest.raises(ValueError):
            Cart((LineItem(product_id=7, amount=1), LineItem(product_id=7, amount=2)))

    def test_with_item_appends(self):
        cart = Cart((LineItem(product_id=7, amount=1),))

        updated = cart.with_item(LineItem(product_id=9, amount=1))

        assert [i.product_id for i in updated] == [7, 9]
        assert cart.size == 1

    def test_with_amount_keeps_position(self):
        cart = Cart((
            LineItem(product_id=7, amount=1),
            LineItem(product_id=9, amount=1),
            LineItem(product_id=11, amount=1),
        ))

        updated = cart.with_amount(9, 4)

        assert [(i.product_id, i.amount) for i in updated] == [(7, 1), (9, 4), (11, 1)]

    def test_without(self):
        cart = Cart((LineItem(product_id=7, amount=1), LineItem(product_id=9, amount=1)))

        assert [i.product_id for i in cart.without(7)] == [9]

    def test_totals(self):
        cart = Cart((
            LineItem(product_id=7, amount=2, price="100.00"),
            LineItem(product_id=9, amount=1, price="39.90"),
        ))

        assert cart.size == 2
        assert cart.total_items == 3
        assert cart.total == Decimal("239.90")

    def test_serialization(self):
        cart = Cart((
            LineItem(product_id=7, amount=2, title="A", price="179.90", image="a.jpg"),
            LineItem(product_id=9, amount=1, title="B", price="139.90", image="b.jpg"),
        ))

        restored = deserialize_cart(serialize_cart(cart))

        assert restored == cart

    def test_deserialize_rejects_malformed(self):
        with pytest.raises(ValueError):
            deserialize_cart("not json")
        with pytest.raises(TypeError):
            deserialize_cart(json.dumps({"id": 7}))
        with pytest.raises(KeyError):
            deserialize_cart(json.dumps([{"title": "no id"}]))
        with pytest.raises(ValueError):
            deserialize_cart(json.dumps([{"id": 7, "price": "10.00", "amount": 0}]))
