"""Storefront API Models - Pydantic models for stock and catalog responses."""
from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from storefront.services.money import to_decimal as _to_decimal


class Stock(BaseModel):
    """Units of a product currently available system-wide."""
    product_id: int = Field(validation_alias=AliasChoices("id", "productId", "product_id"))
    amount: int

    class Config:
        extra = "ignore"


class Product(BaseModel):
    """Product metadata as served by the catalog."""
    id: int
    title: str
    price: Decimal
    image: Optional[str] = None

    class Config:
        extra = "ignore"  # Catalog may carry fields the cart does not snapshot

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        if v is None:
            raise ValueError("price is required")
        return _to_decimal(v)
