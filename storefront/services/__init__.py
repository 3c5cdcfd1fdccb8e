"""Storefront collaborators: API client, notifications, money helpers."""
from .api import StorefrontAPI
from .models import Product, Stock
from .notifications import (
    LogNotificationSink,
    MemoryNotificationSink,
    NotificationSink,
    TelegramNotificationSink,
)

__all__ = [
    "StorefrontAPI",
    "Product",
    "Stock",
    "NotificationSink",
    "LogNotificationSink",
    "MemoryNotificationSink",
    "TelegramNotificationSink",
]
