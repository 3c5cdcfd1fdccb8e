"""
Notification Sinks

Surface user-facing error messages (the storefront's toast) without
blocking the cart. notify() never raises to its caller.
"""

import asyncio
import os
from typing import List, Optional, Set

import httpx

from storefront.logging import get_logger

logger = get_logger(__name__)

TELEGRAM_TOKEN = os.environ.get("TELEGRAM_TOKEN", "")
TELEGRAM_API_URL = "https://api.telegram.org"
MAX_MESSAGE_LENGTH = 4096


class NotificationSink:
    """Fire-and-forget channel for user-facing messages."""

    def notify(self, message: str) -> None:
        raise NotImplementedError


class LogNotificationSink(NotificationSink):
    """Writes messages to the log. Default sink."""

    def notify(self, message: str) -> None:
        logger.warning(f"[toast] {message}")


class MemoryNotificationSink(NotificationSink):
    """Keeps messages in memory, newest last."""

    def __init__(self):
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()


def _truncate_message(text: str, max_length: int = MAX_MESSAGE_LENGTH) -> str:
    """Truncate message to Telegram's limit."""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


class TelegramNotificationSink(NotificationSink):
    """
    Delivers messages to a Telegram chat through the Bot API.

    Each message is sent from a background task on the running event loop;
    delivery failures are logged and dropped.
    """

    def __init__(
        self,
        chat_id: int,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.chat_id = chat_id
        self.token = token or TELEGRAM_TOKEN
        self.timeout = timeout
        self._transport = transport
        self._pending: Set[asyncio.Task] = set()

    def notify(self, message: str) -> None:
        if not self.token:
            logger.warning("TELEGRAM_TOKEN not set, dropping notification")
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, dropping notification")
            return
        task = loop.create_task(self._send(message))
        # Hold a reference until the task finishes
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _send(self, message: str) -> bool:
        url = f"{TELEGRAM_API_URL}/bot{self.token}/sendMessage"
        payload = {"chat_id": self.chat_id, "text": _truncate_message(message)}
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(url, json=payload, timeout=self.timeout)
            if response.status_code != 200:
                error_text = response.text[:200] if response.text else "No response body"
                logger.warning(f"Telegram API error {response.status_code} for chat {self.chat_id}: {error_text}")
                return False
            return True
        except httpx.HTTPError as e:
            logger.warning(f"Failed to deliver notification to {self.chat_id}: {e}")
            return False

    async def drain(self) -> None:
        """Wait for in-flight deliveries (used on shutdown)."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
