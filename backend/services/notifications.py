# backend/services/notifications.py
import logging
from urllib.parse import quote

import httpx

from config import settings
from services.errors import DispatchError

logger = logging.getLogger(__name__)

WHATSAPP_BASE_URL = "https://wa.me/"


def build_whatsapp_url(number: str, message: str) -> str:
    # Deep link the shopper's client opens to send the prefilled message
    return f"{WHATSAPP_BASE_URL}{number}?text={quote(message, safe='')}"


class NotificationDispatcher:
    """Best-effort hand-off of an order message to a messaging channel.

    Callers never read a result. Implementations raise DispatchError when the
    hand-off visibly fails; delivery itself is never confirmed.
    """

    def dispatch(self, message: str) -> None:
        raise NotImplementedError


class LogDispatcher(NotificationDispatcher):
    # Default hand-off: the client opens the WhatsApp link itself
    def __init__(self, destination: str):
        self.destination = destination

    def dispatch(self, message: str) -> None:
        logger.info(f"Order message ready for {self.destination} ({len(message)} chars)")


class WebhookDispatcher(NotificationDispatcher):
    def __init__(self, url: str, destination: str, timeout: float = 5.0):
        self.url = url
        self.destination = destination
        self.timeout = timeout

    def dispatch(self, message: str) -> None:
        payload = {"to": self.destination, "text": message}
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(self.url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Notification webhook error: {e}")
            raise DispatchError(str(e)) from e


def build_dispatcher() -> NotificationDispatcher:
    if settings.NOTIFY_WEBHOOK_URL:
        return WebhookDispatcher(
            settings.NOTIFY_WEBHOOK_URL,
            settings.WHATSAPP_NUMBER,
            timeout=settings.NOTIFY_TIMEOUT_SECONDS,
        )
    return LogDispatcher(settings.WHATSAPP_NUMBER)
