# backend/services/cart_sessions.py
import logging
import secrets
import threading
import time
from typing import Callable, Dict, Optional

from config import settings
from services.cart_store import CartStore
from services.notifications import NotificationDispatcher, build_dispatcher
from services.order_submitter import OrderSubmitter

logger = logging.getLogger(__name__)


class ShopperSession:
    # Everything one browsing session owns: its cart and its submission latch
    def __init__(self, session_id: str, dispatcher: NotificationDispatcher):
        self.session_id = session_id
        self.cart = CartStore()
        self.submitter = OrderSubmitter(dispatcher)
        self.last_seen = time.monotonic()

    def touch(self):
        self.last_seen = time.monotonic()


class CartSessionRegistry:
    """In-memory map of session id -> ShopperSession.

    Carts live only as long as the process and are dropped after
    `idle_minutes` without activity.
    """

    def __init__(self, dispatcher_factory: Callable[[], NotificationDispatcher] = build_dispatcher,
                 idle_minutes: int = None):
        self._dispatcher_factory = dispatcher_factory
        self._dispatcher: Optional[NotificationDispatcher] = None
        self._idle_seconds = 60 * (idle_minutes if idle_minutes is not None else settings.CART_SESSION_IDLE_MINUTES)
        self._sessions: Dict[str, ShopperSession] = {}
        self._lock = threading.Lock()

    @property
    def dispatcher(self) -> NotificationDispatcher:
        if self._dispatcher is None:
            self._dispatcher = self._dispatcher_factory()
        return self._dispatcher

    def __len__(self):
        return len(self._sessions)

    def get_or_create(self, session_id: Optional[str]) -> ShopperSession:
        with self._lock:
            self._purge_idle()
            session = self._sessions.get(session_id) if session_id else None
            if session is None:
                session_id = secrets.token_urlsafe(24)
                session = ShopperSession(session_id, self.dispatcher)
                self._sessions[session_id] = session
                logger.debug(f"New cart session {session_id[:8]}")
            session.touch()
            return session

    def drop(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def _purge_idle(self):
        now = time.monotonic()
        expired = [
            sid for sid, s in self._sessions.items()
            if now - s.last_seen > self._idle_seconds and not s.submitter.submitting
        ]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"Dropped {len(expired)} idle cart session(s)")


cart_sessions = CartSessionRegistry()

def get_cart_sessions() -> CartSessionRegistry:
    return cart_sessions
