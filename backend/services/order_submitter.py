# backend/services/order_submitter.py
import logging
import threading
from dataclasses import dataclass
from typing import Any, Mapping, Union

from pydantic import ValidationError as PydanticValidationError

from config import settings
from models.order import Order
from schemas.order import OrderDraft
from services.cart_store import CartStore
from services.errors import ValidationError, SubmissionInProgress, DispatchError
from services.notifications import NotificationDispatcher
from services.order_store import OrderStore
from utils.formatting import money, payment_label, short_id

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    order: Order
    message: str


def validate_draft(data: Union[OrderDraft, Mapping[str, Any]]) -> OrderDraft:
    """Check checkout input, raising ValidationError with the first broken rule."""
    if isinstance(data, OrderDraft):
        data = data.model_dump(by_alias=True)
    try:
        return OrderDraft.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or None
        raise ValidationError(first["msg"], field=field) from e


def build_order_message(order: Order, store_name: str = None) -> str:
    store_name = store_name or settings.STORE_NAME
    items_list = "\n".join(
        f"{it['quantity']}x {it['name']} - {money(it['price'] * it['quantity'])}"
        for it in order.items
    )

    lines = [
        f"🍞 *NUEVO PEDIDO - {store_name}*",
        f"📋 *ID Pedido:* {short_id(order.id)}",
        "",
        f"👤 *Cliente:* {order.customer_name}",
        f"📧 *Email:* {order.customer_email}",
        f"📱 *Teléfono:* {order.customer_phone}",
        f"📍 *Dirección:* {order.delivery_address}",
        "",
        "📦 *Productos:*",
        items_list,
        "",
        f"💰 *Total:* {money(order.total)}",
        f"💳 *Forma de pago:* {payment_label(order.payment_method)}",
    ]
    if order.notes:
        lines += ["", f"📝 *Notas:* {order.notes}"]
    return "\n".join(lines).strip()


class OrderSubmitter:
    """Turns a shopper's cart plus checkout form into a persisted order.

    Steps on success, in order: one insert, one dispatch, then the ordered
    lines leave the cart.
    Only one submission may be in flight at a time; a second call while the
    first is running raises SubmissionInProgress instead of waiting.
    """

    def __init__(self, dispatcher: NotificationDispatcher):
        self.dispatcher = dispatcher
        self._in_flight = threading.Lock()

    @property
    def submitting(self) -> bool:
        return self._in_flight.locked()

    def submit(self, cart: CartStore, data, orders: OrderStore) -> SubmissionResult:
        if not self._in_flight.acquire(blocking=False):
            raise SubmissionInProgress()
        try:
            return self._submit(cart, data, orders)
        finally:
            self._in_flight.release()

    def _submit(self, cart: CartStore, data, orders: OrderStore) -> SubmissionResult:
        draft = validate_draft(data)
        # One read of the cart; total and clearing both follow these lines
        items = cart.snapshot()
        if not items:
            raise ValidationError("Cart is empty", field="items")
        total = sum(line["price"] * line["quantity"] for line in items)

        # PersistenceError propagates before any dispatch or cart change
        order = orders.create({
            "customer_name": draft.name,
            "customer_email": draft.email,
            "customer_phone": draft.phone,
            "delivery_address": draft.address,
            "notes": draft.notes,
            "payment_method": draft.payment_method,
            "items": items,
            "total": total,
            "status": "pending",
        })
        logger.info(f"Order {order.id} saved, total {order.total}")

        message = build_order_message(order)
        try:
            self.dispatcher.dispatch(message)
        except DispatchError as e:
            # The order is already saved; a lost notification is not a failed checkout
            logger.warning(f"Notification for order {order.id} not handed off: {e}")

        cart.remove_ordered(items)
        return SubmissionResult(order=order, message=message)
