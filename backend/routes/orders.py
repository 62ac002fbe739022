# backend/routes/orders.py
from typing import Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Request, Query, status
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from utils.audit import write_log
from utils.cart_session import get_shopper_session
from utils.formatting import short_id
from utils.tokenJWT import require_admin
from models.users import User
from models.order import Order
from schemas.order import (
    OrderResponse, OrdersPage, OrderStatusPatch, OrderItemOut, CheckoutResponse
)
from services.cart_sessions import ShopperSession
from services.errors import (
    ValidationError, PersistenceError, SubmissionInProgress, OrderNotFound, InvalidStatus
)
from services.notifications import build_whatsapp_url
from services.order_store import OrderStore

router = APIRouter(tags=["Orders"])

def _client_ip(request: Request):
    return request.client.host if request.client else None

# Map Order model to OrderResponse schema
def _order_to_out(order: Order) -> OrderResponse:
    items = [
        OrderItemOut(
            id=str(it["id"]),
            name=it["name"],
            price=it["price"],
            quantity=it["quantity"],
            image=it.get("image"),
            line_total=round(it["price"] * it["quantity"], 2),
        )
        for it in order.items
    ]
    return OrderResponse(
        id=order.id,
        short_id=short_id(order.id),
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        customer_phone=order.customer_phone,
        delivery_address=order.delivery_address,
        notes=order.notes,
        payment_method=order.payment_method,
        status=order.status,
        total=round(order.total, 2),
        created_at=order.created_at,
        items=items,
    )


CHECKOUT_EXAMPLE = {
    "name": "Ana Gomez",
    "email": "ana@example.com",
    "phone": "3001234567",
    "address": "Calle 10 #20-30, Centro",
    "notes": "Sin azucar",
    "paymentMethod": "cash",
}


# Place an order from the shopper's cart
@router.post("/orders/checkout", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
def checkout(
    request: Request,
    payload: dict = Body(..., examples=[CHECKOUT_EXAMPLE]),
    db: Session = Depends(get_db),
    shopper: ShopperSession = Depends(get_shopper_session),
):
    # The raw body goes to the submitter so the first broken rule is reported as-is
    store = OrderStore(db)
    try:
        result = shopper.submitter.submit(shopper.cart, payload, store)
    except ValidationError as e:
        write_log(db, session_id=shopper.session_id, action="ORDER_CREATE", resource="orders",
                  status="FAIL", ip=_client_ip(request), meta={"field": e.field, "reason": e.message})
        raise HTTPException(status_code=400, detail=e.message)
    except SubmissionInProgress as e:
        raise HTTPException(status_code=409, detail=e.message)
    except PersistenceError as e:
        write_log(db, session_id=shopper.session_id, action="ORDER_CREATE", resource="orders",
                  status="FAIL", ip=_client_ip(request), meta={"reason": "persistence"})
        raise HTTPException(status_code=502, detail=e.message)

    order = result.order
    write_log(
        db, session_id=shopper.session_id, action="ORDER_CREATE", resource="orders", status="SUCCESS",
        ip=_client_ip(request), meta={"order_id": order.id, "total": order.total, "items": len(order.items)}
    )

    return CheckoutResponse(
        order_id=order.id,
        short_id=short_id(order.id),
        status=order.status,
        total=order.total,
        message=result.message,
        whatsapp_url=build_whatsapp_url(settings.WHATSAPP_NUMBER, result.message),
    )


# List all orders, newest first (admin only)
@router.get("/admin/orders", response_model=OrdersPage)
def list_orders(
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    rows, total = OrderStore(db).list(status=status_filter, page=page, page_size=page_size)
    return {"items": [_order_to_out(o) for o in rows], "total": total, "page": page, "page_size": page_size}


@router.get("/admin/orders/{order_id}", response_model=OrderResponse)
def get_order_detail(
    order_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    try:
        order = OrderStore(db).get(order_id)
    except OrderNotFound:
        raise HTTPException(status_code=404, detail="Order not found")
    return _order_to_out(order)


# Move an order through its lifecycle (admin only)
@router.patch("/admin/orders/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: str,
    payload: OrderStatusPatch,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    store = OrderStore(db)
    try:
        old_status = store.get(order_id).status
        order = store.update_status(order_id, payload.status)
    except OrderNotFound:
        raise HTTPException(status_code=404, detail="Order not found")
    except InvalidStatus as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=502, detail=e.message)

    write_log(db, user_id=admin.id, action="ORDER_STATUS_CHANGE", resource="orders", status="SUCCESS",
              ip=_client_ip(request), meta={"order_id": order.id, "old": old_status, "new": order.status})
    return _order_to_out(order)
