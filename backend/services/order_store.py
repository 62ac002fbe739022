# backend/services/order_store.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.order import Order, ORDER_STATUSES
from services.errors import PersistenceError, OrderNotFound, InvalidStatus

logger = logging.getLogger(__name__)


class OrderStore:
    """Orders table access used by checkout and by the admin surface."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, payload: Dict[str, Any]) -> Order:
        # Single insert: either the whole order row is committed or nothing is
        order = Order(**payload)
        self.db.add(order)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Order insert failed: {e}")
            raise PersistenceError() from e
        self.db.refresh(order)
        return order

    def get(self, order_id: str) -> Order:
        order = self.db.query(Order).filter(Order.id == order_id).first()
        if not order:
            raise OrderNotFound(order_id)
        return order

    def list(self, status: Optional[str] = None, page: int = 1, page_size: int = 20) -> Tuple[List[Order], int]:
        q = self.db.query(Order)
        if status:
            q = q.filter(Order.status == status)
        q = q.order_by(Order.created_at.desc())
        total = q.count()
        rows = q.offset((page - 1) * page_size).limit(page_size).all()
        return rows, total

    def all(self) -> List[Order]:
        return self.db.query(Order).all()

    def update_status(self, order_id: str, status: str) -> Order:
        if status not in ORDER_STATUSES:
            raise InvalidStatus(f"Unknown status: {status}")
        order = self.get(order_id)
        order.status = status
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Order status update failed for {order_id}: {e}")
            raise PersistenceError("Could not update order") from e
        self.db.refresh(order)
        return order
