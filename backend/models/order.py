import uuid
from sqlalchemy import Column, String, Float, DateTime, JSON, func
from database import Base

ORDER_STATUSES = ("pending", "confirmed", "completed", "cancelled")
PAYMENT_METHODS = ("cash", "transfer")

class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Customer contact and delivery details
    customer_name = Column(String(100), nullable=False)
    customer_email = Column(String(100), nullable=False, index=True)
    customer_phone = Column(String(20), nullable=False)
    delivery_address = Column(String(200), nullable=False)
    notes = Column(String(500), nullable=True)
    payment_method = Column(String(20), nullable=False, default="cash")

    # Point-in-time copy of the cart lines: [{id, name, price, quantity, image}]
    items = Column(JSON, nullable=False)
    total = Column(Float, nullable=False)

    status = Column(String(20), nullable=False, default="pending", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
