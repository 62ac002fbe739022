# backend/models/product.py
import uuid
from sqlalchemy import Column, String, Float, Boolean, DateTime, CheckConstraint, func
from database import Base

# Model Product
# A catalog entry shown in the shop. Orders never reference this row directly,
# they keep their own copy of name/price/image taken at checkout time.
class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(500), nullable=True)

    price = Column(Float, CheckConstraint("price >= 0"), nullable=False)
    image_url = Column(String(500), nullable=False)
    category = Column(String(50), nullable=False, index=True)

    # Hidden products stay in the table but disappear from the shop
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
