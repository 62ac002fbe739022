# backend/schemas/product.py
from pydantic import BaseModel, Field, ConfigDict, HttpUrl
from typing import Optional, List
from datetime import datetime


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Shared base attributes for product entities
class ProductBase(ORMBase):
    name: str = Field(min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    price: float = Field(ge=0)
    image_url: HttpUrl
    category: str = Field(min_length=1)


# Schema for creating a new product
class ProductCreate(ProductBase):
    is_active: bool = True


# Schema for partial product updates
class ProductEditRequest(ORMBase):
    """Schema for PATCH requests - all fields optional."""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    price: Optional[float] = Field(None, ge=0)
    image_url: Optional[HttpUrl] = None
    category: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None


# Full product representation including ID
class ProductOut(ORMBase):
    id: str
    name: str
    description: Optional[str] = None
    price: float
    image_url: str
    category: str
    is_active: bool
    created_at: Optional[datetime] = None


# Paginated response for product listings
class ProductListPage(ORMBase):
    items: List[ProductOut]
    total: int
    page: int
    page_size: int
