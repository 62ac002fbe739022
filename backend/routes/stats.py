# backend/routes/stats.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from pydantic import BaseModel
from typing import List

from database import get_db
from utils.tokenJWT import require_admin
from models.users import User
from models.product import Product
from services.order_store import OrderStore
from services import analytics

router = APIRouter(
    prefix="/stats",
    tags=["Stats"]
)

# === Pydantic Response Schemas ===

class StatsSummary(BaseModel):
    total_products: int
    total_orders: int
    pending_orders: int
    total_revenue: float

class DailyRevenue(BaseModel):
    date: str
    revenue: float

class DailyRevenueResponse(BaseModel):
    data: List[DailyRevenue]

class StatusCount(BaseModel):
    status: str
    count: int

class OrdersByStatusResponse(BaseModel):
    data: List[StatusCount]

class TopProduct(BaseModel):
    product_id: str
    product_name: str
    total_quantity_sold: int

class TopProductsResponse(BaseModel):
    data: List[TopProduct]


# Order totals and items are JSON snapshots, so aggregation happens in Python
# over the order rows rather than in SQL.

# === Dashboard Summary ===

@router.get("/summary", response_model=StatsSummary)
def get_stats_summary(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    total_products = db.query(Product).count()
    return StatsSummary(**analytics.summary(OrderStore(db).all(), total_products))

# === Chart Data ===

@router.get("/daily-revenue", response_model=DailyRevenueResponse)
def get_daily_revenue_stats(
    days: int = Query(7, ge=1, le=90),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    return DailyRevenueResponse(data=analytics.daily_revenue(OrderStore(db).all(), days=days))

@router.get("/orders-by-status", response_model=OrdersByStatusResponse)
def get_orders_by_status(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    return OrdersByStatusResponse(data=analytics.orders_by_status(OrderStore(db).all()))

# === Top 5 Products ===

@router.get("/top-products", response_model=TopProductsResponse)
def get_top_products_stats(
    limit: int = Query(5, ge=1, le=50),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    return TopProductsResponse(data=analytics.top_products(OrderStore(db).all(), limit=limit))
