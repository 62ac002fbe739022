from typing import Optional, List, Literal
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session
from pydantic import BaseModel, ConfigDict

from config import settings
from database import get_db
from models.product import Product

# Schema for product display in the shop
class ProductShopResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    category: str
    price: float
    image_url: str


router = APIRouter(
    prefix="/shop",
    tags=["Shop"]
)

# Categories the shop can filter on, in configured order, limited to those with active products
@router.get("/categories", response_model=List[str])
def get_categories(db: Session = Depends(get_db)):
    rows = db.query(Product.category).distinct().filter(Product.is_active == True).all()  # noqa: E712
    present = {r[0] for r in rows}
    return [c for c in settings.PRODUCT_CATEGORIES if c in present]

@router.get("/products", response_model=List[ProductShopResponse])
def list_products_for_shop(
    q: Optional[str] = Query(None, description="Search by name or description"),
    category: Optional[str] = Query(None, description="Filter by category"),
    sort_by: Literal["name", "price", "created_at"] = "name",
    order: Literal["asc", "desc"] = "asc",
    db: Session = Depends(get_db),
):
    query = db.query(Product).filter(Product.is_active == True)  # noqa: E712

    if q:
        like = f"%{q}%"
        query = query.filter(
            or_(
                Product.name.ilike(like),
                Product.description.ilike(like),
            )
        )

    # "all" is what the shop's category tabs send for no filter
    if category and category.lower() != "all":
        query = query.filter(Product.category == category.strip().lower())

    allowed = {
        "name": Product.name,
        "price": Product.price,
        "created_at": Product.created_at,
    }
    sort_col = allowed[sort_by]
    query = query.order_by(sort_col.desc() if order == "desc" else sort_col.asc())

    return query.all()

@router.get("/products/{product_id}", response_model=ProductShopResponse)
def get_shop_product(product_id: str, db: Session = Depends(get_db)):
    product = db.query(Product).filter(Product.id == product_id, Product.is_active == True).first()  # noqa: E712
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
