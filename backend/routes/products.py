# backend/routes/products.py
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from utils.tokenJWT import require_admin
from utils.audit import write_log
from models.users import User
from models.product import Product
import schemas.product as product_schemas

router = APIRouter(prefix="/admin/products", tags=["Products"])

# ---- HELPERS ----
def _client_ip(request: Request):
    return request.client.host if request.client else None

def _norm_category(category: Optional[str]) -> Optional[str]:
    if category is None:
        return None
    c = category.strip().lower()
    if c not in settings.PRODUCT_CATEGORIES:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown category '{category}'. Allowed: {', '.join(settings.PRODUCT_CATEGORIES)}",
        )
    return c

def _get_product(db: Session, product_id: str) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# PRODUCT LIST
# =========================
@router.get("", response_model=product_schemas.ProductListPage)
def list_products(
    q: Optional[str] = Query(None, description="Search by name or description"),
    category: Optional[str] = Query(None),
    active: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    sort_by: str = Query("created_at"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    query = db.query(Product)

    if q:
        like = f"%{q}%"
        query = query.filter(or_(Product.name.ilike(like), Product.description.ilike(like)))
    if category:
        query = query.filter(Product.category == category.strip().lower())
    if active is not None:
        query = query.filter(Product.is_active == active)

    allowed = {
        "name": Product.name, "price": Product.price,
        "category": Product.category, "created_at": Product.created_at,
    }
    sort_col = allowed.get(sort_by.lower(), Product.created_at)
    query = query.order_by(sort_col.asc() if order == "asc" else sort_col.desc())

    total = query.count()
    items: List[Product] = query.offset((page - 1) * page_size).limit(page_size).all()
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/{product_id}", response_model=product_schemas.ProductOut)
def get_product(
    product_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return _get_product(db, product_id)


# =========================
# CREATE
# =========================
@router.post("", response_model=product_schemas.ProductOut, status_code=status.HTTP_201_CREATED)
def add_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    data = payload.model_dump()
    data["category"] = _norm_category(data["category"])
    data["image_url"] = str(data["image_url"])
    data["name"] = data["name"].strip()

    product = Product(**data)
    db.add(product)
    db.commit()
    db.refresh(product)

    write_log(
        db, user_id=admin.id, action="PRODUCT_CREATE", resource="products",
        status="SUCCESS", ip=_client_ip(request), meta={"id": product.id, "name": product.name}
    )
    return product


# =========================
# PARTIAL UPDATE
# =========================
@router.patch("/{product_id}", response_model=product_schemas.ProductOut)
def edit_product(
    product_id: str,
    payload: product_schemas.ProductEditRequest,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    product = _get_product(db, product_id)

    changes = payload.model_dump(exclude_unset=True)
    if "category" in changes:
        changes["category"] = _norm_category(changes["category"])
    if changes.get("image_url") is not None:
        changes["image_url"] = str(changes["image_url"])

    for key, value in changes.items():
        if value is None and key in ("name", "price", "image_url", "category", "is_active"):
            raise HTTPException(status_code=400, detail=f"{key} cannot be empty")
        setattr(product, key, value)

    db.commit()
    db.refresh(product)

    write_log(
        db, user_id=admin.id, action="PRODUCT_EDIT", resource="products",
        status="SUCCESS", ip=_client_ip(request), meta={"id": product.id, "fields": sorted(changes)}
    )
    return product


# Show or hide a product in the shop without deleting it
@router.post("/{product_id}/toggle", response_model=product_schemas.ProductOut)
def toggle_product(
    product_id: str,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    product = _get_product(db, product_id)
    product.is_active = not product.is_active
    db.commit()
    db.refresh(product)

    write_log(
        db, user_id=admin.id, action="PRODUCT_TOGGLE", resource="products",
        status="SUCCESS", ip=_client_ip(request), meta={"id": product.id, "is_active": product.is_active}
    )
    return product


# Orders keep their own item snapshot, so deleting a product never touches them
@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: str,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    product = _get_product(db, product_id)
    db.delete(product)
    db.commit()

    write_log(
        db, user_id=admin.id, action="PRODUCT_DELETE", resource="products",
        status="SUCCESS", ip=_client_ip(request), meta={"id": product_id}
    )
