# backend/routes/cart.py
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from database import get_db
from utils.audit import write_log
from utils.cart_session import get_shopper_session
from models.product import Product
from services.cart_sessions import ShopperSession
from schemas.cart import CartAddItem, CartUpdateItem, CartOut

router = APIRouter(prefix="/cart", tags=["Cart"])

def _client_ip(request: Request):
    return request.client.host if request.client else None

def _cart_to_out(shopper: ShopperSession) -> CartOut:
    return CartOut(**shopper.cart.to_dict())

@router.get("", response_model=CartOut)
def get_cart(shopper: ShopperSession = Depends(get_shopper_session)):
    return _cart_to_out(shopper)

@router.post("/add", response_model=CartOut, status_code=status.HTTP_200_OK)
def add_to_cart(
    payload: CartAddItem,
    request: Request,
    db: Session = Depends(get_db),
    shopper: ShopperSession = Depends(get_shopper_session),
):
    # Only products currently on sale can enter a cart
    product = db.query(Product).filter(
        Product.id == payload.product_id, Product.is_active == True  # noqa: E712
    ).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    item = shopper.cart.add_item(product)
    out = _cart_to_out(shopper)

    write_log(
        db,
        session_id=shopper.session_id,
        action="CART_ADD",
        resource="cart",
        status="SUCCESS",
        ip=_client_ip(request),
        meta={"product_id": product.id, "quantity": item.quantity, "cart_items": len(out.items), "total": out.total},
    )
    return out

@router.put("/items/{product_id}", response_model=CartOut)
def update_cart_item(
    product_id: str,
    payload: CartUpdateItem,
    shopper: ShopperSession = Depends(get_shopper_session),
):
    # Unknown ids are ignored, a quantity of zero or less drops the line
    shopper.cart.update_quantity(product_id, payload.quantity)
    return _cart_to_out(shopper)

@router.delete("/items/{product_id}", response_model=CartOut)
def delete_cart_item(
    product_id: str,
    shopper: ShopperSession = Depends(get_shopper_session),
):
    shopper.cart.remove_item(product_id)
    return _cart_to_out(shopper)

@router.delete("", response_model=CartOut)
def clear_cart(shopper: ShopperSession = Depends(get_shopper_session)):
    shopper.cart.clear_cart()
    return _cart_to_out(shopper)
