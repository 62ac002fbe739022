# backend/utils/cart_session.py
from fastapi import Depends, Request, Response

from services.cart_sessions import CartSessionRegistry, ShopperSession, get_cart_sessions

CART_COOKIE = "cart_session"
CART_HEADER = "X-Cart-Session"

# Resolve the shopper's cart session from cookie (browsers) or header (other clients)
def get_shopper_session(
    request: Request,
    response: Response,
    registry: CartSessionRegistry = Depends(get_cart_sessions),
) -> ShopperSession:
    session_id = request.cookies.get(CART_COOKIE) or request.headers.get(CART_HEADER)
    session = registry.get_or_create(session_id)

    if session.session_id != session_id:
        response.set_cookie(CART_COOKIE, session.session_id, httponly=True, samesite="lax")
    response.headers[CART_HEADER] = session.session_id
    return session
