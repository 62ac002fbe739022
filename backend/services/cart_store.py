# backend/services/cart_store.py
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


@dataclass
class CartItem:
    id: str
    name: str
    price: float
    image: str
    quantity: int = 1

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


def _field(product: Any, name: str, default=None):
    # Products arrive as ORM rows, pydantic models or plain dicts
    if isinstance(product, dict):
        return product.get(name, default)
    return getattr(product, name, default)


class CartStore:
    """Line items selected by one shopper during one browsing session.

    Items are unique by product id and every retained item has a quantity of
    at least 1. The total is derived from the items on each read.
    """

    def __init__(self):
        self._items: List[CartItem] = []

    def _find(self, product_id: str) -> Optional[CartItem]:
        for item in self._items:
            if item.id == product_id:
                return item
        return None

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    @property
    def total(self) -> float:
        return sum(item.price * item.quantity for item in self._items)

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def add_item(self, product: Any) -> CartItem:
        product_id = str(_field(product, "id"))
        item = self._find(product_id)
        if item:
            item.quantity += 1
            return item

        image = _field(product, "image") or _field(product, "image_url") or ""
        item = CartItem(
            id=product_id,
            name=_field(product, "name"),
            price=float(_field(product, "price", 0)),
            image=image,
            quantity=1,
        )
        self._items.append(item)
        return item

    def update_quantity(self, product_id: str, new_quantity: int) -> None:
        item = self._find(product_id)
        if item is None:
            return
        if new_quantity <= 0:
            self.remove_item(product_id)
            return
        item.quantity = new_quantity

    def remove_item(self, product_id: str) -> None:
        self._items = [item for item in self._items if item.id != product_id]

    def clear_cart(self) -> None:
        self._items = []

    def remove_ordered(self, lines: List[Dict[str, Any]]) -> None:
        """Take ordered quantities out of the cart; anything added since stays."""
        for line in lines:
            item = self._find(line["id"])
            if item is not None:
                self.update_quantity(item.id, item.quantity - line["quantity"])

    def snapshot(self) -> List[Dict[str, Any]]:
        """Detached copy of the lines, safe to persist."""
        return [
            {
                "id": it.id,
                "name": it.name,
                "price": it.price,
                "quantity": it.quantity,
                "image": it.image,
            }
            for it in self._items
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [dict(asdict(it), line_total=it.line_total) for it in self._items],
            "total": self.total,
            "count": self.count,
        }
