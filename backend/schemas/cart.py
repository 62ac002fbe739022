from pydantic import BaseModel
from typing import List

# Request schema for adding a product to the cart
class CartAddItem(BaseModel):
    product_id: str

# Request schema for setting a line quantity; zero or less removes the line
class CartUpdateItem(BaseModel):
    quantity: int

# Response schema for a single cart line item
class CartItemOut(BaseModel):
    id: str
    name: str
    price: float
    image: str
    quantity: int
    line_total: float

# Response schema for the entire cart summary
class CartOut(BaseModel):
    items: List[CartItemOut]
    total: float
    count: int
