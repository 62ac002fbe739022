import re
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError
from email_validator import validate_email, EmailNotValidError
from typing import List, Optional
from datetime import datetime

PHONE_RE = re.compile(r"^[0-9]{10}$")


def _rule(message: str) -> PydanticCustomError:
    return PydanticCustomError("checkout_rule", message)


# Checkout form as typed by the shopper. Fields are checked in declaration
# order so the first broken rule is the first reported error. Omitted fields
# are blank and still go through their rule.
class OrderDraft(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", validate_default=True)
    email: str = Field(default="", validate_default=True)
    phone: str = Field(default="", validate_default=True)
    address: str = Field(default="", validate_default=True)
    notes: Optional[str] = None
    payment_method: str = Field(default="", alias="paymentMethod", validate_default=True)

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise _rule("Name must be at least 2 characters")
        if len(v) > 100:
            raise _rule("Name must be at most 100 characters")
        return v

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        v = v.strip()
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError:
            raise _rule("Email must be valid")
        if len(v) > 100:
            raise _rule("Email must be at most 100 characters")
        return v

    @field_validator("phone")
    @classmethod
    def _phone(cls, v: str) -> str:
        v = v.strip()
        if not PHONE_RE.match(v):
            raise _rule("Phone must have 10 digits")
        return v

    @field_validator("address")
    @classmethod
    def _address(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 10:
            raise _rule("Address must be more specific")
        if len(v) > 200:
            raise _rule("Address must be at most 200 characters")
        return v

    @field_validator("notes")
    @classmethod
    def _notes(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        if len(v) > 500:
            raise _rule("Notes must be at most 500 characters")
        return v or None

    @field_validator("payment_method")
    @classmethod
    def _payment_method(cls, v: str) -> str:
        if v not in ("cash", "transfer"):
            raise _rule("Payment method must be cash or transfer")
        return v


# One line of the persisted snapshot
class OrderItemOut(BaseModel):
    id: str
    name: str
    price: float
    quantity: int
    image: Optional[str] = None
    line_total: float


# Full order as shown to administrators
class OrderResponse(BaseModel):
    id: str
    short_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str
    notes: Optional[str] = None
    payment_method: str
    status: str
    total: float
    created_at: Optional[datetime] = None
    items: List[OrderItemOut]


# Schema for paginated order lists
class OrdersPage(BaseModel):
    items: List[OrderResponse]
    total: int
    page: int
    page_size: int


# Schema for updating order status
class OrderStatusPatch(BaseModel):
    status: str


# Returned to the shopper after a successful checkout
class CheckoutResponse(BaseModel):
    order_id: str
    short_id: str
    status: str
    total: float
    message: str
    whatsapp_url: str
