# backend/services/errors.py
from typing import Optional


class CheckoutError(Exception):
    """Base class for failures of the checkout flow."""


class ValidationError(CheckoutError):
    # Checkout input broke a field rule; nothing was persisted
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class PersistenceError(CheckoutError):
    def __init__(self, message: str = "Could not save order"):
        super().__init__(message)
        self.message = message


class SubmissionInProgress(CheckoutError):
    def __init__(self, message: str = "An order is already being submitted"):
        super().__init__(message)
        self.message = message


class DispatchError(Exception):
    """The outbound notification could not be handed off."""


class OrderNotFound(LookupError):
    pass


class InvalidStatus(ValueError):
    pass
