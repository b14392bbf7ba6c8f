from enum import Enum


class FailureReason(Enum):
    INVALID_EMAIL = "invalid_email"
    WEAK_PASSWORD = "weak_password"
    INVALID_NAME = "invalid_name"
    INVALID_PHONE = "invalid_phone"
    INVALID_CARD_NUMBER = "invalid_card_number"
    INVALID_CARD_HOLDER = "invalid_card_holder"
    INVALID_CCV = "invalid_ccv"
    INVALID_EXPIRY = "invalid_expiry"


class StoreError(Exception):
    """
    Base class for every recoverable failure reported to the shopper.
    """


class ValidationFailure(StoreError, ValueError):
    """
    Raised when operator input breaks an acceptance rule.
    `field` names the offending input so the UI can highlight it.
    """

    def __init__(self, reason: FailureReason, field: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason
        self.field = field
        self.message = message


class DuplicateAccount(StoreError):
    """Sign-up with an email that is already registered."""

    def __init__(self, email: str) -> None:
        super().__init__("User already exists.")
        self.email = email


class EmptyCartError(StoreError):
    """Checkout attempted with nothing in the cart."""

    def __init__(self) -> None:
        super().__init__("Your cart is empty. Cannot proceed to checkout.")


class SessionStateError(StoreError, RuntimeError):
    """A session transition was requested from a state that does not allow it."""
