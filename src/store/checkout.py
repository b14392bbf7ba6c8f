from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Sequence, Tuple

from store.errors import EmptyCartError, FailureReason, ValidationFailure
from store.models import CartLine, Order, PurchasedLine


def _is_digits(value: str, min_len: int, max_len: int) -> bool:
    return value.isascii() and value.isdigit() and min_len <= len(value) <= max_len


@dataclass(frozen=True)
class BuyerDetails:
    name: str
    phone: str

    def validate(self) -> None:
        if not self.name.strip():
            raise ValidationFailure(
                FailureReason.INVALID_NAME, "name", "Name is required."
            )
        if not _is_digits(self.phone, 8, 15):
            raise ValidationFailure(
                FailureReason.INVALID_PHONE,
                "phone",
                "Invalid phone number. Please enter digits only, "
                "minimum 8 and maximum 15 characters.",
            )


class PaymentMethod(Enum):
    DEBIT_CARD = "Debit card"
    CREDIT_CARD = "Credit card"

    @property
    def label(self) -> str:
        return self.value


def parse_expiry(expiry: str) -> Optional[Tuple[int, int]]:
    """Parse MM/YY into (month, full year); None if the format is off."""
    if len(expiry) != 5 or expiry[2] != "/":
        return None
    month_str, year_str = expiry[:2], expiry[3:]
    if not (_is_digits(month_str, 2, 2) and _is_digits(year_str, 2, 2)):
        return None
    return int(month_str), 2000 + int(year_str)


@dataclass(frozen=True)
class PaymentCard:
    method: PaymentMethod
    number: str = field(repr=False)
    holder: str
    ccv: str = field(repr=False)
    expiry: str  # MM/YY

    def validate(self, today: date) -> None:
        if not _is_digits(self.number, 13, 19):
            raise ValidationFailure(
                FailureReason.INVALID_CARD_NUMBER,
                "card_number",
                "Invalid card number. Please enter digits only, "
                "between 13 and 19 characters.",
            )
        if not self.holder.strip():
            raise ValidationFailure(
                FailureReason.INVALID_CARD_HOLDER,
                "card_holder",
                "Card holder name is required.",
            )
        if not _is_digits(self.ccv, 3, 4):
            raise ValidationFailure(
                FailureReason.INVALID_CCV,
                "ccv",
                "Invalid CCV. Please enter 3 or 4 digit number.",
            )

        parsed = parse_expiry(self.expiry)
        if parsed is None:
            raise ValidationFailure(
                FailureReason.INVALID_EXPIRY,
                "expiry",
                "Invalid format. Please enter in MM/YY format.",
            )
        month, year = parsed
        if not 1 <= month <= 12:
            raise ValidationFailure(
                FailureReason.INVALID_EXPIRY,
                "expiry",
                "Invalid month. Please enter a month between 01 and 12.",
            )
        if (year, month) < (today.year, today.month):
            raise ValidationFailure(
                FailureReason.INVALID_EXPIRY, "expiry", "This card has expired."
            )

    @property
    def descriptor(self) -> str:
        """What the receipt shows, e.g. "Credit card ending in 4242"."""
        return f"{self.method.label} ending in {self.number[-4:]}"


class OrderNumberSequence:
    """
    Hands out order numbers derived from the creation time in seconds.
    Two checkouts within the same second get consecutive numbers instead
    of colliding.
    """

    def __init__(self) -> None:
        self._last: Optional[int] = None

    def next(self, when: datetime) -> int:
        number = int(when.timestamp())
        if self._last is not None and number <= self._last:
            number = self._last + 1
        self._last = number
        return number


def place_order(
    lines: Sequence[CartLine],
    buyer: BuyerDetails,
    card: PaymentCard,
    when: datetime,
    numbers: OrderNumberSequence,
) -> Order:
    """
    Validate buyer/payment input and freeze the cart lines into an Order.
    Prices are copied from the items now, later catalog changes do not
    affect the order.
    """
    if not lines:
        raise EmptyCartError()
    buyer.validate()
    card.validate(when.date())

    purchased = tuple(
        PurchasedLine(
            item=line.item,
            quantity=line.quantity,
            unit_price_at_purchase=line.item.unit_price,
        )
        for line in lines
    )
    return Order(
        order_number=numbers.next(when),
        created_at=when,
        buyer_name=buyer.name.strip(),
        buyer_phone=buyer.phone,
        payment_descriptor=card.descriptor,
        lines=purchased,
        total_price=sum((p.subtotal for p in purchased), Decimal("0")),
        total_quantity=sum(p.quantity for p in purchased),
    )
