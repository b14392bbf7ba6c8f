# provide dataclass models

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Tuple


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    unit_price: Decimal
    category: str


@dataclass(frozen=True)
class CartLine:
    item: Item
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return self.item.unit_price * self.quantity


@dataclass(frozen=True)
class PurchasedLine:
    item: Item
    quantity: int
    unit_price_at_purchase: Decimal  # unit price at time of order

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price_at_purchase * self.quantity


@dataclass(frozen=True)
class Order:
    order_number: int
    created_at: datetime
    buyer_name: str
    buyer_phone: str
    payment_descriptor: str
    lines: Tuple[PurchasedLine, ...]
    total_price: Decimal
    total_quantity: int


@dataclass(eq=False)
class Account:
    """
    A registered shopper.

    Fields:
      - email: unique key, compared exactly as entered
      - password: plaintext, compared exactly
      - stored_cart: cart lines kept while the account is logged out
      - history: placed orders, oldest first
    """

    email: str
    password: str = field(repr=False)
    stored_cart: Tuple[CartLine, ...] = ()
    history: List[Order] = field(default_factory=list)

    def add_order(self, order: Order) -> None:
        self.history.append(order)
