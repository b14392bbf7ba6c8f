from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Dict, Iterable, Optional, Tuple

from store.models import CartLine, Item
from utils.logger import get_logger

_logger = get_logger(__name__)


class Cart:
    """
    Ordered item-id -> line mapping. Item ids are unique per cart:
    adding an item that is already present grows its quantity.

    Totals are recomputed from the lines on every call.
    """

    def __init__(self, lines: Iterable[CartLine] = ()):
        self._lines: Dict[str, CartLine] = {}
        self.replace_all(lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._lines

    def __repr__(self) -> str:
        return f"Cart(lines={len(self._lines)}, quantity={self.total_quantity()})"

    # ---------------------------
    # Mutations
    # ---------------------------

    def add_item(self, item: Item, quantity: int) -> None:
        if quantity <= 0:
            raise ValueError("Quantity must be a positive number.")
        line = self._lines.get(item.id)
        if line is None:
            self._lines[item.id] = CartLine(item=item, quantity=quantity)
        else:
            self._lines[item.id] = replace(line, quantity=line.quantity + quantity)
        _logger.debug(f"added {quantity} x {item.id}")

    def remove_item(self, item_id: str) -> None:
        if self._lines.pop(item_id, None) is not None:
            _logger.debug(f"removed {item_id}")

    def update_quantity(self, item_id: str, new_quantity: int) -> None:
        """Set the quantity of an existing line; absent ids are ignored.

        Non-positive quantities are rejected, use remove_item to drop a line.
        """
        if new_quantity <= 0:
            raise ValueError("Quantity must be a positive number.")
        line = self._lines.get(item_id)
        if line is None:
            return
        self._lines[item_id] = replace(line, quantity=new_quantity)
        _logger.debug(f"set {item_id} quantity to {new_quantity}")

    def replace_all(self, lines: Iterable[CartLine]) -> None:
        """Swap the whole content, used when loading or saving a stored cart."""
        new_lines: Dict[str, CartLine] = {}
        for line in lines:
            if line.item.id in new_lines:
                raise ValueError(f"Duplicate item id {line.item.id!r} in cart lines.")
            if line.quantity <= 0:
                raise ValueError(
                    f"Cart line {line.item.id!r} has non-positive quantity."
                )
            new_lines[line.item.id] = line
        self._lines = new_lines

    def clear(self) -> None:
        self._lines = {}

    # ---------------------------
    # Queries
    # ---------------------------

    def get_line(self, item_id: str) -> Optional[CartLine]:
        return self._lines.get(item_id)

    def is_empty(self) -> bool:
        return not self._lines

    def snapshot_lines(self) -> Tuple[CartLine, ...]:
        """Lines in insertion order. CartLine is frozen so the tuple is a safe copy."""
        return tuple(self._lines.values())

    def total_quantity(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def total_price(self) -> Decimal:
        return sum((line.subtotal for line in self._lines.values()), Decimal("0"))
