from decimal import Decimal
from typing import List, Literal, Optional, Sequence

from store.models import CartLine, Order

ALIGN_MAP = {
    "l": ":---",
    "c": ":---:",
    "r": "---:",
}


def generate_markdown_table(
    headers: Optional[List[str]],
    rows: List[List[str]],
    aligns: Optional[List[Literal["l", "c", "r"]]] = None,
) -> str:
    """
    Generate a Markdown table.

    Args:
        headers: column headers, or None to use the first row as headers.
        rows: rows, each a list of cells (converted with str()).
        aligns: 'l', 'c' or 'r' per column, defaults to all 'c'.
    """
    if not rows:
        return ""

    if not headers:
        headers, rows = rows[0], rows[1:]

    headers = [str(h) for h in headers]
    if aligns is None:
        aligns = ["c"] * len(headers)
    elif len(aligns) != len(headers):
        raise ValueError("Length of aligns must match number of headers.")

    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join(ALIGN_MAP[a] for a in aligns) + " |",
    ]
    lines += ["| " + " | ".join(str(cell) for cell in row) + " |" for row in rows]
    return "\n".join(lines)


def format_price(amount: Decimal, currency: str = "Php.") -> str:
    return f"{currency} {amount:,.2f}"


def render_cart_markdown(lines: Sequence[CartLine], currency: str = "Php.") -> str:
    """Cart summary, most recently added first."""
    if not lines:
        return "Your cart is empty."
    rows = [
        [
            line.item.id,
            line.item.name,
            line.quantity,
            format_price(line.item.unit_price, currency),
            format_price(line.subtotal, currency),
        ]
        for line in reversed(lines)
    ]
    total_qty = sum(line.quantity for line in lines)
    total = sum((line.subtotal for line in lines), Decimal("0"))
    md = generate_markdown_table(
        ["ID", "Product", "Qty", "Item Price", "Subtotal"],
        rows,
        ["l", "l", "r", "r", "r"],
    )
    md += f"\n\nTotal items in cart: **{total_qty}**  \n"
    md += f"Total Price: **{format_price(total, currency)}**"
    return md


def render_receipt_markdown(order: Order, currency: str = "Php.") -> str:
    created = order.created_at
    header = (
        f"### Receipt: Order #{order.order_number}\n\n"
        f"Purchase Date: {created:%Y/%m/%d}  \n"
        f"Purchase Time: {created:%H:%M:%S}\n\n"
        f"**Buyer Contact Details**  \n"
        f"Name: {order.buyer_name}  \n"
        f"Phone: {order.buyer_phone}\n\n"
        f"Payment Method: {order.payment_descriptor}\n\n"
        "#### Purchased Digital Products\n\n"
    )
    rows = [
        [
            f"[Download] {p.item.id}",
            p.item.name,
            p.quantity,
            format_price(p.unit_price_at_purchase, currency),
            format_price(p.subtotal, currency),
        ]
        for p in reversed(order.lines)
    ]
    table = generate_markdown_table(
        ["Item", "Product", "Qty", "Unit Price", "Price"],
        rows,
        ["l", "l", "r", "r", "r"],
    )
    footer = (
        f"\n\nTotal Items: **{order.total_quantity}**  \n"
        f"Total Price: **{format_price(order.total_price, currency)}**"
    )
    return header + table + footer
