from math import ceil
from typing import List

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import ScreenResume
from textual.widgets import Button, DataTable, Input, Label, MarkdownViewer

from store.models import Order
from utils.pure import format_price, render_receipt_markdown
from views.base_screen import BaseScreen


class PastOrdersScreen(BaseScreen):
    """
    Customers can browse their past orders with pagination and view receipts.

    Layout:
    - Markdown receipt at the top, showing the highlighted order.
    - Orders table below (reverse chronological), page_size per page with Prev/Next.
    """

    def __init__(self) -> None:
        super().__init__()
        self.page_idx = 1
        self.page_cnt = 1
        self._orders: List[Order] = []

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical():
            yield MarkdownViewer(id="md-order-detail", show_table_of_contents=False)
            table = DataTable(id="table-orders", cursor_type="row", zebra_stripes=True)
            table.add_columns("Order No", "Date", "Payment", "Items", "Total")
            yield table
        with Horizontal(id="hort-table-control"):
            yield Button("<", id="btn-prev")
            yield Input("1", id="input-page", type="integer")
            yield Label(" / 1", id="label-total-page-cnt")
            yield Button(">", id="btn-next")

    def on_mount(self) -> None:
        self._load_orders(1)

    @on(ScreenResume)
    def handle_refresh(self):
        self._load_orders(1)

    @on(DataTable.RowHighlighted)
    def handle_row_highlight(self, event: DataTable.RowHighlighted) -> None:
        self._render_detail(self._find_order(event.row_key.value))

    def _find_order(self, order_number: str):
        for order in self._orders:
            if str(order.order_number) == order_number:
                return order
        return None

    def _refresh_buttons(self) -> None:
        self.query_one("#btn-prev", Button).disabled = self.page_idx <= 1
        self.query_one("#btn-next", Button).disabled = self.page_idx >= self.page_cnt

    @on(Button.Pressed, "#btn-prev")
    def handle_prev(self) -> None:
        if self.page_idx > 1:
            self._load_orders(self.page_idx - 1)

    @on(Button.Pressed, "#btn-next")
    def handle_next(self) -> None:
        if self.page_idx < self.page_cnt:
            self._load_orders(self.page_idx + 1)

    @on(Input.Submitted, "#input-page")
    def handle_page_input(self, ev: Input.Submitted) -> None:
        if ev.value and ev.value.isdigit():
            self._load_orders(max(1, min(int(ev.value), self.page_cnt)))

    def _load_orders(self, page: int) -> None:
        session = self.app.session
        # newest first
        history: List[Order] = []
        if session.is_logged_in:
            history = list(reversed(session.purchase_history()))
        page_size = self.app.config.page_size

        self.page_cnt = max(ceil(len(history) / page_size), 1)
        self.page_idx = max(1, min(page, self.page_cnt))
        offset = (self.page_idx - 1) * page_size
        self._orders = history[offset : offset + page_size]

        currency = self.app.config.currency
        table = self.query_one(DataTable)
        table.clear()
        for o in self._orders:
            table.add_row(
                o.order_number,
                f"{o.created_at:%Y/%m/%d %H:%M:%S}",
                o.payment_descriptor,
                o.total_quantity,
                format_price(o.total_price, currency),
                key=str(o.order_number),
            )
        self.query_one("#input-page", Input).value = str(self.page_idx)
        self.query_one("#label-total-page-cnt", Label).update(f" / {self.page_cnt}")
        self._refresh_buttons()

        if self._orders:
            table.move_cursor(row=0)
            self._render_detail(self._orders[0])
        else:
            self._render_detail(None)

    def _render_detail(self, order) -> None:
        if order is None:
            md = "### No purchase history found."
            if self._orders:
                md = "### Select an order to view its receipt."
        else:
            md = render_receipt_markdown(order, self.app.config.currency)
        self.query_one("#md-order-detail", MarkdownViewer).document.update(md)
