from textual import events, on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.validation import Number
from textual.widgets import Button, Input, Label, MarkdownViewer

from store.models import Item
from utils.pure import format_price, generate_markdown_table


class ProdDetailModal(ModalScreen[bool]):
    """
    Item detail plus quantity picker.

    From the catalog the quantity is added on top of what is already in the
    cart; with edit=True (opened from the cart) it replaces the line quantity.
    Returns True if the cart changed, False if not.
    """

    order_qty = reactive(1, init=False)

    def __init__(self, item: Item, edit: bool = False) -> None:
        super().__init__()
        self._item = item
        self._edit = edit

    def compose(self) -> ComposeResult:
        with Horizontal(id="hort-prod-detail"):
            yield MarkdownViewer("", show_table_of_contents=False)
            with Vertical():
                yield Label("Quantity")
                with Horizontal():
                    yield Button("-", id="btn-sub-qty", disabled=True)
                    yield Input(
                        value="1",
                        id="input-order-qty",
                        type="integer",
                        validators=[Number(minimum=1)],
                    )
                    yield Button("+", id="btn-add-qty")
                yield Label("", id="label-in-cart")
                with Horizontal():
                    yield Button("Go Back", id="btn-quit")
                    yield Button(
                        "Update Cart" if self._edit else "Add to Cart",
                        id="btn-addcart",
                        variant="primary",
                    )

    async def on_mount(self):
        currency = self.app.config.currency
        table_rows = [
            ["ID", self._item.id],
            ["Name", self._item.name],
            ["Category", self._item.category],
            ["Price", format_price(self._item.unit_price, currency)],
        ]
        md_table_str = generate_markdown_table(
            ["Attribute", "Value"], table_rows, ["l", "l"]
        )
        header_md = f"### Product Detail: {self._item.name}\n\n"
        await self.query_one(MarkdownViewer).document.update(header_md + md_table_str)

        line = self.app.session.cart.get_line(self._item.id)
        if line:
            self.query_one("#label-in-cart", Label).update(
                f"Already in cart: {line.quantity}"
            )
            if self._edit:
                self.order_qty = line.quantity

        self.query_one("#input-order-qty").focus()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss(False)

    @on(Input.Changed, "#input-order-qty")
    def handle_qty_input(self, message: Input.Changed) -> None:
        if message.value and message.input.is_valid:
            self.order_qty = int(message.value)

    def watch_order_qty(self, qty: int):
        self.query_one("#btn-sub-qty", Button).disabled = qty <= 1
        input_order_qty = self.query_one("#input-order-qty", Input)
        if input_order_qty.value != str(qty):
            input_order_qty.value = str(qty)

    @on(Button.Pressed, "#btn-add-qty")
    def handle_add_qty(self):
        self.order_qty += 1

    @on(Button.Pressed, "#btn-sub-qty")
    def handle_sub_qty(self):
        if self.order_qty > 1:
            self.order_qty -= 1

    @on(Button.Pressed, "#btn-quit")
    def handle_quit(self):
        self.dismiss(False)

    @on(Button.Pressed, "#btn-addcart")
    def handle_addcart(self):
        input_order_qty = self.query_one("#input-order-qty", Input)
        if not input_order_qty.is_valid or not input_order_qty.value:
            self.notify(
                "Invalid quantity. Please enter a positive number.", severity="error"
            )
            input_order_qty.focus()
            return

        cart = self.app.session.cart
        if self._edit and self._item.id in cart:
            cart.update_quantity(self._item.id, self.order_qty)
            self.app.notify("Successfully adjusted quantity of item!")
        else:
            cart.add_item(self._item, self.order_qty)
            self.app.notify(f"Successfully added {self._item.name} to cart!")

        self.dismiss(True)
