from textual import on, work
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, HorizontalGroup, VerticalScroll
from textual.events import ScreenResume
from textual.message import Message
from textual.widgets import Button, Label, Rule

from store.models import CartLine
from utils.messages import CartChangedMessage, NewOrderMessage
from utils.pure import format_price
from views.base_screen import BaseScreen
from views.modal_checkout import CheckoutModal
from views.modal_dialog import DialogModal, ReceiptModal
from views.modal_prod_detail import ProdDetailModal


class CartItemActionEditMessage(Message):
    bubble = True


class CartItemActionRemoveMessage(Message):
    bubble = True


class CartItemActionLabel(Label):
    def action_edit(self):
        self.post_message(CartItemActionEditMessage())

    def action_remove(self):
        self.post_message(CartItemActionRemoveMessage())


class CartLineWidget(HorizontalGroup):
    def __init__(self, line: CartLine, currency: str):
        super().__init__()
        self.line = line
        self.currency = currency

    def compose(self):
        item = self.line.item
        with Container(id="div-cart-item-group"):
            with Container(id="div-item"):
                yield Label(f"{item.id} - {item.name}", id="label-item-name")
                yield Label(f"x{self.line.quantity}", id="label-item-qty")
                yield Label(
                    format_price(item.unit_price, self.currency), id="label-item-price"
                )
                yield Label(
                    format_price(self.line.subtotal, self.currency),
                    id="label-item-subtotal",
                )
            with Container(id="div-actions"):
                yield CartItemActionLabel(
                    "[@click=edit()]Edit[/]", id="link-item-edit"
                )
                yield CartItemActionLabel(
                    "[@click=remove()]Remove[/]", id="link-item-remove"
                )

    @on(CartItemActionEditMessage)
    @work()
    async def handle_edit_item(self):
        if await self.app.push_screen_wait(ProdDetailModal(self.line.item, edit=True)):
            self.post_message(CartChangedMessage())

    @on(CartItemActionRemoveMessage)
    @work()
    async def handle_remove_item(self):
        remove_confirmed = await self.app.push_screen_wait(
            DialogModal(
                f"Remove {self.line.item.name} from cart?",
                primary_text="Yes",
                secondary_text="No",
                tone="warning",
            )
        )

        if remove_confirmed:
            self.app.session.cart.remove_item(self.line.item.id)
            self.post_message(CartChangedMessage())
            self.notify("Successfully removed item!", severity="information")


class CartScreen(BaseScreen):
    """
    Lists the active cart, most recently added first, with edit/remove per line.
    """

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield VerticalScroll(id="vertscroll-content")
        yield Label("Total items in cart: 0", id="label-cart-qty")
        yield Label("Total Price: 0.00", id="label-cart-total")
        yield Rule(line_style="dashed")
        with Horizontal(id="hort-buttons"):
            yield Button("Clear Cart", id="btn-clear-cart")
            yield Button("Checkout", id="btn-checkout", variant="primary")

    async def on_mount(self):
        await self.handle_cart_change()

    @on(CartChangedMessage)
    @on(ScreenResume)
    async def handle_cart_change(self):
        """
        Rebuild the line widgets whenever the cart may have changed.
        """
        cart = self.app.session.cart
        lines = cart.snapshot_lines()

        content = self.query_one("#vertscroll-content")
        shown = tuple(reversed([c.line for c in content.children]))
        if shown != lines:
            await content.remove_children()
            currency = self.app.config.currency
            await content.mount_all(
                [CartLineWidget(line, currency) for line in reversed(lines)]
            )

        content.set_class(not lines, "no-items")
        self.query_one("#label-cart-qty", Label).update(
            f"Total items in cart: {cart.total_quantity()}"
        )
        self.query_one("#label-cart-total", Label).update(
            f"Total Price: {format_price(cart.total_price(), self.app.config.currency)}"
        )
        await self.refresh_sidebar()

    @on(Button.Pressed, "#btn-clear-cart")
    @work()
    async def handle_clear_cart(self) -> None:
        if self.app.session.cart.is_empty():
            self.app.notify("Your cart is empty.", severity="warning")
            return

        remove_confirmed = await self.app.push_screen_wait(
            DialogModal(
                "Do you really want to remove all items from cart?",
                primary_text="Yes",
                secondary_text="No",
                tone="error",
            )
        )
        if remove_confirmed:
            self.app.session.cart.clear()
            self.post_message(CartChangedMessage())

    @on(Button.Pressed, "#btn-checkout")
    @work()
    async def handle_checkout(self) -> None:
        """
        Open up checkout, then show the receipt if an order was placed
        """
        if self.app.session.cart.is_empty():
            self.app.notify(
                "Your cart is empty. Cannot proceed to checkout.", severity="warning"
            )
            return

        order = await self.app.push_screen_wait(CheckoutModal())
        self.post_message(CartChangedMessage())
        if order is None:
            return

        self.app.post_message(NewOrderMessage(order.order_number))
        await self.app.push_screen_wait(
            ReceiptModal(order, self.app.config.currency)
        )
