from datetime import date
from typing import Optional

from textual import events, on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, MarkdownViewer, Select

from store.checkout import BuyerDetails, PaymentCard, PaymentMethod
from store.errors import EmptyCartError, ValidationFailure
from store.models import Order
from utils.pure import render_cart_markdown
from views.modal_dialog import DialogModal

# ValidationFailure.field -> input id
FIELD_INPUTS = {
    "name": "#input-buyer-name",
    "phone": "#input-buyer-phone",
    "card_number": "#input-card-number",
    "card_holder": "#input-card-holder",
    "ccv": "#input-card-ccv",
    "expiry": "#input-card-expiry",
}


class CheckoutModal(ModalScreen[Optional[Order]]):
    """
    Order summary plus buyer and payment details.
    Dismisses with the placed Order, or None when cancelled.
    """

    def compose(self) -> ComposeResult:
        with Vertical(id="div-checkout"):
            yield MarkdownViewer("", show_table_of_contents=False)
            with VerticalScroll(id="div-checkout-form"):
                yield Label("Name")
                yield Input(placeholder="Juan Dela Cruz", id="input-buyer-name")
                yield Label("Phone number")
                yield Input(
                    placeholder="digits only, 8 to 15", id="input-buyer-phone"
                )
                yield Label("Payment method")
                yield Select(
                    [(m.label, m) for m in PaymentMethod],
                    value=PaymentMethod.DEBIT_CARD,
                    allow_blank=False,
                    id="select-payment-method",
                )
                yield Label("Card number")
                yield Input(placeholder="13 to 19 digits", id="input-card-number")
                yield Label("Card holder name")
                yield Input(placeholder="JUAN DELA CRUZ", id="input-card-holder")
                with Horizontal(id="hort-card-extra"):
                    yield Input(
                        placeholder="CCV", password=True, id="input-card-ccv"
                    )
                    yield Input(placeholder="MM/YY", id="input-card-expiry")
            with Horizontal():
                yield Button("Go Back", id="btn-quit")
                yield Button("Place Order", id="btn-submit", variant="primary")

    async def on_mount(self):
        cart = self.app.session.cart
        header_md = "### Order Summary\n\n"
        md = render_cart_markdown(cart.snapshot_lines(), self.app.config.currency)
        await self.query_one(MarkdownViewer).document.update(header_md + md)
        self.query_one("#input-buyer-name").focus()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss(None)

    def _value(self, selector: str) -> str:
        return self.query_one(selector, Input).value.strip()

    def _read_form(self):
        buyer = BuyerDetails(
            name=self._value("#input-buyer-name"),
            phone=self._value("#input-buyer-phone"),
        )
        card = PaymentCard(
            method=self.query_one("#select-payment-method", Select).value,
            number=self._value("#input-card-number"),
            holder=self._value("#input-card-holder"),
            ccv=self._value("#input-card-ccv"),
            expiry=self._value("#input-card-expiry"),
        )
        return buyer, card

    def _show_failure(self, failure: ValidationFailure) -> None:
        for selector in FIELD_INPUTS.values():
            self.query_one(selector).remove_class("-invalid")
        bad_input = self.query_one(FIELD_INPUTS[failure.field], Input)
        bad_input.add_class("-invalid")
        bad_input.focus()
        self.notify(failure.message, severity="error")

    @on(Button.Pressed, "#btn-submit")
    @work(exclusive=True)
    async def handle_submit(self):
        buyer, card = self._read_form()
        try:
            buyer.validate()
            card.validate(date.today())
        except ValidationFailure as e:
            self._show_failure(e)
            return

        if not await self.app.push_screen_wait(
            DialogModal(
                "Place order? This cannot be undone.",
                primary_text="Yes",
                secondary_text="No",
                tone="positive",
            )
        ):
            return

        try:
            order = self.app.session.checkout(buyer, card)
        except ValidationFailure as e:
            self._show_failure(e)
            return
        except EmptyCartError as e:
            self.notify(str(e), severity="warning")
            self.dismiss(None)
            return

        self.notify(f"Order placed. Your order number is {order.order_number}.")
        self.dismiss(order)

    @on(Button.Pressed, "#btn-quit")
    def handle_quit(self):
        self.notify("Checkout cancelled.")
        self.dismiss(None)
