from typing import Dict, Literal, Tuple

from textual import events
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, MarkdownViewer

from store.models import Order
from utils.messages import QuitRequestedMessage
from utils.pure import render_receipt_markdown

ButtonVariant = Literal["primary", "default", "success", "warning", "error"]


class DialogModal(ModalScreen[bool]):
    """
    Yes/no style dialog, dismisses with True when the primary button is pressed.
    """

    VARIANT_MAP: Dict[str, Tuple[ButtonVariant, ButtonVariant]] = {
        "default": ("primary", "default"),
        "positive": ("success", "default"),
        "warning": ("warning", "default"),
        "error": ("error", "primary"),
    }

    def __init__(
        self,
        caption: str,
        primary_text: str = "OK",
        secondary_text: str = "",
        tone: Literal["default", "positive", "warning", "error"] = "default",
    ):
        super().__init__()
        self.caption = caption
        self.primary_text = primary_text
        self.secondary_text = secondary_text
        self.tone = tone

    def compose(self) -> ComposeResult:
        primary_variant, secondary_variant = DialogModal.VARIANT_MAP[self.tone]
        with Container(id="div-dialog"):
            yield Label(self.caption, id="caption")
            with Horizontal(id="dialog"):
                if self.secondary_text:
                    yield Button(
                        self.secondary_text,
                        variant=secondary_variant,
                        id="btn-secondary",
                    )
                yield Button(self.primary_text, variant=primary_variant, id="btn-primary")

    def on_mount(self):
        # destructive dialogs focus the safe choice
        if self.secondary_text and self.tone == "error":
            self.query_one("#btn-secondary").focus()
        else:
            self.query_one("#btn-primary").focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-primary":
            self.dismiss(True)
        if event.button.id == "btn-secondary":
            self.dismiss(False)


class QuitDialogModal(DialogModal):
    def __init__(self):
        super().__init__("Are you sure you want to quit?", "Yes", "No", "error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.prevent_default()
        if event.button.id == "btn-primary":
            self.post_message(QuitRequestedMessage())
            self.dismiss(True)
        else:
            self.dismiss(False)


class ReceiptModal(ModalScreen[None]):
    """
    Shows the receipt of a placed order.
    """

    def __init__(self, order: Order, currency: str = "Php.") -> None:
        super().__init__()
        self.order = order
        self.currency = currency

    def compose(self) -> ComposeResult:
        with Vertical(id="div-receipt"):
            yield MarkdownViewer(
                render_receipt_markdown(self.order, self.currency),
                show_table_of_contents=False,
            )
            yield Label(
                "Your order was successfully placed! "
                "Visit Purchase History to view and download your items."
            )
            yield Button("Close", id="btn-close", variant="primary")

    def on_mount(self) -> None:
        self.query_one("#btn-close").focus()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss(None)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-close":
            self.dismiss(None)
