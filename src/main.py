from typing import Optional

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import LoadingIndicator

from store.accounts import AccountDirectory
from store.catalog import Catalog
from store.session import Session
from utils.config import StoreConfig, load_config
from utils.logger import get_logger
from utils.messages import (
    ModeSwitchedMessage,
    NewOrderMessage,
    QuitRequestedMessage,
    UserLogoutMessage,
)
from views.scr_cart import CartScreen
from views.scr_catalog import CatalogScreen
from views.scr_login import LoginScreen
from views.scr_past_orders import PastOrdersScreen

_logger = get_logger(__name__)


class StorefrontApp(App):
    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
    ]

    MODES = {
        "catalog": CatalogScreen,
        "cart": CartScreen,
        "past_orders": PastOrdersScreen,
    }

    CUSTOMER_MODES = {
        "catalog": "Browse Products",
        "cart": "Digital Shopping Cart",
        "past_orders": "Purchase History",
    }

    CSS_PATH = [
        "styles/index.tcss",
        "styles/login.tcss",
        "styles/catalog.tcss",
        "styles/cart.tcss",
        "styles/past_orders.tcss",
    ]

    session: Session

    def __init__(
        self, config: Optional[StoreConfig] = None, session: Optional[Session] = None
    ):
        super().__init__()
        self.config = config or load_config()
        self.session = session or Session(
            Catalog.default(), AccountDirectory(self.config)
        )

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()

    async def on_mount(self) -> None:
        self.title = self.config.store_name
        self.main_flow()

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    @on(UserLogoutMessage)
    def handle_user_logout(self):
        if self.session.is_logged_in:
            self.session.logout()
        self.notify("Logout successful.")
        self.main_flow()

    @on(NewOrderMessage)
    def handle_new_order(self, message: NewOrderMessage):
        _logger.info(f"Order {message.order_number} added to purchase history")

    @on(ModeSwitchedMessage)
    def handle_mode_switched(self, message: ModeSwitchedMessage):
        _logger.debug(f"mode {message.old_mode} -> {message.new_mode}")

    @on(QuitRequestedMessage)
    def handle_quit(self):
        self.session.exit()
        _logger.info("Exiting program. Goodbye!")
        self.exit()

    @work(exclusive=True, group="main-flow")
    async def main_flow(self):
        await self.push_screen_wait(LoginScreen())
        if not self.session.is_logged_in or self.current_mode == "catalog":
            return
        self.post_message(ModeSwitchedMessage(self.current_mode, "catalog"))
        await self.switch_mode("catalog")


def main() -> None:
    StorefrontApp().run()


if __name__ == "__main__":
    main()
