from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Tuple

from store.accounts import AccountDirectory
from store.cart import Cart
from store.catalog import Catalog
from store.checkout import BuyerDetails, OrderNumberSequence, PaymentCard, place_order
from store.errors import SessionStateError
from store.models import Account, Order
from utils.logger import get_logger

_logger = get_logger(__name__)


class SessionState(Enum):
    LOGGED_OUT = "logged_out"
    LOGGED_IN = "logged_in"
    TERMINATED = "terminated"


class Session:
    """
    The one live shopping session of the process.

    Owns the active cart and binds at most one account to it. Cart contents
    move between the account's stored cart and the active cart at login and
    logout, so an account only ever sees its own cart.
    """

    def __init__(
        self,
        catalog: Catalog,
        directory: AccountDirectory,
        clock: Callable[[], datetime] = datetime.now,
        order_numbers: Optional[OrderNumberSequence] = None,
    ):
        self.catalog = catalog
        self.directory = directory
        self.cart = Cart()
        self._clock = clock
        self._order_numbers = order_numbers or OrderNumberSequence()
        self._account: Optional[Account] = None
        self._state = SessionState.LOGGED_OUT

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def account(self) -> Optional[Account]:
        return self._account

    @property
    def is_logged_in(self) -> bool:
        return self._state is SessionState.LOGGED_IN

    def _require(self, state: SessionState, action: str) -> None:
        if self._state is not state:
            raise SessionStateError(f"Cannot {action} while {self._state.value}.")

    # ---------------------------
    # Transitions
    # ---------------------------

    def login(self, email: str, password: str) -> Optional[Account]:
        """Bind the matching account and load its stored cart.
        Returns None on bad credentials, leaving the session untouched.
        """
        self._require(SessionState.LOGGED_OUT, "log in")
        account = self.directory.authenticate(email, password)
        if account is None:
            return None
        self.cart.replace_all(account.stored_cart)
        self._bind(account)
        _logger.info(f"{email} logged in with {len(self.cart)} stored cart line(s)")
        return account

    def sign_up(self, email: str, password: str) -> Account:
        """Register and log in right away; the new account starts with an empty cart."""
        self._require(SessionState.LOGGED_OUT, "sign up")
        account = self.directory.register(email, password)
        self.cart.clear()
        self._bind(account)
        _logger.info(f"{email} signed up and logged in")
        return account

    def logout(self) -> None:
        """Save the active cart onto the account, then clear it."""
        self._require(SessionState.LOGGED_IN, "log out")
        account = self._account
        account.stored_cart = self.cart.snapshot_lines()
        self.cart.clear()
        self._account = None
        self._state = SessionState.LOGGED_OUT
        _logger.info(
            f"{account.email} logged out, stored {len(account.stored_cart)} cart line(s)"
        )

    def checkout(self, buyer: BuyerDetails, card: PaymentCard) -> Order:
        """
        Turn the active cart into an Order on the current account.

        Raises EmptyCartError or ValidationFailure before anything changes;
        on success the order is in the history and the cart is empty.
        """
        self._require(SessionState.LOGGED_IN, "check out")
        order = place_order(
            self.cart.snapshot_lines(),
            buyer,
            card,
            self._clock(),
            self._order_numbers,
        )
        self._account.add_order(order)
        self.cart.clear()
        _logger.info(
            f"Order {order.order_number} placed by {self._account.email}: "
            f"{order.total_quantity} item(s), total {order.total_price:.2f}"
        )
        return order

    def exit(self) -> None:
        """End the process session. Nothing is saved; the cart is dropped."""
        if self._state is SessionState.TERMINATED:
            return
        self.cart.clear()
        self._account = None
        self._state = SessionState.TERMINATED
        _logger.debug("session terminated")

    # ---------------------------
    # Queries
    # ---------------------------

    def purchase_history(self) -> Tuple[Order, ...]:
        """Orders of the current account, oldest first."""
        self._require(SessionState.LOGGED_IN, "view purchase history")
        return tuple(self._account.history)

    def _bind(self, account: Account) -> None:
        self._account = account
        self._state = SessionState.LOGGED_IN
