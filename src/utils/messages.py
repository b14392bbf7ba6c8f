from textual.message import Message


class QuitRequestedMessage(Message):
    """
    broadcasted when the app is about to quit
    """

    bubble = True


class UserLogoutMessage(Message):
    """
    broadcasted when the shopper asks to log out
    """

    bubble = True


class CartChangedMessage(Message):
    """
    Fired by cart line widgets after an edit or removal,
    and by CartScreen after clearing the cart.
    """

    bubble = True


class NewOrderMessage(Message):
    """
    Fired when checkout produced an order.
    Must be posted at App level.
    """

    bubble = True

    def __init__(self, order_number: int) -> None:
        super().__init__()
        self.order_number = order_number


class ModeSwitchedMessage(Message):
    """
    fired whenever switch_mode is called
    must be fired from app level
    """

    bubble = True

    def __init__(self, old_mode: str, new_mode: str) -> None:
        super().__init__()
        self.old_mode = old_mode
        self.new_mode = new_mode
