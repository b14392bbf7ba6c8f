from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.events import ScreenResume
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, ListItem, ListView, Markdown

from utils.messages import ModeSwitchedMessage, UserLogoutMessage
from utils.pure import format_price, generate_markdown_table
from views.modal_dialog import DialogModal, QuitDialogModal


class Sidebar(Container):
    init_mode = ""

    def compose(self) -> ComposeResult:
        yield Label("User Info", id="label-info-1")
        yield Markdown("", id="md-userinfo")
        yield Button("Log out", id="btn-logout", variant="error")
        yield Label("Menu", id="label-info-2")
        yield ListView(
            *[
                ListItem(Label(v), id="list-menu-item-" + k)
                for k, v in self.app.CUSTOMER_MODES.items()
            ],
            id="list-menu",
        )

    async def on_mount(self):
        self.init_mode = self.app.current_mode
        await self.refresh_info()
        self.highlight_item(self.init_mode)

    async def refresh_info(self) -> None:
        """Re-render account and cart figures from the session."""
        session = self.app.session
        found = self.query("#md-userinfo")
        if not found:
            return
        md_userinfo = found.first(Markdown)
        if not session.is_logged_in:
            await md_userinfo.update("")
            return
        table_rows = [
            ["Email", session.account.email],
            ["In Cart", session.cart.total_quantity()],
            [
                "Cart Total",
                format_price(session.cart.total_price(), self.app.config.currency),
            ],
            ["Orders", len(session.account.history)],
        ]
        md_table_str = generate_markdown_table(None, table_rows, ["l", "l"])
        await md_userinfo.update(md_table_str)

    async def on_list_view_selected(self, event: ListView.Selected):
        selected_mode = event.item.id.removeprefix("list-menu-item-")
        self.highlight_item(self.init_mode)
        if self.app.current_mode != selected_mode:
            self.app.post_message(
                ModeSwitchedMessage(self.app.current_mode, selected_mode)
            )
            await self.app.switch_mode(selected_mode)

    @on(Button.Pressed, "#btn-logout")
    @work()
    async def handle_logout(self):
        if not await self.app.push_screen_wait(
            DialogModal(
                "Are you sure you want to log out?",
                primary_text="Yes",
                secondary_text="No",
                tone="warning",
            )
        ):
            return

        self.post_message(UserLogoutMessage())

    def highlight_item(self, mode_str: str):
        list_menu = self.query_one("#list-menu")
        for item in list_menu.children:
            item.highlighted = mode_str in item.id


class BaseScreen(Screen):
    """
    Inherited by all screens, contains common elements like
    headers, footers, sidebar, and keybindings.
    """

    BINDINGS = [
        Binding("ctrl+z", "quit", "Quit App", show=True),
    ]

    def __init__(self):
        super().__init__()

        self.configure()

    def configure(
        self,
        header_sub_title: str = "",
        show_sidebar: bool = True,
    ) -> None:
        """
        configure behavior of the base screen
        """
        self.app.title = self.app.config.store_name
        self.sub_title = header_sub_title
        for k, v in self.app.MODES.items():
            if isinstance(self, v):
                self.sub_title = self.app.CUSTOMER_MODES[k]

        self._show_sidebar = show_sidebar

    def compose(self) -> ComposeResult:
        if self._show_sidebar:
            yield Sidebar()
        yield Header()
        yield Footer(show_command_palette=False)

    @on(ScreenResume)
    async def refresh_sidebar(self) -> None:
        # account or cart may have changed while this screen was hidden
        for sidebar in self.query(Sidebar):
            await sidebar.refresh_info()

    @work()
    async def action_quit(self):
        await self.app.push_screen_wait(QuitDialogModal())
