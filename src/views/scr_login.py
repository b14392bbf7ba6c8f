from textual import on
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, Input, Label, TabbedContent, TabPane

from store.errors import DuplicateAccount, ValidationFailure
from views.base_screen import BaseScreen
from views.modal_dialog import QuitDialogModal


class LoginScreen(BaseScreen):
    """
    Log in or sign up. Dismissed once the session has a logged-in account.
    """

    def __init__(self):
        super().__init__()
        self.configure(header_sub_title="Login", show_sidebar=False)

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with TabbedContent(id="super-tab-loginscr"):
            with TabPane("Log In", id="tab-login"):
                with Vertical(id="div-login"):
                    yield Label("Email")
                    yield Input(
                        placeholder="you@gmail.com", id="input-login-email"
                    )
                    yield Label("Password")
                    yield Input(
                        placeholder="*********", password=True, id="input-login-pwd"
                    )
                    with Horizontal(id="div-login-btns"):
                        yield Button("Quit", id="btn-quit")
                        yield Button("Login", id="btn-login", variant="primary")

            with TabPane("Sign Up", id="tab-signup"):
                with Vertical(id="div-reg"):
                    yield Label("Email")
                    yield Input(placeholder="you@gmail.com", id="input-reg-email")
                    yield Label("Password")
                    yield Input(
                        placeholder="at least 8 characters",
                        password=True,
                        id="input-reg-pwd",
                    )
                    with Container(id="div-reg-btns"):
                        yield Button("Sign Up", id="btn-reg", variant="primary")

    def on_mount(self):
        self.query_one("#input-login-email").focus()

    def _clear_invalid(self, *selectors: str) -> None:
        for selector in selectors:
            self.query_one(selector).remove_class("-invalid")

    @on(Input.Submitted, "#input-login-pwd")
    @on(Button.Pressed, "#btn-login")
    def handle_login_submit(self) -> None:
        self._clear_invalid("#input-login-email", "#input-login-pwd")
        email = self.query_one("#input-login-email", Input).value.strip()
        pwd = self.query_one("#input-login-pwd", Input).value

        if not email or not pwd:
            self.notify("Email or password cannot be empty!", severity="error")
            return

        account = self.app.session.login(email, pwd)
        if account:
            self.notify(f"Login successful! Hello {account.email}!")
            self.dismiss()
        else:
            self.notify("Invalid email or password.", severity="error")
            input_login_pwd = self.query_one("#input-login-pwd", Input)
            input_login_pwd.value = ""
            input_login_pwd.focus()
            input_login_pwd.add_class("-invalid")

    @on(Input.Submitted, "#input-reg-pwd")
    @on(Button.Pressed, "#btn-reg")
    def handle_registration_submit(self) -> None:
        input_email = self.query_one("#input-reg-email", Input)
        input_pwd = self.query_one("#input-reg-pwd", Input)
        self._clear_invalid("#input-reg-email", "#input-reg-pwd")
        email = input_email.value.strip()
        pwd = input_pwd.value

        if not email or not pwd:
            self.notify("Make sure all inputs are filled.", severity="error")
            return

        try:
            account = self.app.session.sign_up(email, pwd)
        except ValidationFailure as e:
            self.notify(e.message, severity="error")
            bad_input = input_email if e.field == "email" else input_pwd
            bad_input.add_class("-invalid")
            bad_input.focus()
            return
        except DuplicateAccount as e:
            self.notify(str(e), severity="error")
            input_email.add_class("-invalid")
            input_email.focus()
            return

        self.notify(f"Sign up successful! Logged in as {account.email}.")
        self.dismiss()

    @on(Button.Pressed, "#btn-quit")
    def handle_quit_(self) -> None:
        self.app.push_screen(QuitDialogModal())
