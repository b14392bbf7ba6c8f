from __future__ import annotations

from typing import Dict, Optional

from store.errors import DuplicateAccount, FailureReason, ValidationFailure
from store.models import Account
from utils.config import StoreConfig
from utils.logger import get_logger

_logger = get_logger(__name__)


class AccountDirectory:
    """
    In-memory registry of accounts keyed by email.
    Emails are matched exactly, no case folding.
    """

    def __init__(self, config: Optional[StoreConfig] = None, seed: bool = True):
        self.config = config or StoreConfig()
        self._accounts: Dict[str, Account] = {}
        if seed and self.config.seed_email:
            self._accounts[self.config.seed_email] = Account(
                email=self.config.seed_email, password=self.config.seed_password
            )

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, email: object) -> bool:
        return email in self._accounts

    # ---------------------------
    # Auth & Registration
    # ---------------------------

    def validate_email(self, email: str) -> None:
        domain = self.config.email_domain
        if not email.endswith(domain) or len(email) == len(domain):
            raise ValidationFailure(
                FailureReason.INVALID_EMAIL,
                "email",
                f"Invalid email format. It must end with {domain}.",
            )

    def validate_password(self, password: str) -> None:
        min_length = self.config.min_password_length
        if len(password) < min_length:
            raise ValidationFailure(
                FailureReason.WEAK_PASSWORD,
                "password",
                f"Password must be at least {min_length} characters long.",
            )

    def register(self, email: str, password: str) -> Account:
        """Create an account. Raises ValidationFailure or DuplicateAccount."""
        self.validate_email(email)
        self.validate_password(password)
        if email in self._accounts:
            raise DuplicateAccount(email)

        account = Account(email=email, password=password)
        self._accounts[email] = account
        _logger.info(f"Registered account {email}")
        return account

    def authenticate(self, email: str, password: str) -> Optional[Account]:
        """Return the account if email/password match; otherwise None."""
        account = self._accounts.get(email)
        if account is None or account.password != password:
            _logger.info(f"Failed login for {email}")
            return None
        return account

    def find_by_email(self, email: str) -> Optional[Account]:
        return self._accounts.get(email)
