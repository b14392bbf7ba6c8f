import os
from dataclasses import dataclass

from utils.logger import get_logger

_logger = get_logger(__name__)


@dataclass(frozen=True)
class StoreConfig:
    """
    Runtime knobs for the storefront, read once at startup.

    Fields:
      - store_name: title shown in the header
      - email_domain: suffix every sign-up email must end with
      - min_password_length: shortest password accepted at sign-up
      - currency: label printed in front of prices
      - seed_email / seed_password: demo account created at startup,
        skipped when seed_email is empty
      - page_size: orders per page in purchase history
    """

    store_name: str = "National Brokestore"
    email_domain: str = "@gmail.com"
    min_password_length: int = 8
    currency: str = "Php."
    seed_email: str = "alex_trisha@gmail.com"
    seed_password: str = "inteprogfinals"
    page_size: int = 5


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        _logger.warning(f"{name}={raw!r} is not an integer, using {default}")
        return default
    if value < 1:
        _logger.warning(f"{name}={raw!r} must be positive, using {default}")
        return default
    return value


def load_config() -> StoreConfig:
    """Build a StoreConfig from STORE_* environment variables."""
    defaults = StoreConfig()
    return StoreConfig(
        store_name=os.getenv("STORE_NAME", defaults.store_name),
        email_domain=os.getenv("STORE_EMAIL_DOMAIN", defaults.email_domain),
        min_password_length=_env_int(
            "STORE_MIN_PASSWORD_LENGTH", defaults.min_password_length
        ),
        currency=os.getenv("STORE_CURRENCY", defaults.currency),
        seed_email=os.getenv("STORE_SEED_EMAIL", defaults.seed_email),
        seed_password=os.getenv("STORE_SEED_PASSWORD", defaults.seed_password),
        page_size=_env_int("STORE_PAGE_SIZE", defaults.page_size),
    )
