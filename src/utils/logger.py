import logging
import os

from rich.logging import RichHandler


class CenteredFormatter(logging.Formatter):
    """Pads logger names to a shared width so messages line up."""

    longest_name_length = 12

    def __init__(self, fmt=None, datefmt=None, style="%", initial_width=12):
        super().__init__(fmt, datefmt, style)
        CenteredFormatter.longest_name_length = max(
            CenteredFormatter.longest_name_length, initial_width
        )

    def format(self, record):
        CenteredFormatter.longest_name_length = max(
            CenteredFormatter.longest_name_length, len(record.name)
        )
        # format a copy, other handlers may see the same record
        record = logging.makeLogRecord(record.__dict__)
        record.name = record.name.center(CenteredFormatter.longest_name_length)
        return super().format(record)


def get_logger(name=None) -> logging.Logger:
    """
    Returns a logger writing through RichHandler.
    Level is DEBUG when the DEBUG env var is set, INFO otherwise.
    """
    name = name or "brokestore"
    logger = logging.getLogger(name)
    log_level = logging.DEBUG if os.getenv("DEBUG") else logging.INFO
    logger.setLevel(log_level)

    if not logger.handlers:
        console_handler = RichHandler(
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            log_time_format="[%X]",
        )
        console_handler.setFormatter(CenteredFormatter("[%(name)s]  %(message)s"))
        console_handler.setLevel(log_level)
        logger.addHandler(console_handler)

        logger.propagate = False
        logger.debug(f"Logger for '{name}' ready.")

    return logger
