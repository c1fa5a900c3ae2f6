"""Logging configuration for the broker."""
import logging

from rich.logging import RichHandler


def setup_logging(level="INFO", fmt="%(message)s"):
    """Route log records through rich on the root logger."""
    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter(fmt))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # Per-request connection chatter drowns out refresh messages
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name):
    """Get a logger instance."""
    return logging.getLogger(name)
