import logging
import sys

from library_transfer.config import LOG_LEVEL


def configure_logging(level: int | None = None) -> None:
    """
    Configure root logging for the application.

    - Logs go to stdout
    - Simple, readable format with time, level, and logger name
    - Level defaults to LOG_LEVEL from the environment
    """
    if level is None:
        level = getattr(logging, LOG_LEVEL, logging.INFO)

    root = logging.getLogger()

    # Avoid adding handlers multiple times
    if root.handlers:
        root.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root.addHandler(handler)
    root.setLevel(level)
