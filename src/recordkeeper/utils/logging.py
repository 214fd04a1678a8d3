import logging
import os

LOG_LEVEL_ENV = "RECORDKEEPER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger that writes to stderr.

    The handler is attached to the root `recordkeeper` logger once, so every
    module logger shares it. Level comes from RECORDKEEPER_LOG_LEVEL (default INFO).
    """
    root = logging.getLogger("recordkeeper")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(os.environ.get(LOG_LEVEL_ENV, "INFO").upper())
    return logging.getLogger(name)
