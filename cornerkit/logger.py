"""
Logging setup shared by the package and the pipeline driver.

Library modules call ``get_logger(__name__)`` and only log at DEBUG level
from per-frame code.  The driver calls ``configure_logging`` once.
"""

import logging
import sys

_FMT = "%(asctime)s [%(levelname)-5s] %(name)-20s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level="INFO", log_file=None) -> logging.Logger:
    """Attach console (and optional file) handlers to the root logger.

    Parameters
    ----------
    level : str or int
        Level for the console handler.
    log_file : str, optional
        When given, everything from DEBUG upwards is also written here.

    Returns
    -------
    logging.Logger
        The ``cornerkit`` logger.
    """
    formatter = logging.Formatter(_FMT, datefmt=_DATE_FMT)
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Avoid duplicate handlers when called more than once
    if not root.handlers:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(level)
        console.setFormatter(formatter)
        root.addHandler(console)

        if log_file is not None:
            file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    return get_logger("cornerkit")


def get_logger(name: str) -> logging.Logger:
    """Return a named child logger (e.g. ``get_logger(__name__)``)."""
    return logging.getLogger(name)
