"""Logging setup for the debate panel."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Configure the package logger with a single console handler.

    Streamlit re-executes the script on every interaction, so repeated calls
    replace the handler instead of stacking new ones.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")

    package_logger = logging.getLogger("debate_core")
    package_logger.handlers.clear()
    package_logger.setLevel(numeric)
    package_logger.propagate = False

    handler = logging.StreamHandler()
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    package_logger.addHandler(handler)

    package_logger.debug("Logging initialized: level=%s", level)
