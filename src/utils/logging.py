"""Logging utilities for the dashboard."""

import logging
import sys
from typing import Iterable, Optional

# Libraries that log every request at INFO; kept at WARNING unless debugging.
NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Setup logging configuration for the dashboard.
    
    Streamlit re-executes the app script on every interaction, so the root
    logger is reconfigured in place instead of accumulating handlers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        format_string: Custom format string for log messages
        quiet: Logger names raised to WARNING unless ``level`` is DEBUG
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format=format_string,
        handlers=[
            logging.StreamHandler(sys.stdout),
            *([logging.FileHandler(log_file)] if log_file else [])
        ],
        force=True,
    )

    quiet_level = logging.WARNING if numeric_level > logging.DEBUG else logging.NOTSET
    for name in quiet:
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger, configuring the root logger on first use."""
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
