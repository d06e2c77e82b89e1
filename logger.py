"""Logging configuration for Ledgerwise.

Application logs go to a dated file and the console. The HTTP and tracing
libraries are noisy at INFO, so they are held at WARNING unless the app
itself runs at DEBUG.
"""

import logging
from datetime import date
from config import Config

NOISY_LOGGERS = ("httpx", "httpcore", "openai", "langfuse")


def setup_logging(config: Config) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.

    Returns:
        Configured ledgerwise logger.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("ledgerwise")
    logger.setLevel(config.log_level)

    # Called again from tests and long-running shells
    logger.handlers.clear()

    file_handler = logging.FileHandler(
        config.log_dir / f"ledgerwise-{date.today().isoformat()}.log"
    )
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))

    for handler in (file_handler, console_handler):
        handler.setLevel(config.log_level)
        logger.addHandler(handler)

    library_level = (
        logging.DEBUG if logger.getEffectiveLevel() <= logging.DEBUG else logging.WARNING
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger."""
    return logging.getLogger("ledgerwise")
