"""Logging configuration for the command-line client."""

import logging
from logging.config import dictConfig

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        }
    },
    "root": {
        "level": "WARNING",
        "handlers": ["console"],
    },
}


def configure_logging(level: str = "WARNING") -> None:
    """Send log records to stderr at the given level."""
    config = {**LOGGING_CONFIG, "root": {**LOGGING_CONFIG["root"], "level": level}}
    dictConfig(config)
    logging.getLogger(__name__).debug("Logging configured at %s", level)
