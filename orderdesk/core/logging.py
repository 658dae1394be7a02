"""Process-wide logging setup."""

from __future__ import annotations

import logging.config

from orderdesk.core.config import Settings

DEV_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
PROD_FORMAT = "ts=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"


def configure_logging(config: Settings) -> None:
    """Configure root logging once for the running process."""
    level = "DEBUG" if config.debug else "INFO"
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": PROD_FORMAT if config.is_production else DEV_FORMAT,
                    "datefmt": "%Y-%m-%dT%H:%M:%S" if config.is_production else "%H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "orderdesk": {"level": level, "handlers": ["console"], "propagate": True},
                "httpx": {"level": "WARNING"},
            },
        }
    )
