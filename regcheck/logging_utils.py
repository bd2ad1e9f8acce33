"""Logging configuration for regcheck processes.

Library modules only create named loggers (`regcheck.*`); handlers are
installed here, by the CLI, never at import time.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def logging_config(level: str = "INFO") -> dict[str, Any]:
    """Return a `dictConfig` mapping for regcheck and uvicorn loggers."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
            "access": {
                "()": "uvicorn.logging.AccessFormatter",
                "fmt": '%(asctime)s %(levelname)s %(client_addr)s "%(request_line)s" %(status_code)s',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
            },
        },
        "loggers": {
            "": {"handlers": ["console"], "level": level.upper()},
            "uvicorn": {"handlers": ["console"], "level": level.upper(), "propagate": False},
            "uvicorn.access": {
                "handlers": ["access"],
                "level": "INFO",
                "propagate": False,
            },
        },
    }


def configure_logging(level: str = "INFO") -> None:
    """Install console handlers for the current process."""
    logging.config.dictConfig(logging_config(level))


def uvicorn_log_config(is_dev: bool, level: str = "INFO") -> dict[str, Any]:
    """Log config passed to `uvicorn.run`.

    Dev mode logs at DEBUG so every audit event shows up; otherwise the
    configured level is used and access logs stay at INFO.
    """
    return logging_config("DEBUG" if is_dev else level)
