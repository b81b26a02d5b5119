"""
Logging setup.

Modules log through ``logging.getLogger(__name__)``; this module only
installs the handlers, once, at application startup.
"""

import logging.config
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure console logging and, when ``log_file`` is set, an appending file log.

    Args:
        level: Root log level name (e.g. "INFO", "DEBUG")
        log_file: Path of the log file; its directory is created if missing
    """
    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    }

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": log_file,
            "mode": "a",
            "encoding": "utf-8",
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": handlers,
        "root": {
            "level": level.upper(),
            "handlers": list(handlers),
        },
    })
