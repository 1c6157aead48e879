import os
import logging
import logging.config
from pathlib import Path

VERBOSE_FMT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"

_configured = False


def build_logging_config(level: str = None, log_dir: str = None) -> dict:
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_dir = log_dir or os.getenv("LOG_DIR")

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "verbose",
        },
    }
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        handlers["app_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "verbose",
            "filename": str(Path(log_dir) / "lms.log"),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "encoding": "utf-8",
        }
        handlers["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "verbose",
            "filename": str(Path(log_dir) / "error.log"),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {"format": VERBOSE_FMT, "datefmt": DATE_FMT},
        },
        "handlers": handlers,
        "loggers": {
            "lms": {
                "handlers": list(handlers),
                "level": level,
                "propagate": False,
            },
            "uvicorn.error": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
    }


def configure_logging(level: str = None, log_dir: str = None) -> None:
    """Apply the logging config once per process."""
    global _configured
    if _configured:
        return
    logging.config.dictConfig(build_logging_config(level, log_dir))
    _configured = True
