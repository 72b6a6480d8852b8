"""
Logging for the school management API.

Application records go to the console and ``school.log``; one line per HTTP
request goes to ``requests.log`` through the ``school.requests`` logger.
Files rotate at 10 MB.
"""

import logging
import logging.config
from pathlib import Path
from typing import Optional

REQUEST_LOGGER = "school.requests"

MAX_LOG_SIZE = 10 * 1024 * 1024
BACKUP_COUNT = 5

APP_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
REQUEST_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _rotating(path: Path, formatter: str, level: str = "DEBUG") -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "filename": str(path),
        "maxBytes": MAX_LOG_SIZE,
        "backupCount": BACKUP_COUNT,
        "encoding": "utf-8",
        "formatter": formatter,
        "level": level,
    }


def build_logging_config(level: str, log_dir: Optional[Path] = None) -> dict:
    """dictConfig for the API; file handlers are added only when ``log_dir`` is set."""
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "formatter": "app",
            "level": level,
        },
    }
    app_handlers = ["console"]
    request_handlers = ["console"]
    if log_dir is not None:
        handlers["app_file"] = _rotating(log_dir / "school.log", "app")
        handlers["request_file"] = _rotating(log_dir / "requests.log", "request")
        app_handlers.append("app_file")
        request_handlers.append("request_file")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "app": {"format": APP_FORMAT, "datefmt": DATE_FORMAT},
            "request": {"format": REQUEST_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": handlers,
        "loggers": {
            "": {"handlers": app_handlers, "level": "DEBUG"},
            REQUEST_LOGGER: {"handlers": request_handlers, "level": "INFO", "propagate": False},
            # request lines come from the timing middleware instead
            "uvicorn.access": {"level": "WARNING"},
            # SQL echo stays off unless explicitly raised
            "sqlalchemy.engine": {"level": "WARNING"},
        },
    }


def setup_logging(settings) -> logging.Logger:
    """Configure logging from application settings and return the root logger.

    An empty ``log_level`` means DEBUG in development and WARNING in production.
    """
    level = (settings.log_level or ("WARNING" if settings.environment == "production" else "DEBUG")).upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"

    log_dir = None
    if settings.log_to_file:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(build_logging_config(level, log_dir))
    return logging.getLogger()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_request(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    client_ip: Optional[str] = None,
) -> None:
    """Write one request line; 4xx log as warnings and 5xx as errors."""
    line = f"{method} {path} -> {status_code} ({duration_ms:.2f}ms)"
    if client_ip:
        line = f"{line} ip={client_ip}"

    if status_code >= 500:
        level = logging.ERROR
    elif status_code >= 400:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.getLogger(REQUEST_LOGGER).log(level, line)
