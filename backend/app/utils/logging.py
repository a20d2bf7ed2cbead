"""Unified logging configuration for the MOMU backend.

Every module logs through the ``app`` parent logger, which writes to the
console and, when a logs directory is writable, to a rotating file.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from app.settings import settings

LOG_FORMAT = "[%(asctime)s.%(msecs)03d][%(levelname)s][%(filename)s:%(lineno)d]: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

APP_LOGGER_NAME = "app"


def _ensure_app_logger_configured() -> logging.Logger:
    """Attach the formatted console handler to the ``app`` logger once."""
    app_logger = logging.getLogger(APP_LOGGER_NAME)

    has_formatted_handler = any(
        type(h) is logging.StreamHandler and getattr(h, "_momu_console", False) for h in app_logger.handlers
    )
    if has_formatted_handler:
        return app_logger

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    console_handler._momu_console = True  # type: ignore[attr-defined]
    app_logger.addHandler(console_handler)

    app_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    app_logger.propagate = False

    return app_logger


def setup_logging(log_name: str = "momu") -> logging.Logger:
    """
    Add a rotating file handler to the ``app`` logger.

    Log file path: {logs_root}/{log_name}.log. When the directory cannot be
    created the logger keeps console output only.

    Args:
        log_name: File name without the .log extension

    Returns:
        The ``app.{log_name}`` logger
    """
    app_logger = _ensure_app_logger_configured()
    logger = logging.getLogger(f"{APP_LOGGER_NAME}.{log_name}")

    log_dir = _get_logs_root()
    if log_dir is None:
        app_logger.warning("No writable logs directory, file logging disabled")
        return logger

    log_file_path = os.path.join(log_dir, f"{log_name}.log")
    already_attached = any(
        isinstance(h, RotatingFileHandler) and h.baseFilename == os.path.abspath(log_file_path)
        for h in app_logger.handlers
    )
    if not already_attached:
        file_handler = RotatingFileHandler(
            log_file_path,
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        app_logger.addHandler(file_handler)
        app_logger.info(f"File logging enabled: {log_file_path}")

    logger.propagate = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module, namespaced under ``app``.

    Args:
        name: Logger name, typically __name__ of the calling module
    """
    _ensure_app_logger_configured()

    if name != APP_LOGGER_NAME and not name.startswith(f"{APP_LOGGER_NAME}."):
        name = f"{APP_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


def _get_logs_root() -> Path | None:
    """Logs directory from settings, or None if it cannot be created."""
    logs_root = settings.get_logs_root()
    if _can_create_dir(logs_root):
        return logs_root
    return None


def _can_create_dir(path: Path) -> bool:
    try:
        path.mkdir(parents=True, exist_ok=True)
        return True
    except OSError:
        return False


_ensure_app_logger_configured()
