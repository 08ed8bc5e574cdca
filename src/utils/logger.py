"""
src/utils/logger.py
Per-module loggers under the "lotto645" namespace: Rich on the console,
one rotating file per module name under LOG_DIR.
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from rich.logging import RichHandler

ROOT_NAME = "lotto645"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_loggers: dict[str, logging.Logger] = {}


def _level() -> int:
    return getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)


def _console_handler() -> logging.Handler:
    handler = RichHandler(rich_tracebacks=True, show_path=False, markup=False)
    handler.setLevel(logging.DEBUG)
    return handler


def _file_handler(name: str) -> logging.Handler:
    log_dir = os.getenv("LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(log_dir, f"{name}.log"),
        maxBytes=int(os.getenv("LOG_MAX_MB", "10")) * 1024 * 1024,
        backupCount=int(os.getenv("LOG_BACKUPS", "5")),
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def get_logger(name: str = ROOT_NAME) -> logging.Logger:
    """
    Cached logger for a module name such as "model.score".
    The logging name is prefixed with ROOT_NAME; the file keeps the short name.
    """
    if name in _loggers:
        return _loggers[name]

    full_name = name if name == ROOT_NAME else f"{ROOT_NAME}.{name}"
    logger = logging.getLogger(full_name)
    logger.setLevel(_level())
    # Handlers live on each module logger, so keep records off the root.
    logger.propagate = False

    if not logger.handlers:
        logger.addHandler(_console_handler())
        logger.addHandler(_file_handler(name))

    _loggers[name] = logger
    return logger
