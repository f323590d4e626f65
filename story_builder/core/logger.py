"""
Logging for the story service.

Everything goes through the ``story_builder`` logger: INFO and above to
stdout, DEBUG and above to ``logs/app.log``, errors also to ``logs/error.log``.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

LOGS_DIR = Path(__file__).resolve().parent.parent.parent / "logs"
LOGS_DIR.mkdir(exist_ok=True)

FILE_FORMAT = logging.Formatter(
    '%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
CONSOLE_FORMAT = logging.Formatter('%(asctime)s | %(levelname)-8s | %(message)s', datefmt='%H:%M:%S')

MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 5


def _file_handler(filename: str, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        LOGS_DIR / filename,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding='utf-8',
    )
    handler.setLevel(level)
    handler.setFormatter(FILE_FORMAT)
    return handler


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("story_builder")
    logger.setLevel(logging.DEBUG)

    # Re-imports (uvicorn reload, tests) must not stack handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.INFO)
    console.setFormatter(CONSOLE_FORMAT)

    logger.addHandler(console)
    logger.addHandler(_file_handler("app.log", logging.DEBUG))
    logger.addHandler(_file_handler("error.log", logging.ERROR))
    return logger


logger = setup_logger()


def get_logger(name: str) -> logging.Logger:
    """Child of the service logger, e.g. ``story_builder.writer``."""
    return logging.getLogger(f"story_builder.{name}")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float):
    get_logger("api").info(f"{method} {path} | {status_code} | {duration_ms:.2f}ms")


def log_upstream_call(kind: str, model: str, status_code: int = None, duration_ms: float = 0.0, details: str = ""):
    """One line per text or image upstream call."""
    status = status_code if status_code is not None else "n/a"
    get_logger(f"upstream.{kind}").info(f"{model} | status={status} | {duration_ms:.2f}ms | {details}")


def log_error(message: str, error: Exception = None, context: dict = None):
    """Error with its traceback (when given) and key=value context."""
    suffix = "".join(f" | {key}={value}" for key, value in (context or {}).items())
    if error is not None:
        message = f"{message}: {error}"
    get_logger("error").error(f"{message}{suffix}", exc_info=error)
