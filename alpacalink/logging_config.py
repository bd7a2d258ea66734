"""
alpacalink Logging Configuration

Provides logging setup for applications embedding the Alpaca client:
- Console output to stdout
- Rotating file handler with size limits
- Per-device-type log level configuration

The library itself never configures handlers on import; modules only call
``logging.getLogger(__name__)``. Applications opt in with setup_logging().

Usage:
    from alpacalink.logging_config import setup_logging, get_logger

    setup_logging(log_level="DEBUG", log_file="alpacalink.log")

    logger = get_logger(__name__)
    logger.info("Dome connected")
"""

import logging
import sys
import time
import traceback
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

# Module-level constants
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5

ROOT_LOGGER_NAME = "alpacalink"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str | Path] = None,
) -> None:
    """Configure the alpacalink logger.

    Sets up console and optional file handlers. Calling it again replaces
    the previous handlers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If provided, enables file logging
                  with rotation.

    Example:
        setup_logging(log_level="DEBUG", log_file="/var/log/alpacalink.log")
    """
    level = LOG_LEVELS.get(log_level.upper(), logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT)
    )
    root_logger.addHandler(console_handler)

    if log_file:
        from logging.handlers import RotatingFileHandler

        file_path = Path(log_file)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=DEFAULT_MAX_BYTES,
            backupCount=DEFAULT_BACKUP_COUNT,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT)
        )
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the alpacalink namespace.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger instance that inherits the alpacalink configuration
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_device_level(device_type: str, level: str) -> None:
    """Set log level for a single device module.

    Example:
        set_device_level("camera", "DEBUG")
        set_device_level("observingconditions", "WARNING")
    """
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.devices.{device_type}")
    logger.setLevel(LOG_LEVELS.get(level.upper(), logging.INFO))


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    level: int = logging.ERROR,
    include_traceback: bool = True,
) -> None:
    """Log an exception with its type and, optionally, its traceback.

    The traceback goes into ``extra["traceback"]`` so structured handlers
    can pick it up without it cluttering the console line.
    """
    extra = {"exception_type": type(exc).__name__}
    if include_traceback:
        extra["traceback"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    logger.log(level, f"{message}: {type(exc).__name__}: {exc}", extra=extra)


@contextmanager
def log_timing(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG,
    warn_threshold_sec: Optional[float] = None,
) -> Iterator[None]:
    """Log start, completion and duration of an operation.

    Completion is logged even when the block raises. A warning is emitted
    when the elapsed time exceeds warn_threshold_sec.

    Example:
        with log_timing(logger, "GET camera/0/imageready", warn_threshold_sec=2.0):
            ...
    """
    logger.log(level, f"{operation} started", extra={"operation": operation})
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.log(
            level,
            f"{operation} completed in {elapsed:.3f}s",
            extra={"operation": operation, "elapsed_seconds": elapsed},
        )
        if warn_threshold_sec is not None and elapsed > warn_threshold_sec:
            logger.warning(
                f"{operation} exceeded {warn_threshold_sec:.3f}s threshold "
                f"({elapsed:.3f}s)"
            )
