"""Logging configuration using loguru.

Logs always go to stderr; stdout carries the report.
"""

import logging
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """Configure loguru for a report run.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_logs: If True, output logs as JSON lines.
    """
    # Remove default handler
    logger.remove()

    if json_logs:
        logger.add(sys.stderr, format="{message}", level=log_level, serialize=True)
    else:
        logger.add(sys.stderr, format=LOG_FORMAT, level=log_level, colorize=True)

    _intercept_standard_logging(log_level)


class InterceptHandler(logging.Handler):
    """Route standard library log records (httpx, httpcore) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _intercept_standard_logging(log_level: str) -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=log_level, force=True)
    for name in ["httpx", "httpcore"]:
        logging.getLogger(name).setLevel(log_level)
        logging.getLogger(name).handlers = [InterceptHandler()]


__all__ = ["InterceptHandler", "configure_logging", "logger"]
