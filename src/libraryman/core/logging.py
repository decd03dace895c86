"""
Loguru configuration for the application.

Every record carries the trace id of the request that produced it. Standard
library loggers from uvicorn, the webhook client and PynamoDB are redirected
to loguru so the whole process shares one format.
"""

import logging
import sys
from typing import Any

from loguru import logger

from libraryman.config import settings
from libraryman.core.trace_context import trace_id_context

__all__ = ["logger", "InterceptHandler", "intercept_standard_logging"]


def add_trace_id(record: dict[str, Any]) -> bool:
    """
    Adds the trace_id of the current request to the log record.

    Args:
        record: Loguru record

    Returns:
        True to indicate that the filter passed
    """
    trace_id = trace_id_context.get()
    record["extra"]["trace_id"] = trace_id if trace_id else "N/A"
    return True


def configure_logger() -> None:
    """Replace the default loguru sink with one driven by settings."""
    logger.remove()

    logger.add(
        sink=sys.stderr,
        level=settings.log_level.upper(),
        format=settings.log_format,
        filter=add_trace_id,
        colorize=True,
        serialize=False,
        backtrace=True,
        diagnose=settings.debug,
        enqueue=settings.logger_enqueue,
    )


configure_logger()


class InterceptHandler(logging.Handler):
    """
    Handler to redirect standard logging records to loguru.

    Usage:
        logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO)
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


INTERCEPTED_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "fastapi",
    "pynamodb",
)


def intercept_standard_logging() -> None:
    """
    Route server, webhook client and DynamoDB loggers through loguru.

    Call this once from the entry point, before the app starts serving.
    """
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO)

    for name in INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    # pynamodb logs every request at DEBUG through botocore
    logging.getLogger("botocore").setLevel(logging.WARNING)
