# ==== STRUCTURED LOGGING WITH LOGURU ==== #

"""
Structured logging with loguru for the logistics back-office utilities.

This module configures JSON console output and optional rotating file
output from the application settings, forwards the standard library
``logging`` module into loguru and tags module loggers with the current
OpenTelemetry trace.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict

from loguru import logger
from opentelemetry import trace

from backoffice.settings import settings


# Third-party loggers only worth hearing about on warnings
QUIET_LOGGERS = ("httpx", "httpcore")


# ==== INITIALIZATION ==== #


class InterceptHandler(logging.Handler):
    """Forward standard library log records to loguru under their own level."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip frames inside the logging package so loguru reports the real caller
        depth = 2
        frame = logging.currentframe()
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(stdlib_logger=record.name).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def init_logging(level: str | None = None, log_dir: str | None = None) -> None:
    """Initialize structured logging with loguru.

    Installs a JSON console sink and, when a log directory is configured,
    a rotating compressed file sink. Standard library loggers are forwarded
    to loguru.

    Args:
        level: Console log level, defaults to ``settings.LOG_LEVEL``
        log_dir: Directory for rotated log files, defaults to ``settings.LOG_DIR``
    """
    level = (level or settings.LOG_LEVEL).upper()
    log_dir = log_dir or settings.LOG_DIR

    logger.remove()
    logger.add(
        sys.stdout,
        format="{message}",
        serialize=True,
        level=level,
        colorize=False,
        backtrace=True,
        diagnose=False,
    )

    if log_dir:
        logs_path = Path(log_dir)
        logs_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            logs_path / "backoffice_{time:YYYY-MM-DD}.log",
            rotation="100 MB",
            retention="30 days",
            compression="gz",
            serialize=True,
            level="DEBUG",
            enqueue=True,
            backtrace=True,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.bind(service=settings.SERVICE_NAME, env=settings.APP_ENV).info(
        "Structured logging initialized"
    )


# ==== CONTEXTUAL LOGGER ==== #


class ContextualLogger:
    """Module logger that tags every line with its name and active trace.

    Keyword arguments passed to a log call become structured fields; they
    are never interpolated into the message.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logger.bind(logger_name=name)

    def _fields(self, extra: Dict[str, Any]) -> Dict[str, Any]:
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            extra['trace_id'] = format(span_context.trace_id, '032x')
            extra['span_id'] = format(span_context.span_id, '016x')
        return extra

    def _log(self, level: str, msg: str, fields: Dict[str, Any]) -> None:
        self.logger.bind(**self._fields(fields)).log(level, msg)

    def debug(self, msg: str, **fields: Any) -> None:
        self._log("DEBUG", msg, fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._log("INFO", msg, fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self._log("WARNING", msg, fields)

    def error(self, msg: str, **fields: Any) -> None:
        self._log("ERROR", msg, fields)


def log_business_event(event_type: str, **context: Any) -> None:
    """Log a business event with structured data.

    Args:
        event_type: Type of business event
        **context: Additional business context
    """
    logger.bind(
        event_type=event_type,
        business_event=True,
        **context
    ).info(f"Business event: {event_type}")
