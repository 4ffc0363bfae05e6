"""
Structured JSON logging configuration for RentTrackr.
Every record carries the transaction id of the request that produced it.
"""

import logging
import sys
import traceback
from datetime import datetime
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from .middleware import get_transaction_id

SERVICE_NAME = "renttrackr-backend"
LOG_FORMAT = "%(timestamp)s %(level)s %(transaction_id)s %(message)s"


class StructuredFormatter(JsonFormatter):
    """JSON formatter that adds request and service fields to each record."""

    def __init__(self, *args, service_version: str = "0.1.0", **kwargs):
        super().__init__(*args, **kwargs)
        self.service_version = service_version

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now().astimezone().isoformat()
        log_record["transaction_id"] = getattr(
            record, "transaction_id", get_transaction_id()
        )
        log_record["level"] = record.levelname
        log_record["logger_name"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno

        log_record["service"] = {
            "name": SERVICE_NAME,
            "version": self.service_version,
        }

        if record.exc_info and record.exc_info[0] is not None:
            log_record["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        for field in ["msg", "args", "created", "msecs", "relativeCreated", "pathname"]:
            log_record.pop(field, None)


def build_formatter(use_json_format: bool, colored: bool = False) -> logging.Formatter:
    """Return the JSON formatter or a plain text one for local reading."""
    if use_json_format:
        return StructuredFormatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    if colored:
        return logging.Formatter(
            "\033[1;32m%(asctime)s\033[0m | "
            "\033[1;34m%(levelname)s\033[0m | "
            "\033[1;33m%(filename)s:%(lineno)d\033[0m | %(message)s"
        )
    return logging.Formatter(
        "%(asctime)s | %(levelname)s | %(transaction_id)s | "
        "%(filename)s:%(lineno)d | %(message)s"
    )


def setup_structured_logging(
    log_level: str = "INFO", use_json_format: bool = True
) -> logging.Logger:
    """
    Set up console logging for the application logger tree.

    Args:
        log_level: The logging level (DEBUG, INFO, WARNING, ERROR)
        use_json_format: Emit JSON lines instead of plain text

    Returns:
        Configured application logger
    """
    logger = logging.getLogger("renttrackr_backend")
    logger.setLevel(getattr(logging, log_level.upper()))
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level.upper()))
    console_handler.setFormatter(build_formatter(use_json_format, colored=True))
    logger.addHandler(console_handler)

    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)

    return logger
