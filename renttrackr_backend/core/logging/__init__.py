"""JSON logging with per-request transaction ids."""

from .logger_config import get_logger, setup_logging, shutdown_logging
from .middleware import RequestIdMiddleware, get_transaction_id

__all__ = [
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    "RequestIdMiddleware",
    "get_transaction_id",
]
