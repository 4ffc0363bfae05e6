"""
Per-request transaction ids.

Every request runs under a short id taken from the ``x-transaction-id``
header (or freshly generated) and echoed back, so frontend errors can be
matched with the JSON log lines of the same request.
"""

import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

TRANSACTION_HEADER = "x-transaction-id"
NO_TRANSACTION = "-"

_transaction_id: ContextVar[str | None] = ContextVar("transaction_id", default=None)


def new_transaction_id() -> str:
    return uuid.uuid4().hex[:8]


def get_transaction_id() -> str:
    """The current request's id, or ``-`` outside of a request."""
    return _transaction_id.get() or NO_TRANSACTION


class TransactionIdFilter(logging.Filter):
    """Stamps ``transaction_id`` on every record passing the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.transaction_id = get_transaction_id()
        return True


class RequestIdMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, logger: logging.Logger | None = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("renttrackr_backend.requests")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        txn_id = request.headers.get(TRANSACTION_HEADER) or new_transaction_id()
        token = _transaction_id.set(txn_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            level = logging.WARNING if response.status_code >= 500 else logging.INFO
            self.logger.log(
                level,
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            response.headers[TRANSACTION_HEADER] = txn_id
            return response
        finally:
            _transaction_id.reset(token)
