"""
File logging with queue-based writing and rotation.
Handlers run on a listener thread so request handlers never block on disk.
"""

import logging
import os
import queue
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler

from .structured_logger import build_formatter


class FileLogger:
    """Queue-based file logger with rotation capabilities."""

    def __init__(
        self,
        log_file_path: str = "logs/app.log",
        max_bytes: int = 50 * 1024 * 1024,  # 50MB
        backup_count: int = 5,
        log_level: str = "INFO",
        use_json_format: bool = True,
    ):
        self.log_file_path = log_file_path
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.level = getattr(logging, log_level.upper())
        self.use_json_format = use_json_format
        self._log_queue: queue.Queue = queue.Queue()
        self._listener: QueueListener | None = None
        self._queue_handler: QueueHandler | None = None

        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

    def setup_file_handler(self) -> RotatingFileHandler:
        file_handler = RotatingFileHandler(
            self.log_file_path, maxBytes=self.max_bytes, backupCount=self.backup_count
        )
        file_handler.setLevel(self.level)
        file_handler.setFormatter(build_formatter(self.use_json_format))
        return file_handler

    def setup_console_handler(self) -> logging.StreamHandler:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(self.level)
        console_handler.setFormatter(
            build_formatter(self.use_json_format, colored=True)
        )
        return console_handler

    def start(self) -> None:
        """Start the listener thread that drains the queue into the handlers."""
        self._listener = QueueListener(
            self._log_queue,
            self.setup_console_handler(),
            self.setup_file_handler(),
            respect_handler_level=True,
        )
        self._listener.start()

    def get_queue_handler(self) -> QueueHandler:
        """Get the queue handler for adding to loggers."""
        if self._queue_handler is None:
            self._queue_handler = QueueHandler(self._log_queue)
            self._queue_handler.setLevel(self.level)
        return self._queue_handler

    def stop(self) -> None:
        """Flush pending records and stop the listener."""
        if self._listener:
            self._listener.stop()
            self._listener = None


def configure_external_loggers(handler: logging.Handler) -> None:
    """Route library loggers through our handler."""
    levels = {
        "sqlalchemy": logging.WARNING,
        "aiohttp": logging.WARNING,
        "asyncmy": logging.WARNING,
        "uvicorn": logging.INFO,
        "fastapi": logging.INFO,
    }
    for logger_name, level in levels.items():
        ext_logger = logging.getLogger(logger_name)
        ext_logger.handlers.clear()
        ext_logger.addHandler(handler)
        ext_logger.propagate = False
        ext_logger.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.INFO)

    logging.captureWarnings(True)
