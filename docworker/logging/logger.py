import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_current_message_id: ContextVar[str] = ContextVar("current_message_id", default="-")


class _MessageContextFilter(logging.Filter):
    """Stamps every record with the id of the queue message being handled."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.message_id = _current_message_id.get()
        return True


class Log:
    """Centralized logging with structured format.

    Records carry the worker thread name and the id of the queue message in
    flight, so interleaved output from a pooled worker stays attributable.
    """

    _logger: logging.Logger = logging.getLogger("docworker")
    _FORMAT = "%(asctime)s [%(levelname)s] [%(threadName)s] [%(message_id)s] %(message)s"

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.addFilter(_MessageContextFilter())
            handler.setFormatter(logging.Formatter(cls._FORMAT))
            cls._logger.addHandler(handler)

    @classmethod
    @contextmanager
    def message_context(cls, message_id: str) -> Iterator[None]:
        """Tag log lines emitted inside the block with message_id."""
        token = _current_message_id.set(message_id)
        try:
            yield
        finally:
            _current_message_id.reset(token)

    @classmethod
    def info(cls, message: str) -> None:
        cls._logger.info(message)

    @classmethod
    def warning(cls, message: str) -> None:
        cls._logger.warning(message)

    @classmethod
    def error(cls, message: str) -> None:
        cls._logger.error(message)

    @classmethod
    def debug(cls, message: str) -> None:
        cls._logger.debug(message)

    @classmethod
    def exception(cls, message: str) -> None:
        """Log at ERROR level with the active exception's traceback."""
        cls._logger.exception(message)
