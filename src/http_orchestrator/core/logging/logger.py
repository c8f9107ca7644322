"""
Structured logger for http-orchestrator.

Wraps a stdlib logger: keyword arguments become record fields, sensitive
values (cookies, credentials, tokens in URLs) are masked first.
"""

import logging
from typing import Optional, Any

from .config import LoggingConfig, LogLevel
from .formatters import get_formatter
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .handlers import create_console_handler, create_file_handler
from ..utils import mask_log_fields

ROOT_LOGGER_NAME = "http_orchestrator"


class OrchestratorLogger:
    """
    Logger used by the resolver, transports and client.

    Without a config it installs no handlers and propagates to the
    ``http_orchestrator`` logger, leaving output to the application.

    Example:
        >>> config = LoggingConfig.create(level="DEBUG", format="json")
        >>> logger = OrchestratorLogger(config)
        >>> logger.info("Redirect followed", status_code=302, hop=1)
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = ROOT_LOGGER_NAME):
        self.config = config
        self.name = name
        self._closed = False
        self._logger = logging.getLogger(name)

        if config is None:
            return

        self._previous_state = (self._logger.level, self._logger.propagate, list(self._logger.handlers))

        level = self._get_level(config.level)
        self._logger.setLevel(level)
        self._logger.propagate = False
        self._logger.handlers.clear()

        filters = []
        if config.enable_correlation_id:
            filters.append(CorrelationIdFilter())
        if config.extra_fields:
            filters.append(ExtraFieldsFilter(config.extra_fields))

        formatter = get_formatter(config.format.value)

        if config.enable_console:
            self._logger.addHandler(create_console_handler(level, formatter, filters))

        if config.enable_file and config.file_path:
            self._logger.addHandler(create_file_handler(
                file_path=config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=config.max_bytes,
                backup_count=config.backup_count,
                filters=filters
            ))

    @staticmethod
    def _get_level(level: LogLevel) -> int:
        return getattr(logging, level.value)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def _log(self, level: int, message: str, fields: dict, exc_info: bool = False) -> None:
        if not self._logger.isEnabledFor(level):
            return
        self._logger.log(level, message, extra=mask_log_fields(fields), exc_info=exc_info)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log at ERROR with the current traceback. Call from an except block."""
        self._log(logging.ERROR, message, kwargs, exc_info=True)

    def close(self) -> None:
        """
        Flush and close the handlers this logger installed.

        Idempotent. Loggers created without a config own no handlers and
        leave the shared ``http_orchestrator`` logger alone.
        """
        if self._closed:
            return
        self._closed = True

        if self.config is None:
            return

        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        level, propagate, handlers = self._previous_state
        self._logger.setLevel(level)
        self._logger.propagate = propagate
        for handler in handlers:
            self._logger.addHandler(handler)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


# Global logger instance
_default_logger: Optional[OrchestratorLogger] = None


def get_logger(config: Optional[LoggingConfig] = None) -> OrchestratorLogger:
    """
    Get the global logger, creating it on first call.

    ``config`` is only used when the logger does not exist yet.
    """
    global _default_logger

    if _default_logger is None:
        _default_logger = OrchestratorLogger(config)

    return _default_logger


def configure_logging(config: LoggingConfig) -> OrchestratorLogger:
    """Replace the global logger with one built from ``config``."""
    global _default_logger
    if _default_logger is not None:
        _default_logger.close()
    _default_logger = OrchestratorLogger(config)
    return _default_logger
