"""
Logging system for http-orchestrator.

Example:
    >>> from http_orchestrator.core.logging import configure_logging, LoggingConfig
    >>> logger = configure_logging(LoggingConfig.create(level="DEBUG", format="colored"))
    >>> logger.debug("Hop sent", method="GET", url="https://api.com", hop=0)
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import OrchestratorLogger, get_logger, configure_logging
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
)
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "OrchestratorLogger",
    "get_logger",
    "configure_logging",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
