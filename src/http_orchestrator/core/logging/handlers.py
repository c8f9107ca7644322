"""
Handlers installed by OrchestratorLogger: stdout and a rotating file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Sequence

_MB = 1024 * 1024


def _attach(handler, level: int, formatter: logging.Formatter,
            filters: Optional[Sequence[logging.Filter]]):
    handler.setLevel(level)
    handler.setFormatter(formatter)
    for record_filter in filters or ():
        handler.addFilter(record_filter)
    return handler


def create_console_handler(
    level: int,
    formatter: logging.Formatter,
    filters: Optional[Sequence[logging.Filter]] = None
) -> logging.StreamHandler:
    return _attach(logging.StreamHandler(sys.stdout), level, formatter, filters)


def create_file_handler(
    file_path: str,
    level: int,
    formatter: logging.Formatter,
    max_bytes: int = 10 * _MB,
    backup_count: int = 5,
    filters: Optional[Sequence[logging.Filter]] = None
) -> RotatingFileHandler:
    """
    Rotating log file, parent directories created on demand.

    Keeps ``backup_count`` rotated files: chains.log.1 ... chains.log.N.
    """
    log_path = Path(file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    rotating = RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8',
    )
    return _attach(rotating, level, formatter, filters)
