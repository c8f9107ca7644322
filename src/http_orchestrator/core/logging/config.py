"""
Logging configuration for http-orchestrator.

What gets logged per redirect chain:
    DEBUG    every hop sent / completed
    INFO     redirects followed, finished requests
    WARNING  failed hops and aborted chains
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    JSON = "json"
    TEXT = "text"
    COLORED = "colored"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Where and how chain events are written.

    Attributes:
        level: Minimum level (DEBUG logs every hop)
        format: json, text or colored
        enable_console: Write to stdout
        enable_file: Write to a rotating file
        file_path: Log file path (required with enable_file)
        max_bytes: File size that triggers rotation
        backup_count: Rotated files to keep
        enable_correlation_id: Tag records with the redirect chain id
        log_hop_headers: Include masked request headers in "Hop sent"
        extra_fields: Static fields on every record (service, env)

    Example:
        >>> LoggingConfig.create(level="DEBUG", format="json", log_hop_headers=False)
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5
    enable_correlation_id: bool = True
    log_hop_headers: bool = True
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.enable_file and not self.file_path:
            raise ValueError("file_path is required when enable_file=True")
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count must be non-negative")

    @classmethod
    def create(
        cls,
        level: str = "INFO",
        format: str = "text",
        enable_console: bool = True,
        enable_file: bool = False,
        file_path: Optional[str] = None,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        enable_correlation_id: bool = True,
        log_hop_headers: bool = True,
        extra_fields: Optional[Dict[str, Any]] = None
    ) -> "LoggingConfig":
        """
        Build from plain strings (env values, CLI flags).

        Raises:
            ValueError: Unknown level or format
        """
        return cls(
            level=LogLevel(level.upper()),
            format=LogFormat(format.lower()),
            enable_console=enable_console,
            enable_file=enable_file,
            file_path=file_path,
            max_bytes=max_bytes,
            backup_count=backup_count,
            enable_correlation_id=enable_correlation_id,
            log_hop_headers=log_hop_headers,
            extra_fields=extra_fields or {},
        )
