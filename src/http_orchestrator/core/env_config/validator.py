"""
Pydantic settings for environment configuration.

Flat field names map 1:1 onto ``HTTP_ORCHESTRATOR_*`` variables.
"""

from typing import Optional, Literal
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "HTTP_ORCHESTRATOR_"


class OrchestratorSettings(BaseSettings):
    """
    http-orchestrator configuration from environment variables.

    Reads from:
    1. Init kwargs (explicit overrides)
    2. Environment variables (HTTP_ORCHESTRATOR_*)
    3. .env file
    4. Defaults

    Example .env file:
        HTTP_ORCHESTRATOR_BASE_URL=https://api.example.com
        HTTP_ORCHESTRATOR_TIMEOUT_READ=10.0
        HTTP_ORCHESTRATOR_FOLLOW_REDIRECTS=true
        HTTP_ORCHESTRATOR_MAX_REDIRECTS=5
        HTTP_ORCHESTRATOR_LOG_ENABLED=true
        HTTP_ORCHESTRATOR_LOG_LEVEL=DEBUG

    Usage:
        >>> settings = OrchestratorSettings()
        >>> settings.max_redirects
        10
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    base_url: str = Field(default="", description="Base URL for all requests")

    # Timeouts
    timeout_connect: float = Field(default=5.0, gt=0)
    timeout_read: float = Field(default=30.0, gt=0)
    timeout_total: Optional[float] = Field(default=None, gt=0, description="Budget for a whole redirect chain")

    # Redirects
    follow_redirects: bool = Field(default=True)
    max_redirects: int = Field(default=10, ge=0)

    # Cookies
    cookies_enabled: bool = Field(default=True)

    # Security
    verify_ssl: bool = Field(default=True)
    max_response_size: int = Field(default=100 * 1024 * 1024, gt=0)

    # Connection pool
    pool_connections: int = Field(default=10, ge=1)
    pool_maxsize: int = Field(default=10, ge=1)
    pool_block: bool = Field(default=False)

    # Logging (off by default: a library should not install handlers)
    log_enabled: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text", "colored"] = Field(default="text")
    log_enable_console: bool = Field(default=True)
    log_enable_file: bool = Field(default=False)
    log_file_path: Optional[str] = Field(default=None, validate_default=True)
    log_max_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    log_backup_count: int = Field(default=5, ge=0)
    log_enable_correlation_id: bool = Field(default=True)
    log_hop_headers: bool = Field(default=True)

    @field_validator('timeout_total')
    @classmethod
    def validate_total(cls, v: Optional[float], info) -> Optional[float]:
        """A chain budget shorter than one hop's connect timeout can never be met."""
        if v is not None:
            connect = info.data.get('timeout_connect', 5.0)
            if v < connect:
                raise ValueError(f"timeout_total ({v}) must be >= timeout_connect ({connect})")
        return v

    @field_validator('log_file_path')
    @classmethod
    def validate_file_path(cls, v: Optional[str], info) -> Optional[str]:
        if info.data.get('log_enable_file') and not v:
            raise ValueError("log_file_path is required when log_enable_file=True")
        return v
