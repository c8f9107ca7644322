"""
Build ClientConfig from environment variables and .env files.
"""

from typing import Optional

from pydantic import ValidationError

from ..config import (
    ClientConfig,
    CookieConfig,
    PoolConfig,
    RedirectConfig,
    SecurityConfig,
    TimeoutConfig,
)
from ..exceptions import ConfigurationError
from ..logging.config import LoggingConfig
from .profiles import get_env_file_path
from .validator import OrchestratorSettings


def load_settings(
    profile: Optional[str] = None,
    env_file: Optional[str] = None,
    **overrides
) -> OrchestratorSettings:
    """
    Validated settings.

    Priority (highest to lowest):
    1. **overrides
    2. Environment variables (HTTP_ORCHESTRATOR_*)
    3. .env file (``env_file``, else ``.env.<profile>``, else ``.env``)
    4. Defaults

    Raises:
        ConfigurationError: Unknown override or invalid value
    """
    unknown = set(overrides) - set(OrchestratorSettings.model_fields)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    if env_file is None:
        env_file = get_env_file_path(profile)

    try:
        return OrchestratorSettings(_env_file=env_file, **overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid environment configuration: {e}") from e


def settings_to_config(settings: OrchestratorSettings) -> ClientConfig:
    """Convert validated settings into the frozen ClientConfig tree."""
    logging_config = None
    if settings.log_enabled:
        logging_config = LoggingConfig.create(
            level=settings.log_level,
            format=settings.log_format,
            enable_console=settings.log_enable_console,
            enable_file=settings.log_enable_file,
            file_path=settings.log_file_path,
            max_bytes=settings.log_max_bytes,
            backup_count=settings.log_backup_count,
            enable_correlation_id=settings.log_enable_correlation_id,
            log_hop_headers=settings.log_hop_headers,
        )

    return ClientConfig(
        base_url=settings.base_url or None,
        timeout=TimeoutConfig(
            connect=settings.timeout_connect,
            read=settings.timeout_read,
            total=settings.timeout_total,
        ),
        redirects=RedirectConfig(
            follow_redirects=settings.follow_redirects,
            max_redirects=settings.max_redirects,
        ),
        pool=PoolConfig(
            pool_connections=settings.pool_connections,
            pool_maxsize=settings.pool_maxsize,
            pool_block=settings.pool_block,
        ),
        security=SecurityConfig(
            verify_ssl=settings.verify_ssl,
            max_response_size=settings.max_response_size,
        ),
        cookies=CookieConfig(enabled=settings.cookies_enabled),
        logging=logging_config,
    )


def load_from_env(
    profile: Optional[str] = None,
    env_file: Optional[str] = None,
    **overrides
) -> ClientConfig:
    """
    Load ClientConfig from environment variables.

    Args:
        profile: Profile to load (reads ``.env.<profile>``)
        env_file: Custom .env file path (overrides profile)
        **overrides: Explicit values, named like OrchestratorSettings fields

    Example:
        >>> config = load_from_env()
        >>> config = load_from_env(profile="production", max_redirects=3)
    """
    return settings_to_config(load_settings(profile, env_file, **overrides))
