"""
Environment configuration for http-orchestrator.

Example:
    >>> from src.http_orchestrator.core.env_config import load_from_env
    >>>
    >>> config = load_from_env()
    >>> config = load_from_env(profile="production", base_url="https://custom.api.com")
"""

from .loader import load_from_env, load_settings, settings_to_config
from .profiles import PROFILE_ENV_VAR, detect_profile, get_env_file_path
from .validator import ENV_PREFIX, OrchestratorSettings

__all__ = [
    "load_from_env",
    "load_settings",
    "settings_to_config",
    "OrchestratorSettings",
    "ENV_PREFIX",
    "PROFILE_ENV_VAR",
    "detect_profile",
    "get_env_file_path",
]
