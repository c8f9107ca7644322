"""
Profile selection: ``.env.<profile>`` files.
"""

from typing import Optional
import os

PROFILE_ENV_VAR = "HTTP_ORCHESTRATOR_ENV"
KNOWN_PROFILES = ("development", "staging", "production")


def detect_profile() -> Optional[str]:
    """
    Profile named by HTTP_ORCHESTRATOR_ENV, or None.

    Example:
        >>> os.environ["HTTP_ORCHESTRATOR_ENV"] = "production"
        >>> detect_profile()
        'production'
    """
    return os.getenv(PROFILE_ENV_VAR) or None


def get_env_file_path(profile: Optional[str] = None) -> str:
    """
    Get .env file path for profile.

    Examples:
        >>> get_env_file_path("staging")
        '.env.staging'
        >>> get_env_file_path(None)  # HTTP_ORCHESTRATOR_ENV unset
        '.env'
    """
    if profile is None:
        profile = detect_profile()

    if profile is None:
        return ".env"

    return f".env.{profile}"
