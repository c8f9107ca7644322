"""http-orchestrator - request orchestration core: redirects, cookies, chunked bodies."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.http_client import HTTPClient
from .core.redirects import RedirectResolver, ResolverState
from .core.models import Request, TransportResponse
from .core.config import (
    ClientConfig,
    TimeoutConfig,
    RedirectConfig,
    PoolConfig,
    SecurityConfig,
    CookieConfig,
)
from .core.exceptions import (
    HTTPOrchestratorError,
    InvalidCookieError,
    MalformedChunkedBodyError,
    RedirectError,
    TooManyRedirectsError,
    RedirectLoopDetectedError,
    InvalidRedirectLocationError,
    TransportError,
    NetworkError,
    TimeoutError,
    ConnectionError,
    ProxyError,
    ResponseTooLargeError,
    ConfigurationError,
)
from .core.env_config import load_from_env
from .cookies import Cookie, CookieJar, SameSite
from .plugins import Plugin, PluginPriority, MetricsPlugin
from .transport import Transport, RequestsTransport

# NullHandler: handlers are the application's business
# (logging.getLogger('http_orchestrator'))
logging.getLogger('http_orchestrator').addHandler(logging.NullHandler())

try:
    __version__ = version("http-orchestrator")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Core
    "HTTPClient",
    "RedirectResolver",
    "ResolverState",
    "Request",
    "TransportResponse",

    # Config
    "ClientConfig",
    "TimeoutConfig",
    "RedirectConfig",
    "PoolConfig",
    "SecurityConfig",
    "CookieConfig",
    "load_from_env",

    # Cookies
    "Cookie",
    "CookieJar",
    "SameSite",

    # Transport
    "Transport",
    "RequestsTransport",

    # Plugins
    "Plugin",
    "PluginPriority",
    "MetricsPlugin",

    # Exceptions
    "HTTPOrchestratorError",
    "InvalidCookieError",
    "MalformedChunkedBodyError",
    "RedirectError",
    "TooManyRedirectsError",
    "RedirectLoopDetectedError",
    "InvalidRedirectLocationError",
    "TransportError",
    "NetworkError",
    "TimeoutError",
    "ConnectionError",
    "ProxyError",
    "ResponseTooLargeError",
    "ConfigurationError",

    # Version
    "__version__",
]
