"""Core http-orchestrator модули."""

from .config import (
    TimeoutConfig,
    RedirectConfig,
    PoolConfig,
    SecurityConfig,
    CookieConfig,
    ClientConfig,
)
from .exceptions import (
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
    classify_requests_exception,
)
from .models import Request, TransportResponse
from .context import PendingRequest
from .redirects import RedirectResolver, ResolverState, rewrite_method
from .http_client import HTTPClient

__all__ = [
    # Config
    "TimeoutConfig",
    "RedirectConfig",
    "PoolConfig",
    "SecurityConfig",
    "CookieConfig",
    "ClientConfig",
    # Models
    "Request",
    "TransportResponse",
    "PendingRequest",
    # Core
    "RedirectResolver",
    "ResolverState",
    "rewrite_method",
    "HTTPClient",
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
    "classify_requests_exception",
]
