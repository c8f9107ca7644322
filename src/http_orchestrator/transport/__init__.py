"""Single-hop transports used by the redirect resolver."""

from .base import Transport
from .requests_transport import RequestsTransport
from .session_manager import ThreadLocalSessions

__all__ = [
    "Transport",
    "RequestsTransport",
    "ThreadLocalSessions",
]
