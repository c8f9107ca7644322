"""RFC 6265 cookies and the in-memory jar."""

from .cookie import Cookie, SameSite
from .jar import CookieJar

__all__ = ["Cookie", "SameSite", "CookieJar"]
