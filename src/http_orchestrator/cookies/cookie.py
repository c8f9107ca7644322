# src/http_orchestrator/cookies/cookie.py
"""
Single HTTP cookie parsed from a ``Set-Cookie`` value (RFC 6265).

Supported attributes: Domain, Path, Max-Age, SameSite, Expires (recognized,
not interpreted), Secure, HttpOnly. Attribute names are case-insensitive;
unknown attributes and malformed attribute values are dropped.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from ..core.exceptions import InvalidCookieError


class SameSite(str, Enum):
    """SameSite attribute values."""
    STRICT = "Strict"
    LAX = "Lax"
    NONE = "None"

    @classmethod
    def parse(cls, value: str) -> Optional["SameSite"]:
        """Case-insensitive lookup, None for unknown values."""
        lowered = value.strip().lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        return None


def _parse_signed_int(value: str) -> Optional[int]:
    value = value.strip()
    digits = value[1:] if value[:1] in ("+", "-") else value
    # int() also accepts "1_000" and unicode digits
    if not digits or not all("0" <= ch <= "9" for ch in digits):
        return None
    return int(value)


@dataclass
class Cookie:
    """
    HTTP cookie.

    Attributes:
        name: Cookie name (immutable after parsing)
        value: Cookie value (may be empty)
        domain: Domain attribute, lower-cased (RFC 6265 5.2.3)
        path: Path attribute
        max_age: Max-Age in seconds; <= 0 means permanently expired
        expires: Absolute expiry as a Unix timestamp. Never filled from the
            ``Expires`` attribute, only set programmatically
        secure: Secure flag
        http_only: HttpOnly flag
        same_site: SameSite policy

    Example:
        >>> cookie = Cookie.parse("id=xyz; Domain=.example.com; Path=/api; Secure")
        >>> cookie.to_header_fragment()
        'id=xyz'
        >>> cookie.matches_domain("api.example.com")
        True
    """

    name: str
    value: str = ""
    domain: Optional[str] = None
    path: Optional[str] = None
    max_age: Optional[int] = None
    expires: Optional[float] = None
    secure: bool = False
    http_only: bool = False
    same_site: Optional[SameSite] = None
    _frozen_name: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self):
        self._frozen_name = True

    def __setattr__(self, name, value):
        if name == "name" and getattr(self, "_frozen_name", False):
            raise AttributeError("cookie name cannot be changed after parsing")
        object.__setattr__(self, name, value)

    @classmethod
    def parse(cls, set_cookie_value: Union[str, bytes]) -> "Cookie":
        """
        Parse a ``Set-Cookie`` header value.

        Args:
            set_cookie_value: Header value, e.g. ``"sid=abc; Path=/; HttpOnly"``.
                Bytes are decoded as latin-1.

        Returns:
            Parsed Cookie

        Raises:
            InvalidCookieError: If there is no name/value segment at all
        """
        if isinstance(set_cookie_value, (bytes, bytearray)):
            set_cookie_value = bytes(set_cookie_value).decode("latin-1")

        segments = set_cookie_value.split(";")
        pair = segments[0].strip()
        if not pair:
            raise InvalidCookieError(set_cookie_value, "missing name/value pair")

        name, sep, value = pair.partition("=")
        name = name.strip()
        if not name:
            raise InvalidCookieError(set_cookie_value, "empty cookie name")

        attrs = {}
        for segment in segments[1:]:
            segment = segment.strip()
            if not segment:
                continue

            if "=" in segment:
                attr_name, _, attr_value = segment.partition("=")
                attr_name = attr_name.strip().lower()
                attr_value = attr_value.strip()

                if attr_name == "domain":
                    attrs["domain"] = attr_value.lower()
                elif attr_name == "path":
                    attrs["path"] = attr_value
                elif attr_name == "max-age":
                    max_age = _parse_signed_int(attr_value)
                    if max_age is not None:
                        attrs["max_age"] = max_age
                elif attr_name == "samesite":
                    same_site = SameSite.parse(attr_value)
                    if same_site is not None:
                        attrs["same_site"] = same_site
                elif attr_name == "expires":
                    # Accepted syntactically; Max-Age is the only expiry signal
                    pass
            else:
                flag = segment.lower()
                if flag == "secure":
                    attrs["secure"] = True
                elif flag == "httponly":
                    attrs["http_only"] = True

        return cls(name=name, value=value.strip() if sep else "", **attrs)

    @property
    def key(self) -> Tuple[str, str, str]:
        """Storage key ``(name, domain, path)``; missing parts are ``""``."""
        return (self.name, self.domain or "", self.path or "")

    def is_expired(self, now: Optional[float] = None) -> bool:
        """
        Check expiration.

        Max-Age wins over an absolute expiry; a cookie with neither is a
        session cookie and never expires here.
        """
        if self.max_age is not None:
            return self.max_age <= 0

        if self.expires is not None:
            current = time.time() if now is None else now
            return current > self.expires

        return False

    def matches_domain(self, request_domain: str) -> bool:
        """
        Domain matching.

        A cookie without Domain matches any host (no request-origin pinning
        at this layer). ``.example.com`` matches ``example.com`` and any
        ``*.example.com`` host. Host names compare case-insensitively.
        """
        if self.domain is None:
            return True

        domain = self.domain.lower()
        request_domain = request_domain.lower()
        if domain == request_domain:
            return True

        if domain.startswith("."):
            return request_domain == domain[1:] or request_domain.endswith(domain)

        return False

    def matches_path(self, request_path: str) -> bool:
        """Path matching: exact, or prefix ending at a ``/`` boundary."""
        if self.path is None:
            return True

        if self.path == request_path:
            return True

        if self.path and request_path.startswith(self.path):
            if self.path.endswith("/"):
                return True
            if request_path[len(self.path):len(self.path) + 1] == "/":
                return True

        return False

    def to_header_fragment(self) -> str:
        """Render ``name=value`` for an outbound Cookie header."""
        return f"{self.name}={self.value}"

    def __str__(self) -> str:
        return self.to_header_fragment()
