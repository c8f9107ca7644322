# src/http_orchestrator/cookies/jar.py
"""
Cookie jar: upsert storage keyed by ``(name, domain, path)``.

The jar has no internal locking. Share one jar between threads only if the
caller serializes access, or give each pipeline its own jar.
"""

import logging
from typing import TYPE_CHECKING, Iterator, List, Optional, Union
from urllib.parse import urlsplit

from .cookie import Cookie
from ..core.exceptions import InvalidCookieError

if TYPE_CHECKING:
    from ..core.models import TransportResponse

logger = logging.getLogger("http_orchestrator.cookies")


class CookieJar:
    """
    In-memory cookie storage for one client session.

    Example:
        >>> jar = CookieJar()
        >>> _ = jar.set_cookie("session=abc; Path=/")
        >>> _ = jar.set_cookie("user=alice; Domain=.example.com; Path=/api")
        >>> jar.get_cookies_for_request("https://example.com/api/users")
        'session=abc; user=alice'
    """

    def __init__(self):
        self._cookies: List[Cookie] = []

    def set_cookie(self, set_cookie_value: Union[str, bytes]) -> Cookie:
        """
        Store a cookie from a ``Set-Cookie`` value.

        A stored cookie with the same ``(name, domain, path)`` is replaced in
        place. Already-expired cookies are stored too; lookups skip them.

        Raises:
            InvalidCookieError: Jar state is left untouched
        """
        cookie = Cookie.parse(set_cookie_value)

        for index, existing in enumerate(self._cookies):
            if existing.key == cookie.key:
                self._cookies[index] = cookie
                return cookie

        self._cookies.append(cookie)
        return cookie

    def get_cookie(self, name: str) -> Optional[Cookie]:
        """First non-expired cookie named ``name``."""
        for cookie in self._cookies:
            if cookie.name == name and not cookie.is_expired():
                return cookie
        return None

    def get_cookies_for_request(self, url: str) -> str:
        """
        Build the Cookie header value for ``url``.

        Returns:
            ``"a=1; b=2"``, or ``""`` when nothing matches. An empty value
            must not be sent as a header.
        """
        parts = urlsplit(url)
        host = parts.hostname
        if not host:
            return ""
        path = parts.path or "/"

        fragments = [
            cookie.to_header_fragment()
            for cookie in self._cookies
            if not cookie.is_expired()
            and cookie.matches_domain(host)
            and cookie.matches_path(path)
        ]
        return "; ".join(fragments)

    def extract_from_response(self, response: "TransportResponse") -> int:
        """
        Store every Set-Cookie value of ``response``.

        Invalid values are logged and skipped.

        Returns:
            Number of cookies stored
        """
        stored = 0
        for value in response.header_values("Set-Cookie"):
            try:
                self.set_cookie(value)
            except InvalidCookieError as e:
                logger.warning("Ignoring invalid Set-Cookie", extra={"url": response.url, "reason": e.reason})
                continue
            stored += 1
        return stored

    def remove_expired(self) -> int:
        """Drop expired cookies, return how many were removed."""
        before = len(self._cookies)
        self._cookies = [cookie for cookie in self._cookies if not cookie.is_expired()]
        return before - len(self._cookies)

    def clear(self) -> None:
        self._cookies.clear()

    def count(self) -> int:
        """Number of stored cookies, expired ones included."""
        return len(self._cookies)

    def __len__(self) -> int:
        return len(self._cookies)

    def __iter__(self) -> Iterator[Cookie]:
        return iter(list(self._cookies))

    def __contains__(self, name: object) -> bool:
        return self.get_cookie(name) is not None if isinstance(name, str) else False

    def __repr__(self) -> str:
        return f"<CookieJar [{', '.join(c.name for c in self._cookies)}]>"
