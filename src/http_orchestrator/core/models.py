# src/http_orchestrator/core/models.py
"""Request and transport response models shared by the resolver and transports."""

import json as _json
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple, Union

HeaderPairs = List[Tuple[str, str]]
HeadersInput = Union[Mapping[str, str], Iterable[Tuple[str, str]], None]


def normalize_headers(headers: HeadersInput) -> HeaderPairs:
    """Convert a mapping or iterable of pairs into an ordered list of pairs."""
    if headers is None:
        return []
    if isinstance(headers, Mapping):
        return [(str(k), str(v)) for k, v in headers.items()]
    return [(str(k), str(v)) for k, v in headers]


def find_header(headers: HeaderPairs, name: str) -> Optional[str]:
    """First value of header ``name`` (case-insensitive)."""
    lowered = name.lower()
    for key, value in headers:
        if key.lower() == lowered:
            return value
    return None


def find_all_headers(headers: HeaderPairs, name: str) -> List[str]:
    """All values of header ``name`` in received order."""
    lowered = name.lower()
    return [value for key, value in headers if key.lower() == lowered]


# Status classes (RFC 7231 section 6)

def is_informational_status(code: int) -> bool:
    return 100 <= code < 200


def is_success_status(code: int) -> bool:
    return 200 <= code < 300


def is_redirect_status(code: int) -> bool:
    return 300 <= code < 400


def is_client_error_status(code: int) -> bool:
    return 400 <= code < 500


def is_server_error_status(code: int) -> bool:
    return 500 <= code < 600


class Request:
    """
    Outgoing request handed to the redirect resolver.

    Args:
        method: HTTP method (upper-cased)
        url: Absolute target URL
        headers: Mapping or ordered (name, value) pairs
        body: Raw body bytes

    Example:
        >>> req = Request("post", "https://api.example.com/items", {"X-Trace": "1"}, b"{}")
        >>> req.method
        'POST'
        >>> req.header("x-trace")
        '1'
    """

    def __init__(
        self,
        method: str,
        url: str,
        headers: HeadersInput = None,
        body: Optional[bytes] = None,
    ):
        self.method = method.upper()
        self.url = url
        self.headers: HeaderPairs = normalize_headers(headers)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.body = body

    def header(self, name: str) -> Optional[str]:
        return find_header(self.headers, name)

    def with_header(self, name: str, value: Optional[str]) -> "Request":
        """
        Copy of this request with header ``name`` replaced.

        ``value=None`` removes the header.
        """
        lowered = name.lower()
        headers = [(k, v) for k, v in self.headers if k.lower() != lowered]
        if value is not None:
            headers.append((name, value))
        return Request(self.method, self.url, headers, self.body)

    def __repr__(self) -> str:
        return f"<Request [{self.method} {self.url}]>"


class TransportResponse:
    """
    One hop's response as returned by a transport.

    Treated as immutable once received. ``close()`` releases the underlying
    connection and is safe to call more than once.

    Attributes:
        status_code: HTTP status
        headers: Ordered (name, value) pairs, duplicates kept
        body: Body bytes; still chunk-framed unless ``transfer_decoded``
        url: URL this response was received from
        transfer_decoded: True when the transport already removed chunk framing
    """

    def __init__(
        self,
        status_code: int,
        headers: HeadersInput = None,
        body: bytes = b"",
        url: str = "",
        transfer_decoded: bool = False,
        release: Optional[Callable[[], None]] = None,
    ):
        self.status_code = status_code
        self.headers: HeaderPairs = normalize_headers(headers)
        self.body = body or b""
        self.url = url
        self.transfer_decoded = transfer_decoded
        self._release = release
        self._closed = False

    def header(self, name: str) -> Optional[str]:
        return find_header(self.headers, name)

    def header_values(self, name: str) -> List[str]:
        return find_all_headers(self.headers, name)

    @property
    def is_redirect(self) -> bool:
        return is_redirect_status(self.status_code)

    @property
    def is_success(self) -> bool:
        return is_success_status(self.status_code)

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

    @property
    def content(self) -> bytes:
        return self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return _json.loads(self.body)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._release is not None:
            self._release()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"<TransportResponse [{self.status_code}] {self.url}>"
