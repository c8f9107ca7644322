# src/http_orchestrator/transport/requests_transport.py
"""
Transport на базе requests.

Сессия настроена так, чтобы requests не мешал RedirectResolver:
- allow_redirects=False на каждом запросе
- cookie policy сессии не принимает ни одной cookie
- повторяющиеся заголовки ответа (Set-Cookie) сохраняются парами
"""

from http.cookiejar import DefaultCookiePolicy
from typing import Dict, Optional

import requests
from requests.adapters import HTTPAdapter

from ..core.config import ClientConfig
from ..core.exceptions import ResponseTooLargeError, classify_requests_exception
from ..core.models import HeaderPairs, TransportResponse
from .base import HopTimeout, Transport
from .session_manager import ThreadLocalSessions

_READ_CHUNK = 8192


class RequestsTransport(Transport):
    """
    Transport с thread-local requests.Session и connection pooling.

    Args:
        config: ClientConfig (используются timeout, pool и security)

    Example:
        >>> with RequestsTransport(ClientConfig.create(timeout=10)) as transport:
        ...     response = transport.send_once("GET", "https://example.com/", [], None)
        ...     response.close()

    urllib3 снимает chunked framing сам, поэтому ответы помечаются
    transfer_decoded=True.
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        self._config = config or ClientConfig()
        self._sessions = ThreadLocalSessions(self._create_session)

    def _create_session(self) -> requests.Session:
        """Create configured session."""
        session = requests.Session()

        adapter = HTTPAdapter(
            pool_connections=self._config.pool.pool_connections,
            pool_maxsize=self._config.pool.pool_maxsize,
            pool_block=self._config.pool.pool_block,
            max_retries=0,
        )
        session.mount('http://', adapter)
        session.mount('https://', adapter)

        # Cookies ведёт CookieJar резолвера
        session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))

        return session

    @property
    def session(self) -> requests.Session:
        """Сессия текущего потока."""
        return self._sessions.get()

    @property
    def active_sessions(self) -> int:
        return self._sessions.active_count

    def send_once(
        self,
        method: str,
        url: str,
        headers: HeaderPairs,
        body: Optional[bytes],
        timeout: HopTimeout = None,
    ) -> TransportResponse:
        if timeout is None:
            timeout = self._config.timeout.as_tuple()

        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=_merge_headers(headers),
                data=body,
                timeout=timeout,
                verify=self._config.security.verify_ssl,
                allow_redirects=False,
                stream=True,
            )
        except requests.exceptions.RequestException as e:
            raise classify_requests_exception(e, url) from e

        try:
            content = self._read_body(response, url)
        except requests.exceptions.RequestException as e:
            response.close()
            raise classify_requests_exception(e, url) from e
        except ResponseTooLargeError:
            response.close()
            raise

        return TransportResponse(
            status_code=response.status_code,
            headers=_response_headers(response),
            body=content,
            url=url,
            transfer_decoded=True,
            release=response.close,
        )

    def _read_body(self, response: requests.Response, url: str) -> bytes:
        max_size = self._config.security.max_response_size

        content_length = response.headers.get('Content-Length')
        if content_length and content_length.isdigit() and int(content_length) > max_size:
            raise ResponseTooLargeError(int(content_length), max_size, url)

        chunks = []
        received = 0
        for chunk in response.iter_content(chunk_size=_READ_CHUNK):
            received += len(chunk)
            if received > max_size:
                raise ResponseTooLargeError(received, max_size, url)
            chunks.append(chunk)
        return b"".join(chunks)

    def close(self) -> None:
        """Закрыть сессии всех потоков."""
        self._sessions.close_all()


def _merge_headers(headers: HeaderPairs) -> Dict[str, str]:
    """requests принимает dict: повторяющиеся имена склеиваются через ', '."""
    merged: Dict[str, str] = {}
    index: Dict[str, str] = {}
    for name, value in headers:
        key = index.setdefault(name.lower(), name)
        merged[key] = f"{merged[key]}, {value}" if key in merged else value
    return merged


def _response_headers(response: requests.Response) -> HeaderPairs:
    """Заголовки ответа с сохранением дубликатов (несколько Set-Cookie)."""
    raw_headers = getattr(response.raw, 'headers', None)
    if raw_headers is not None and hasattr(raw_headers, 'iteritems'):
        return [(name, value) for name, value in raw_headers.iteritems()]
    return list(response.headers.items())
