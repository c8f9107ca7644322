# src/http_orchestrator/core/redirects.py
"""
Redirect resolution loop.

One ``send()`` drives a chain of single-hop exchanges through the transport:

    SENDING -> EVALUATING_RESPONSE -> (DONE | REDIRECTING -> SENDING ...)

with FAILED reachable from every state. Between hops the resolver updates
the cookie jar, rewrites the method, drops the body when the method became
GET, and resolves the next target.

Loop detection compares literal URL strings: targets that differ only in
percent-encoding, a trailing slash or an explicit default port are distinct.
"""

from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Sequence

from .config import RedirectConfig, TimeoutConfig
from .context import PendingRequest
from .exceptions import (
    HTTPOrchestratorError,
    InvalidRedirectLocationError,
    RedirectLoopDetectedError,
    TimeoutError,
    TooManyRedirectsError,
)
from .logging import OrchestratorLogger
from .logging.filters import clear_correlation_id, set_correlation_id
from .models import Request, TransportResponse
from .utils import Deadline, resolve_location, sanitize_headers
from ..encoding.chunked import decode as decode_chunked, is_chunked

if TYPE_CHECKING:
    from ..cookies.jar import CookieJar
    from ..plugins.plugin import Plugin
    from ..transport.base import Transport


class ResolverState(str, Enum):
    """Redirect loop states."""
    SENDING = "sending"
    EVALUATING_RESPONSE = "evaluating_response"
    REDIRECTING = "redirecting"
    DONE = "done"
    FAILED = "failed"


# Methods 301/302 turn into GET (historical browser behaviour)
_REWRITTEN_ON_MOVED = frozenset({"POST", "PUT", "DELETE"})


def rewrite_method(status_code: int, method: str) -> str:
    """
    Method for the hop that follows a redirect.

    303 always becomes GET; 301/302 turn POST, PUT and DELETE into GET;
    307, 308 and everything else keep the method.

    Examples:
        >>> rewrite_method(303, "PUT")
        'GET'
        >>> rewrite_method(302, "POST")
        'GET'
        >>> rewrite_method(302, "PATCH")
        'PATCH'
        >>> rewrite_method(307, "POST")
        'POST'
    """
    if status_code == 303:
        return "GET"
    if status_code in (301, 302) and method in _REWRITTEN_ON_MOVED:
        return "GET"
    return method


class RedirectResolver:
    """
    Follows redirects for one request at a time.

    Args:
        transport: Single-hop transport collaborator
        config: Redirect policy
        cookie_jar: Jar updated from every hop's Set-Cookie and used to build
            every hop's Cookie header (None = no cookie handling)
        plugins: Per-hop hooks, run in priority order
        logger: Structured logger (a handler-less one by default)
        timeout: Per-hop timeouts and the optional total budget

    Example:
        >>> resolver = RedirectResolver(transport, RedirectConfig(max_redirects=5))
        >>> response = resolver.send(Request("GET", "https://example.com/old"))
        >>> response.status_code
        200

    Not thread-safe: use one resolver per thread, and serialize access to a
    shared cookie jar.
    """

    def __init__(
        self,
        transport: 'Transport',
        config: Optional[RedirectConfig] = None,
        cookie_jar: Optional['CookieJar'] = None,
        plugins: Optional[Sequence['Plugin']] = None,
        logger: Optional[OrchestratorLogger] = None,
        timeout: Optional[TimeoutConfig] = None,
    ):
        self._transport = transport
        self._config = config or RedirectConfig()
        self._cookie_jar = cookie_jar
        self._plugins: List['Plugin'] = sorted(plugins or [], key=lambda p: p.priority)
        self._logger = logger or OrchestratorLogger()
        self._timeout = timeout
        self.state: Optional[ResolverState] = None

    @property
    def config(self) -> RedirectConfig:
        return self._config

    @property
    def cookie_jar(self) -> Optional['CookieJar']:
        return self._cookie_jar

    def send(self, request: Request) -> TransportResponse:
        """
        Send ``request`` and follow redirects until a non-3xx response.

        Returns:
            The final response (any 3xx when redirects are disabled)

        Raises:
            TooManyRedirectsError: More than ``max_redirects`` redirects
            RedirectLoopDetectedError: A target URL came up twice
            InvalidRedirectLocationError: 3xx without a Location header
            TimeoutError: The total budget ran out between hops
            Exception: Transport failures, unmodified
        """
        pending = PendingRequest.start(request)
        deadline = Deadline(self._timeout.total if self._timeout else None)
        set_correlation_id(pending.request_id)

        try:
            if not self._config.follow_redirects:
                self.state = ResolverState.SENDING
                response = self._send_hop(pending, deadline)
                self.state = ResolverState.DONE
                return response

            return self._follow(pending, deadline)
        except BaseException:
            self.state = ResolverState.FAILED
            raise
        finally:
            clear_correlation_id()

    def _follow(self, pending: PendingRequest, deadline: Deadline) -> TransportResponse:
        while True:
            self.state = ResolverState.SENDING

            if not pending.visit(pending.url):
                raise self._fail(
                    RedirectLoopDetectedError(pending.url, sorted(pending.visited)), pending
                )

            if not pending.is_first_hop and deadline.expired():
                raise self._fail(
                    TimeoutError(
                        "Redirect chain exceeded total timeout",
                        pending.url,
                        timeout=deadline.timeout,
                        timeout_type="total",
                    ),
                    pending,
                )

            response = self._send_hop(pending, deadline)

            self.state = ResolverState.EVALUATING_RESPONSE
            if not response.is_redirect:
                self.state = ResolverState.DONE
                return response

            self.state = ResolverState.REDIRECTING
            pending.redirect_count += 1
            if pending.redirect_count > self._config.max_redirects:
                raise self._fail(
                    TooManyRedirectsError(self._config.max_redirects, pending.url), pending, response
                )

            location = response.header("Location")
            if location is None or not location.strip():
                raise self._fail(
                    InvalidRedirectLocationError(response.status_code, pending.url), pending, response
                )

            next_method = rewrite_method(response.status_code, pending.method)
            next_url = resolve_location(pending.url, location)

            self._logger.info(
                "Redirect followed",
                status_code=response.status_code,
                from_url=pending.url,
                to_url=next_url,
                method=next_method,
                redirect_count=pending.redirect_count,
            )

            response.close()
            pending.method = next_method
            pending.url = next_url

    def _send_hop(self, pending: PendingRequest, deadline: Deadline) -> TransportResponse:
        """One request/response exchange, body decoded and cookies stored."""
        request = pending.build_request()

        if self._cookie_jar is not None:
            cookie_header = self._cookie_jar.get_cookies_for_request(request.url)
            if cookie_header:
                request = request.with_header("Cookie", cookie_header)

        for plugin in self._plugins:
            request = plugin.before_request(request)

        hop_fields = {}
        if self._logger.config is None or self._logger.config.log_hop_headers:
            hop_fields["headers"] = sanitize_headers(request.headers)

        self._logger.debug(
            "Hop sent",
            method=request.method,
            url=request.url,
            hop=pending.redirect_count,
            has_body=request.body is not None,
            **hop_fields,
        )

        try:
            response = self._transport.send_once(
                request.method,
                request.url,
                request.headers,
                request.body,
                timeout=self._hop_timeout(deadline),
            )
        except Exception as e:
            self._notify_error(e, request)
            self._logger.warning(
                "Hop failed",
                method=request.method,
                url=request.url,
                hop=pending.redirect_count,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        response = self._decode_body(response, request)
        received = response

        try:
            if self._cookie_jar is not None:
                self._cookie_jar.extract_from_response(response)

            for plugin in self._plugins:
                response = plugin.after_response(response)
        except BaseException as e:
            # plugins may have replaced the response; release both
            response.close()
            received.close()
            if isinstance(e, Exception):
                self._notify_error(e, request)
            raise

        self._logger.debug(
            "Hop completed",
            method=request.method,
            url=request.url,
            hop=pending.redirect_count,
            status_code=response.status_code,
            response_size=len(response.body),
        )
        return response

    def _decode_body(self, response: TransportResponse, request: Request) -> TransportResponse:
        if response.transfer_decoded or not is_chunked(response.header("Transfer-Encoding")):
            return response

        try:
            body = decode_chunked(response.body)
        except HTTPOrchestratorError as e:
            response.close()
            self._notify_error(e, request)
            raise

        return TransportResponse(
            status_code=response.status_code,
            headers=response.headers,
            body=body,
            url=response.url,
            transfer_decoded=True,
            release=response.close,
        )

    def _hop_timeout(self, deadline: Deadline):
        if self._timeout is None:
            return None
        connect, read = self._timeout.as_tuple()
        remaining = deadline.remaining()
        if remaining is not None:
            # the transport still needs a positive value to fail fast
            read = max(min(read, remaining), 0.001)
        return (connect, read)

    def _fail(
        self,
        error: HTTPOrchestratorError,
        pending: PendingRequest,
        response: Optional[TransportResponse] = None,
    ) -> HTTPOrchestratorError:
        """Release the in-flight response, report, and hand back ``error`` to raise."""
        if response is not None:
            response.close()

        self._logger.warning(
            "Redirect chain aborted",
            url=pending.url,
            method=pending.method,
            redirect_count=pending.redirect_count,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._notify_error(error, pending.build_request())
        return error

    def _notify_error(self, error: Exception, request: Request) -> None:
        for plugin in self._plugins:
            plugin.on_error(error, request)
