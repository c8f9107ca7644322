# tests/unit/transport/test_requests_transport.py

import threading

import pytest
import requests
import responses

from src.http_orchestrator.core.config import ClientConfig, SecurityConfig
from src.http_orchestrator.core.exceptions import (
    ConnectionError,
    ResponseTooLargeError,
    TimeoutError,
)
from src.http_orchestrator.transport.requests_transport import RequestsTransport, _merge_headers
from src.http_orchestrator.transport.session_manager import ThreadLocalSessions

URL = "https://api.example.com/resource"


@pytest.fixture
def requests_transport():
    transport = RequestsTransport(ClientConfig.create(timeout=10))
    yield transport
    transport.close()


class TestSendOnce:
    @responses.activate
    def test_basic_exchange(self, requests_transport):
        responses.add(responses.GET, URL, body=b"hello", status=200)

        response = requests_transport.send_once("GET", URL, [("Accept", "text/plain")], None)

        assert response.status_code == 200
        assert response.body == b"hello"
        assert response.url == URL
        assert response.transfer_decoded is True
        assert responses.calls[0].request.headers["Accept"] == "text/plain"
        response.close()
        assert response.closed

    @responses.activate
    def test_redirect_not_followed(self, requests_transport):
        responses.add(responses.GET, URL, status=302, headers={"Location": "/elsewhere"})

        response = requests_transport.send_once("GET", URL, [], None)

        assert response.status_code == 302
        assert response.header("Location") == "/elsewhere"
        assert len(responses.calls) == 1

    @responses.activate
    def test_body_sent(self, requests_transport):
        responses.add(responses.POST, URL, status=201)
        requests_transport.send_once("POST", URL, [("Content-Type", "application/json")], b'{"a": 1}')
        assert responses.calls[0].request.body == b'{"a": 1}'

    @responses.activate
    def test_duplicate_set_cookie_headers_kept(self, requests_transport):
        responses.add(
            responses.GET,
            URL,
            status=200,
            headers=[("Set-Cookie", "a=1; Path=/"), ("Set-Cookie", "b=2; Path=/")],
        )

        response = requests_transport.send_once("GET", URL, [], None)

        assert response.header_values("Set-Cookie") == ["a=1; Path=/", "b=2; Path=/"]

    @responses.activate
    def test_session_does_not_store_cookies(self, requests_transport):
        responses.add(responses.GET, URL, status=200, headers={"Set-Cookie": "sid=abc; Path=/"})
        responses.add(responses.GET, URL, status=200)

        requests_transport.send_once("GET", URL, [], None)
        requests_transport.send_once("GET", URL, [], None)

        assert len(requests_transport.session.cookies) == 0
        assert "Cookie" not in responses.calls[1].request.headers

    @responses.activate
    def test_explicit_cookie_header_passed_through(self, requests_transport):
        responses.add(responses.GET, URL, status=200)
        requests_transport.send_once("GET", URL, [("Cookie", "sid=abc")], None)
        assert responses.calls[0].request.headers["Cookie"] == "sid=abc"


class TestErrors:
    @responses.activate
    def test_connect_timeout_classified(self, requests_transport):
        responses.add(responses.GET, URL, body=requests.exceptions.ConnectTimeout())

        with pytest.raises(TimeoutError) as exc_info:
            requests_transport.send_once("GET", URL, [], None)

        assert exc_info.value.timeout_type == "connect"
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectTimeout)

    @responses.activate
    def test_connection_error_classified(self, requests_transport):
        responses.add(responses.GET, URL, body=requests.exceptions.ConnectionError("refused"))

        with pytest.raises(ConnectionError):
            requests_transport.send_once("GET", URL, [], None)

    @responses.activate
    def test_response_too_large(self):
        config = ClientConfig(security=SecurityConfig(max_response_size=10))
        transport = RequestsTransport(config)
        responses.add(responses.GET, URL, body=b"x" * 50)

        with pytest.raises(ResponseTooLargeError) as exc_info:
            transport.send_once("GET", URL, [], None)

        assert exc_info.value.max_size == 10
        transport.close()


class TestSessions:
    def test_session_reused_within_thread(self, requests_transport):
        assert requests_transport.session is requests_transport.session

    def test_sessions_isolated_between_threads(self, requests_transport):
        sessions = []

        def worker():
            sessions.append(requests_transport.session)

        main_session = requests_transport.session
        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

        assert sessions[0] is not main_session

    def test_adapter_pool_configured(self, requests_transport):
        adapter = requests_transport.session.get_adapter("https://example.com")
        assert adapter._pool_connections == 10
        assert adapter._pool_maxsize == 10
        assert adapter.max_retries.total == 0

    def test_close_all(self):
        sessions = ThreadLocalSessions(requests.Session)
        first = sessions.get()
        assert sessions.active_count == 1
        sessions.close_all()
        assert sessions.active_count == 0
        assert sessions.get() is not first
        sessions.close_all()

    def test_close_current(self):
        sessions = ThreadLocalSessions(requests.Session)
        first = sessions.get()
        sessions.close_current()
        assert sessions.get() is not first
        sessions.close_all()


def test_merge_headers_joins_duplicates_case_insensitively():
    merged = _merge_headers([("Accept", "text/html"), ("accept", "application/json"), ("X-A", "1")])
    assert merged == {"Accept": "text/html, application/json", "X-A": "1"}
