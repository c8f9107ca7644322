# tests/unit/core/test_context.py

from src.http_orchestrator.core.context import PendingRequest
from src.http_orchestrator.core.models import Request


def _request():
    return Request(
        "POST",
        "https://example.com/a",
        [("Host", "example.com"), ("Content-Type", "text/plain")],
        b"body",
    )


class TestPendingRequest:
    def test_start(self):
        pending = PendingRequest.start(_request())
        assert pending.method == "POST"
        assert pending.url == "https://example.com/a"
        assert pending.redirect_count == 0
        assert pending.visited == set()
        assert pending.request_id

    def test_explicit_request_id(self):
        assert PendingRequest.start(_request(), request_id="abc").request_id == "abc"

    def test_unique_request_ids(self):
        assert PendingRequest.start(_request()).request_id != PendingRequest.start(_request()).request_id

    def test_first_hop_is_original(self):
        request = _request()
        assert PendingRequest.start(request).build_request() is request

    def test_later_hop_drops_host(self):
        pending = PendingRequest.start(_request())
        pending.redirect_count = 1
        pending.url = "https://cdn.example.com/a"
        built = pending.build_request()
        assert built.url == "https://cdn.example.com/a"
        assert built.headers == [("Content-Type", "text/plain")]
        assert built.body == b"body"

    def test_body_dropped_when_method_became_get(self):
        pending = PendingRequest.start(_request())
        pending.redirect_count = 1
        pending.method = "GET"
        assert pending.build_request().body is None

    def test_visit(self):
        pending = PendingRequest.start(_request())
        assert pending.visit("https://example.com/a") is True
        assert pending.visit("https://example.com/a") is False
        assert pending.visited == {"https://example.com/a"}

    def test_original_never_modified(self):
        request = _request()
        pending = PendingRequest.start(request)
        pending.redirect_count = 2
        pending.method = "GET"
        pending.build_request()
        assert request.method == "POST"
        assert request.header("Host") == "example.com"
