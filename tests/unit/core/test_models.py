# tests/unit/core/test_models.py

import pytest

from src.http_orchestrator.core.models import (
    Request,
    TransportResponse,
    find_all_headers,
    find_header,
    is_client_error_status,
    is_informational_status,
    is_redirect_status,
    is_server_error_status,
    is_success_status,
    normalize_headers,
)


class TestHeaderHelpers:
    def test_normalize_mapping(self):
        assert normalize_headers({"A": "1", "B": "2"}) == [("A", "1"), ("B", "2")]

    def test_normalize_pairs_keeps_duplicates(self):
        pairs = [("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")]
        assert normalize_headers(pairs) == pairs

    def test_normalize_none(self):
        assert normalize_headers(None) == []

    def test_find_header_case_insensitive(self):
        headers = [("Content-Type", "text/html"), ("content-type", "ignored")]
        assert find_header(headers, "CONTENT-TYPE") == "text/html"
        assert find_header(headers, "Location") is None

    def test_find_all_headers(self):
        headers = [("Set-Cookie", "a=1"), ("X", "y"), ("set-cookie", "b=2")]
        assert find_all_headers(headers, "Set-Cookie") == ["a=1", "b=2"]


@pytest.mark.parametrize("code,checker", [
    (100, is_informational_status),
    (204, is_success_status),
    (302, is_redirect_status),
    (399, is_redirect_status),
    (404, is_client_error_status),
    (503, is_server_error_status),
])
def test_status_classes(code, checker):
    assert checker(code)


class TestRequest:
    def test_method_upper_cased(self):
        assert Request("post", "https://example.com/").method == "POST"

    def test_str_body_encoded(self):
        assert Request("POST", "https://example.com/", body="привет").body == "привет".encode("utf-8")

    def test_with_header_replaces_case_insensitively(self):
        req = Request("GET", "https://example.com/", [("cookie", "old=1"), ("Accept", "*/*")])
        updated = req.with_header("Cookie", "new=2")
        assert updated.header("cookie") == "new=2"
        assert len([k for k, _ in updated.headers if k.lower() == "cookie"]) == 1
        # original untouched
        assert req.header("Cookie") == "old=1"

    def test_with_header_none_removes(self):
        req = Request("GET", "https://example.com/", {"Cookie": "a=1"})
        assert req.with_header("Cookie", None).header("Cookie") is None


class TestTransportResponse:
    def test_flags(self):
        assert TransportResponse(302).is_redirect
        assert TransportResponse(200).is_success
        assert TransportResponse(500).is_error
        assert not TransportResponse(304).is_error

    def test_text_and_json(self):
        response = TransportResponse(200, body=b'{"ok": true}')
        assert response.text == '{"ok": true}'
        assert response.json() == {"ok": True}
        assert response.content == b'{"ok": true}'

    def test_close_idempotent(self):
        calls = []
        response = TransportResponse(200, release=lambda: calls.append(1))
        response.close()
        response.close()
        assert calls == [1]
        assert response.closed

    def test_context_manager_closes(self):
        calls = []
        with TransportResponse(200, release=lambda: calls.append(1)) as response:
            assert not response.closed
        assert calls == [1]

    def test_header_values_in_order(self):
        response = TransportResponse(200, [("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")])
        assert response.header_values("set-cookie") == ["a=1", "b=2"]
        assert response.header("Set-Cookie") == "a=1"
