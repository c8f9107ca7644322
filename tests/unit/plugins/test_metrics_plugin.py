# tests/unit/plugins/test_metrics_plugin.py

import threading

import pytest

from src.http_orchestrator.core.exceptions import ConnectionError
from src.http_orchestrator.core.http_client import HTTPClient
from src.http_orchestrator.core.models import Request, TransportResponse
from src.http_orchestrator.plugins.metrics_plugin import MetricsPlugin
from src.http_orchestrator.plugins.plugin import PluginPriority


def test_metrics_initial_state():
    """Пустые счётчики."""
    metrics = MetricsPlugin().get_metrics()
    assert metrics["total_requests"] == 0
    assert metrics["total_responses"] == 0
    assert metrics["success_rate"] == 0.0


def test_metrics_runs_last():
    assert MetricsPlugin.priority == PluginPriority.LAST


def test_metrics_record_response():
    """Ответ 200 с телом 13 байт."""
    plugin = MetricsPlugin()
    plugin.before_request(Request("GET", "https://example.com/"))
    plugin.after_response(TransportResponse(200, body=b"test response"))

    metrics = plugin.get_metrics()
    assert metrics["total_requests"] == 1
    assert metrics["total_responses"] == 1
    assert metrics["successes"] == 1
    assert metrics["errors"] == 0
    assert metrics["bytes_received"] == 13
    assert plugin.success_rate() == 100.0


def test_metrics_classification():
    plugin = MetricsPlugin()
    for status in (200, 302, 404, 500):
        plugin.after_response(TransportResponse(status))
    plugin.on_error(ConnectionError("refused"))

    metrics = plugin.get_metrics()
    assert metrics["successes"] == 1
    assert metrics["redirects"] == 1
    assert metrics["errors"] == 2
    assert metrics["failures"] == 1
    assert metrics["status_codes"] == {200: 1, 302: 1, 404: 1, 500: 1}
    assert plugin.success_rate() == 25.0


def test_metrics_reset():
    plugin = MetricsPlugin()
    plugin.after_response(TransportResponse(200, body=b"x"))
    plugin.reset()
    assert plugin.get_metrics()["total_responses"] == 0
    assert plugin.get_metrics()["bytes_received"] == 0


def test_metrics_count_every_hop(transport):
    """GET с одним редиректом = 2 запроса, 2 ответа, 1 редирект."""
    transport.redirect(302, "/b").add(200, body=b"done")
    metrics = MetricsPlugin()

    with HTTPClient(base_url="https://example.com", transport=transport, plugins=[metrics]) as client:
        client.get("/a")

    result = metrics.get_metrics()
    assert result["total_requests"] == 2
    assert result["total_responses"] == 2
    assert result["redirects"] == 1
    assert result["successes"] == 1
    assert result["bytes_received"] == 4
    assert metrics.success_rate() == pytest.approx(50.0)


def test_metrics_thread_safety():
    plugin = MetricsPlugin()
    response = TransportResponse(200, body=b"ab")

    def worker():
        for _ in range(500):
            plugin.before_request(Request("GET", "https://example.com/"))
            plugin.after_response(response)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    metrics = plugin.get_metrics()
    assert metrics["total_requests"] == 4000
    assert metrics["total_responses"] == 4000
    assert metrics["bytes_received"] == 8000
