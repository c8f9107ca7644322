# tests/unit/plugins/test_plugin_ordering.py

from src.http_orchestrator.core.http_client import HTTPClient
from src.http_orchestrator.core.models import Request, TransportResponse
from src.http_orchestrator.plugins.plugin import Plugin, PluginPriority


class OrderPlugin(Plugin):
    def __init__(self, name, priority, calls):
        self.name = name
        self.priority = priority
        self.calls = calls

    def before_request(self, request):
        self.calls.append(self.name)
        return request


def test_base_plugin_hooks_are_noops():
    plugin = Plugin()
    request = Request("GET", "https://example.com/")
    response = TransportResponse(200)
    assert plugin.before_request(request) is request
    assert plugin.after_response(response) is response
    assert plugin.on_error(ValueError("x"), request) is None
    assert plugin.priority == PluginPriority.NORMAL


def test_plugins_sorted_by_priority(transport):
    transport.add(200)
    calls = []
    client = HTTPClient(
        base_url="https://example.com",
        transport=transport,
        plugins=[
            OrderPlugin("normal", PluginPriority.NORMAL, calls),
            OrderPlugin("last", PluginPriority.LAST, calls),
            OrderPlugin("first", PluginPriority.FIRST, calls),
        ],
    )

    client.get("/")

    assert calls == ["first", "normal", "last"]


def test_equal_priority_keeps_insertion_order(transport):
    transport.add(200)
    calls = []
    client = HTTPClient(base_url="https://example.com", transport=transport)
    client.add_plugin(OrderPlugin("a", PluginPriority.HIGH, calls))
    client.add_plugin(OrderPlugin("b", PluginPriority.HIGH, calls))

    client.get("/")

    assert calls == ["a", "b"]


def test_remove_plugin(transport):
    transport.add(200)
    calls = []
    plugin = OrderPlugin("gone", PluginPriority.NORMAL, calls)
    client = HTTPClient(base_url="https://example.com", transport=transport, plugins=[plugin])

    client.remove_plugin(plugin)
    client.remove_plugin(plugin)
    client.get("/")

    assert calls == []
    assert client.plugins == []
