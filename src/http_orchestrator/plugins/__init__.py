# src/http_orchestrator/plugins/__init__.py
from .metrics_plugin import MetricsPlugin
from .plugin import Plugin, PluginPriority

__all__ = [
    "Plugin",
    "PluginPriority",
    "MetricsPlugin",
]
