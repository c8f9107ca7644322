# src/http_orchestrator/plugins/metrics_plugin.py

import threading
from typing import Any, Dict, Optional

from ..core.models import Request, TransportResponse
from .plugin import Plugin, PluginPriority


class MetricsPlugin(Plugin):
    """
    Счётчики hop'ов: запросы, ответы, успехи, ошибки, редиректы, байты.

    Считает каждый hop отдельно: GET с двумя редиректами даёт 3 запроса,
    3 ответа и 2 редиректа.

    Классификация ответов:
    - 2xx  -> successes
    - 3xx  -> redirects
    - 4xx/5xx -> errors
    Ошибки транспорта и политики редиректов считаются в failures.

    Example:
        >>> metrics = MetricsPlugin()
        >>> client = HTTPClient(base_url="https://api.example.com", plugins=[metrics])
        >>> client.get("/users")
        >>> metrics.get_metrics()["total_requests"]
        1
        >>> metrics.success_rate()
        100.0
    """

    priority = PluginPriority.LAST

    def __init__(self):
        self._lock = threading.Lock()
        self._reset_counters()

    def _reset_counters(self) -> None:
        self._total_requests = 0
        self._total_responses = 0
        self._successes = 0
        self._redirects = 0
        self._errors = 0
        self._failures = 0
        self._bytes_received = 0
        self._status_codes: Dict[int, int] = {}

    def before_request(self, request: Request) -> Request:
        with self._lock:
            self._total_requests += 1
        return request

    def after_response(self, response: TransportResponse) -> TransportResponse:
        status = response.status_code
        with self._lock:
            self._total_responses += 1
            self._bytes_received += len(response.body)
            self._status_codes[status] = self._status_codes.get(status, 0) + 1

            if response.is_success:
                self._successes += 1
            elif response.is_redirect:
                self._redirects += 1
            elif response.is_error:
                self._errors += 1
        return response

    def on_error(self, error: Exception, request: Optional[Request] = None) -> None:
        with self._lock:
            self._failures += 1

    def success_rate(self) -> float:
        """Доля 2xx среди полученных ответов, в процентах (0.0 без ответов)."""
        with self._lock:
            if self._total_responses == 0:
                return 0.0
            return self._successes / self._total_responses * 100.0

    def get_metrics(self) -> Dict[str, Any]:
        """Снимок счётчиков."""
        rate = self.success_rate()
        with self._lock:
            return {
                'total_requests': self._total_requests,
                'total_responses': self._total_responses,
                'successes': self._successes,
                'redirects': self._redirects,
                'errors': self._errors,
                'failures': self._failures,
                'bytes_received': self._bytes_received,
                'status_codes': dict(self._status_codes),
                'success_rate': rate,
            }

    def reset(self) -> None:
        with self._lock:
            self._reset_counters()
