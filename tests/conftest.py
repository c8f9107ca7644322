"""
Pytest configuration and fixtures for http-orchestrator tests.
"""

from typing import List, Optional, Tuple

import pytest
import responses as responses_lib

from src.http_orchestrator.core.http_client import HTTPClient
from src.http_orchestrator.core.logging.config import LoggingConfig
from src.http_orchestrator.core.models import Request, TransportResponse
from src.http_orchestrator.transport.base import Transport


class ScriptedTransport(Transport):
    """
    In-memory transport that replays scripted hops.

    Every ``send_once`` pops the next scripted item: a TransportResponse
    (returned), or an exception instance (raised). Sent hops are recorded in
    ``sent`` as Request objects; ``closed_responses`` counts releases.
    """

    def __init__(self, script=None):
        self._script = list(script or [])
        self.sent: List[Request] = []
        self.timeouts: List[Optional[Tuple[float, float]]] = []
        self.closed_responses = 0
        self.closed = False

    def add(self, status_code: int = 200, headers=None, body: bytes = b"", transfer_decoded: bool = True):
        self._script.append((status_code, headers, body, transfer_decoded))
        return self

    def redirect(self, status_code: int, location: Optional[str], headers=None):
        pairs = list(headers or [])
        if location is not None:
            pairs.append(("Location", location))
        return self.add(status_code, pairs)

    def raise_error(self, error: Exception):
        self._script.append(error)
        return self

    def _release(self):
        self.closed_responses += 1

    def send_once(self, method, url, headers, body, timeout=None):
        self.sent.append(Request(method, url, headers, body))
        self.timeouts.append(timeout)

        if not self._script:
            raise AssertionError(f"Unexpected hop: {method} {url}")

        item = self._script.pop(0)
        if isinstance(item, Exception):
            raise item

        status_code, headers_, body_, transfer_decoded = item
        return TransportResponse(
            status_code=status_code,
            headers=headers_,
            body=body_,
            url=url,
            transfer_decoded=transfer_decoded,
            release=self._release,
        )

    def close(self):
        self.closed = True


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest.fixture
def transport():
    """Scripted in-memory transport."""
    return ScriptedTransport()


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def client(base_url):
    """HTTP client over the real requests transport (mock with responses)."""
    client = HTTPClient(base_url=base_url, timeout=10)
    yield client
    client.close()


@pytest.fixture
def logging_config():
    """Console logging at DEBUG level."""
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=True,
        enable_file=False
    )


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig fixture with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "test.log"
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(log_file)
    )
