"""
Pytest configuration and fixtures
"""

import threading
from typing import Any, Dict, Optional, Tuple

import pytest

from auth_relay import RequestRelay, RelayConfig
from auth_relay.channel import ResultChannel
from auth_relay.exceptions import NetworkError
from auth_relay.http.adapter import HTTPAdapter


class DummyAdapter(HTTPAdapter):
    """Stub HTTP adapter recording every request."""

    def __init__(self, status: int = 200, text: str = '{"ok":true}', exc: Optional[Exception] = None):
        self.requests = []
        self.response_status = status
        self.response_text = text
        self.exc = exc

    @property
    def last_request(self) -> Optional[Dict[str, Any]]:
        return self.requests[-1] if self.requests else None

    def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[bytes] = None,
        timeout: Tuple[float, float] = (15.0, 15.0),
    ) -> Tuple[int, str]:
        self.requests.append(
            {"method": method, "url": url, "headers": headers, "data": data, "timeout": timeout}
        )
        if self.exc is not None:
            raise self.exc
        return self.response_status, self.response_text


class RecordingChannel(ResultChannel):
    """Result channel recording every reply and the thread it arrived on."""

    def __init__(self):
        self.replies = []
        self.threads = []
        self.done = threading.Event()

    def _record(self, reply):
        self.replies.append(reply)
        self.threads.append(threading.current_thread())
        self.done.set()

    def success(self, payload):
        self._record(("success", payload))

    def error(self, code, message, details=None):
        self._record(("error", code, message))

    def not_implemented(self):
        self._record(("not_implemented",))

    def wait(self, timeout: float = 5.0):
        assert self.done.wait(timeout), "no reply delivered"
        return self.replies[0]


@pytest.fixture
def adapter():
    """Stub adapter returning 200 {"ok":true}"""
    return DummyAdapter()


@pytest.fixture
def relay(adapter):
    """Relay wired to the stub adapter"""
    relay = RequestRelay(RelayConfig(max_workers=4), http_adapter=adapter)
    yield relay
    relay.close()


@pytest.fixture
def failing_adapter():
    """Stub adapter that always fails with a network error"""
    return DummyAdapter(exc=NetworkError("Read timed out. (read timeout=15.0)"))
