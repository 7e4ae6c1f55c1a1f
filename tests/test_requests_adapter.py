"""
Tests for the requests-based HTTP adapter
"""

import socket

import pytest
import requests
from requests_mock import Mocker

from auth_relay import RequestRelay, RelayConfig, Success, Failure, ErrorCode
from auth_relay.exceptions import NetworkError
from auth_relay.http.requests_adapter import AuthorizationHeader, RequestsAdapter, decode_body

URL = "https://api.example.com/v1/auth/me"
HEADERS = {
    "Authorization": "Bearer tok_123",
    "Content-Type": "application/json",
    "Accept": "application/json",
    "Connection": "close",
}


@pytest.fixture
def http():
    """Adapter under test"""
    return RequestsAdapter()


def test_get_success(http):
    """Test successful GET returns status and body"""
    with Mocker() as m:
        m.get(URL, text='{"ok":true}', status_code=200)

        status, text = http.send("GET", URL, HEADERS)

    assert status == 200
    assert text == '{"ok":true}'


def test_error_stream_captured(http):
    """Test error body is returned for non-2xx status"""
    with Mocker() as m:
        m.get(URL, text="not found", status_code=404)

        assert http.send("GET", URL, HEADERS) == (404, "not found")


def test_missing_error_stream_is_empty(http):
    """Test empty error body becomes empty string"""
    with Mocker() as m:
        m.get(URL, status_code=500)

        assert http.send("GET", URL, HEADERS) == (500, "")


def test_post_sends_headers_and_exact_payload(http):
    """Test POST carries headers and exact payload bytes"""
    with Mocker() as m:
        m.post(URL, text='{"x":1}', status_code=201)

        status, text = http.send("POST", URL, HEADERS, data=b'{"x":1}')

        last_request = m.last_request
        assert last_request.method == "POST"
        assert last_request.headers["Authorization"] == "Bearer tok_123"
        assert last_request.headers["Content-Type"] == "application/json"
        assert last_request.headers["Accept"] == "application/json"
        assert last_request.headers["Connection"] == "close"
        assert last_request.body == b'{"x":1}'

    assert (status, text) == (201, '{"x":1}')


def test_bearer_header_not_replaced_by_netrc(http, tmp_path, monkeypatch):
    """Test netrc credentials never replace the bearer header"""
    netrc_file = tmp_path / "netrc"
    netrc_file.write_text("machine api.example.com login alice password hunter2\n")
    netrc_file.chmod(0o600)
    monkeypatch.setenv("NETRC", str(netrc_file))

    with Mocker() as m:
        m.get(URL, text="{}", status_code=200)

        http.send("GET", URL, HEADERS)

        assert m.last_request.headers["Authorization"] == "Bearer tok_123"


def test_relay_bearer_header_with_netrc(tmp_path, monkeypatch):
    """Test relayed call keeps the bearer token when the host has a netrc entry"""
    netrc_file = tmp_path / "netrc"
    netrc_file.write_text("machine api.example.com login alice password hunter2\n")
    netrc_file.chmod(0o600)
    monkeypatch.setenv("NETRC", str(netrc_file))

    with Mocker() as m, RequestRelay() as relay:
        m.get(URL, text='{"ok":true}', status_code=200)

        outcome = relay.submit("fetch", {"url": URL, "token": "tok_123"}).result(timeout=5)

        assert m.last_request.headers["Authorization"] == "Bearer tok_123"

    assert outcome == Success(status_code=200, body='{"ok":true}')


def test_timeout_is_network_error(http):
    """Test connect timeout raises NetworkError"""
    with Mocker() as m:
        m.get(URL, exc=requests.exceptions.ConnectTimeout("connect timed out"))

        with pytest.raises(NetworkError) as exc_info:
            http.send("GET", URL, HEADERS)

    assert "connect timed out" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectTimeout)


def test_connection_error_is_network_error(http):
    """Test connection failure raises NetworkError"""
    with Mocker() as m:
        m.get(URL, exc=requests.exceptions.ConnectionError("refused"))

        with pytest.raises(NetworkError):
            http.send("GET", URL, HEADERS)


def test_invalid_url_is_network_error(http):
    """Test malformed url raises NetworkError"""
    with pytest.raises(NetworkError):
        http.send("GET", "not a url", HEADERS)


def test_timeout_tuple_and_session_closed():
    """Test timeout tuple is passed and session and response are closed"""
    calls = {}

    class FakeResponse:
        status_code = 200
        content = b"{}"

        def close(self):
            calls["response_closed"] = True

    class FakeSession:
        def __enter__(self):
            return self

        def __exit__(self, *exc):
            calls["session_closed"] = True

        def request(self, **kwargs):
            calls["kwargs"] = kwargs
            return FakeResponse()

    http = RequestsAdapter(session_factory=FakeSession)
    assert http.send("GET", URL, HEADERS, timeout=(15.0, 15.0)) == (200, "{}")

    assert calls["kwargs"]["timeout"] == (15.0, 15.0)
    assert calls["kwargs"]["data"] is None
    assert isinstance(calls["kwargs"]["auth"], AuthorizationHeader)
    assert calls["kwargs"]["auth"].value == "Bearer tok_123"
    assert "Authorization" not in calls["kwargs"]["headers"]
    assert HEADERS["Authorization"] == "Bearer tok_123"
    assert calls["response_closed"]
    assert calls["session_closed"]


def test_decode_body():
    """Test response body decoding"""
    assert decode_body(None) == ""
    assert decode_body(b"") == ""
    assert decode_body("héllo".encode("utf-8")) == "héllo"
    assert decode_body(b"\xff") == "\ufffd"


class TestRelayOverRequests:
    """End-to-end through the relay with requests_mock"""

    def test_fetch_ok(self):
        """Test fetch through the relay returns 200 body"""
        with Mocker() as m, RequestRelay() as relay:
            m.get(URL, text='{"ok":true}', status_code=200)

            outcome = relay.submit("fetch", {"url": URL, "token": "tok_123"}).result(timeout=5)

        assert outcome == Success(status_code=200, body='{"ok":true}')

    def test_fetch_not_found(self):
        """Test 404 through the relay is a success reply"""
        with Mocker() as m, RequestRelay() as relay:
            m.get(URL, text="not found", status_code=404)

            outcome = relay.submit("fetch", {"url": URL, "token": "tok_123"}).result(timeout=5)

        assert outcome == Success(status_code=404, body="not found")

    def test_post_echo(self):
        """Test post through the relay sends headers and payload"""
        with Mocker() as m, RequestRelay() as relay:
            m.post(URL, text=lambda request, context: request.body.decode("utf-8"))

            outcome = relay.submit(
                "post", {"url": URL, "token": "tok_123", "body": '{"x":1}'}
            ).result(timeout=5)

            assert m.last_request.headers["Authorization"] == "Bearer tok_123"
            assert m.last_request.headers["Content-Type"] == "application/json"
            assert m.last_request.body == b'{"x":1}'

        assert outcome == Success(status_code=200, body='{"x":1}')

    def test_repeated_calls_same_result(self):
        """Test repeated calls hit the server each time with the same result"""
        with Mocker() as m, RequestRelay() as relay:
            m.get(URL, text='{"ok":true}', status_code=200)

            outcomes = [
                relay.submit("getAuthMe", {"url": URL, "token": "tok_123"}).result(timeout=5)
                for _ in range(3)
            ]

            assert m.call_count == 3

        assert outcomes[0] == outcomes[1] == outcomes[2]

    def test_unresponsive_server_times_out(self):
        """Test server that never answers fails with NETWORK_ERROR"""
        # Accepts connections via the listen backlog but never answers.
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        server.bind(("127.0.0.1", 0))
        server.listen(1)
        url = "http://127.0.0.1:%d/auth/me" % server.getsockname()[1]

        try:
            config = RelayConfig(connect_timeout=0.5, read_timeout=0.5)
            with RequestRelay(config) as relay:
                outcome = relay.submit("fetch", {"url": url, "token": "tok_123"}).result(timeout=10)
        finally:
            server.close()

        assert isinstance(outcome, Failure)
        assert outcome.code is ErrorCode.NETWORK_ERROR
