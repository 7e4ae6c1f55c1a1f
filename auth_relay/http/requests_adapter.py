"""
Requests-based HTTP adapter (synchronous).
"""

import logging
from typing import Dict, Optional, Tuple

import requests
import requests.auth

from .adapter import HTTPAdapter
from ..exceptions import NetworkError

logger = logging.getLogger("auth_relay.http")


def decode_body(content: Optional[bytes]) -> str:
    """Decode a response stream as UTF-8, empty string when there is none."""
    if not content:
        return ""
    return content.decode("utf-8", errors="replace")


class AuthorizationHeader(requests.auth.AuthBase):
    """
    Sets a fixed Authorization header on the outgoing request.

    Passed as ``auth=`` so requests never substitutes credentials from
    ``~/.netrc`` or ``$NETRC``.
    """

    def __init__(self, value: str):
        self.value = value

    def __call__(self, r):
        r.headers["Authorization"] = self.value
        return r


class RequestsAdapter(HTTPAdapter):
    """
    Synchronous HTTP adapter using requests library.

    Each call opens its own session and closes it before returning, so no
    connection is pooled or shared between calls. No retries are configured.
    """

    def __init__(self, session_factory=requests.Session):
        """
        Initialize requests adapter.

        Args:
            session_factory: Callable returning a fresh requests.Session
        """
        self.session_factory = session_factory

    def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[bytes] = None,
        timeout: Tuple[float, float] = (15.0, 15.0),
    ) -> Tuple[int, str]:
        """
        Send HTTP request using requests library.

        Args:
            method: HTTP method
            url: Request URL
            headers: Request headers
            data: Raw request payload
            timeout: (connect, read) timeouts in seconds

        Returns:
            Tuple of (status_code, response_text)

        Raises:
            NetworkError: On connectivity issues, timeouts included
        """
        headers = dict(headers)
        authorization = headers.pop("Authorization", None)
        auth = AuthorizationHeader(authorization) if authorization is not None else None

        try:
            with self.session_factory() as session:
                response = session.request(
                    method=method,
                    url=url,
                    headers=headers,
                    data=data,
                    auth=auth,
                    timeout=timeout,
                )
                try:
                    # Same capture for the success and the error stream.
                    return response.status_code, decode_body(response.content)
                finally:
                    response.close()

        except requests.exceptions.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkError(str(e)) from e
