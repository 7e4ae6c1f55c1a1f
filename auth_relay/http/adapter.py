"""
Base HTTP adapter interface.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple


class HTTPAdapter(ABC):
    """
    Abstract base class for HTTP adapters.

    Allows the relay to run against a stub transport in tests.
    """

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[bytes] = None,
        timeout: Tuple[float, float] = (15.0, 15.0),
    ) -> Tuple[int, str]:
        """
        Send one HTTP request.

        Args:
            method: HTTP method (GET or POST)
            url: Absolute request URL
            headers: Request headers
            data: Raw request payload, sent verbatim
            timeout: (connect, read) timeouts in seconds

        Returns:
            Tuple of (status_code, response_text)

        Raises:
            NetworkError: On any connection, write or read failure
        """
        raise NotImplementedError
