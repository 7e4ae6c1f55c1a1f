"""
Exception classes for the auth relay.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes reported back to the caller."""

    INVALID_ARGS = "INVALID_ARGS"
    NETWORK_ERROR = "NETWORK_ERROR"
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"


class RelayError(Exception):
    """Base exception for all relay errors."""

    code = ErrorCode.NETWORK_ERROR

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value!r}, message={self.message!r})"


class InvalidArgumentsError(RelayError):
    """
    Invalid invocation arguments.

    Raised when a required argument (url, token or body) is missing.
    """

    code = ErrorCode.INVALID_ARGS

    def __init__(self, message: str, field: str = ""):
        super().__init__(message)
        self.field = field


class UnsupportedMethodError(RelayError):
    """Unrecognised method name."""

    code = ErrorCode.NOT_IMPLEMENTED

    def __init__(self, method: str):
        super().__init__(f"method not implemented: {method}")
        self.method = method


class NetworkError(RelayError):
    """
    Network connectivity error.

    Raised for any failure while connecting, writing the request body or
    reading the response, timeouts included.
    """

    code = ErrorCode.NETWORK_ERROR
