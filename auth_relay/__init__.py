"""
Auth Relay

Relays authenticated HTTP requests issued by a UI layer and replies with the
status code and raw body text, or a typed error.
"""

from auth_relay.relay import RequestRelay
from auth_relay.config import RelayConfig
from auth_relay.channel import CHANNEL_NAME, ResultChannel, FutureResultChannel
from auth_relay.dispatch import MainThreadDispatcher, asyncio_dispatcher, run_inline
from auth_relay.models import (
    RelayMethod,
    MethodCall,
    RelayRequest,
    Success,
    Failure,
    Outcome,
)
from auth_relay.exceptions import (
    ErrorCode,
    RelayError,
    InvalidArgumentsError,
    UnsupportedMethodError,
    NetworkError,
)
from auth_relay.__version__ import __version__

__all__ = [
    "RequestRelay",
    "RelayConfig",
    "CHANNEL_NAME",
    "ResultChannel",
    "FutureResultChannel",
    "MainThreadDispatcher",
    "asyncio_dispatcher",
    "run_inline",
    "RelayMethod",
    "MethodCall",
    "RelayRequest",
    "Success",
    "Failure",
    "Outcome",
    "ErrorCode",
    "RelayError",
    "InvalidArgumentsError",
    "UnsupportedMethodError",
    "NetworkError",
    "__version__",
]
