"""
Result channel: the single-reply surface handed to the relay with each call.
"""

import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import Any, Dict, Optional

from .exceptions import ErrorCode
from .models import Outcome, Success, Failure

CHANNEL_NAME = "com.tfm.metas_app/auth_me"


class ResultChannel(ABC):
    """
    Receives exactly one terminal reply per method call.

    Mirrors a platform method-channel result: ``success`` with a payload,
    ``error`` with a code and message, or ``not_implemented``.
    """

    @abstractmethod
    def success(self, payload: Dict[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def error(self, code: str, message: str, details: Optional[Any] = None) -> None:
        raise NotImplementedError

    @abstractmethod
    def not_implemented(self) -> None:
        raise NotImplementedError


class FutureResultChannel(ResultChannel):
    """
    Single-fire channel backed by a ``concurrent.futures.Future``.

    The future resolves to a ``Success`` or ``Failure`` outcome. A second
    reply raises ``RuntimeError``.
    """

    def __init__(self):
        self.future: "Future[Outcome]" = Future()
        self._lock = threading.Lock()
        self._replied = False

    def _reply(self, outcome: Outcome) -> None:
        with self._lock:
            if self._replied:
                raise RuntimeError("Reply already submitted")
            self._replied = True
        self.future.set_result(outcome)

    def success(self, payload: Dict[str, Any]) -> None:
        self._reply(Success(status_code=payload["statusCode"], body=payload["body"]))

    def error(self, code: str, message: str, details: Optional[Any] = None) -> None:
        self._reply(Failure(code=ErrorCode(code), message=message or ""))

    def not_implemented(self) -> None:
        self._reply(Failure(code=ErrorCode.NOT_IMPLEMENTED, message="not implemented"))

    @property
    def replied(self) -> bool:
        return self._replied

    def result(self, timeout: Optional[float] = None) -> Outcome:
        return self.future.result(timeout=timeout)
