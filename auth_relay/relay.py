"""
Request relay: validates a method call, performs one authenticated HTTP
request off the calling thread and replies exactly once.
"""

import asyncio
import logging
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Dict, Optional

from .channel import FutureResultChannel, ResultChannel
from .config import RelayConfig
from .dispatch import Dispatcher, run_inline
from .exceptions import ErrorCode, RelayError
from .http.adapter import HTTPAdapter
from .http.requests_adapter import RequestsAdapter
from .logging_setup import sanitize_for_logging, setup_logging, setup_structured_logger
from .metrics import metrics_request
from .models import Failure, MethodCall, Outcome, RelayRequest, Success

logger = logging.getLogger("auth_relay.relay")


class RequestRelay:
    """
    Relay for authenticated GET/POST calls issued by a UI layer.

    Recognised methods are ``getAuthMe`` and ``fetch`` (GET) and ``post``
    (POST). Every call gets exactly one reply on its result channel:
    ``success({"statusCode": ..., "body": ...})`` for any HTTP status,
    ``error("INVALID_ARGS" | "NETWORK_ERROR", message)`` or
    ``not_implemented()``.

    Examples:
        >>> with RequestRelay() as relay:
        ...     outcome = relay.submit(
        ...         "fetch", {"url": "https://api.example.com/me", "token": "t0k"}
        ...     ).result()
        >>> outcome.status_code
        200
    """

    def __init__(
        self,
        config: Optional[RelayConfig] = None,
        http_adapter: Optional[HTTPAdapter] = None,
        executor: Optional[Executor] = None,
        dispatcher: Optional[Dispatcher] = None,
    ):
        """
        Initialize the relay.

        Args:
            config: Relay configuration (default: RelayConfig())
            http_adapter: Optional custom HTTP adapter
            executor: Optional executor for background work; owned and shut
                down by the relay when not given
            dispatcher: Runs the reply on the caller's context (default: inline)
        """
        self.config = config or RelayConfig()
        if self.config.debug:
            if self.config.log_format == "json":
                setup_structured_logger(logging.DEBUG)
            else:
                setup_logging(debug=True)

        self.http = http_adapter or RequestsAdapter()
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(
            max_workers=self.config.max_workers, thread_name_prefix="auth-relay"
        )
        self.dispatcher = dispatcher or run_inline

    def __enter__(self) -> "RequestRelay":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the owned executor, waiting for in-flight calls."""
        if self._owns_executor:
            self.executor.shutdown(wait=True)

    def handle(self, method: str, arguments: Optional[Dict[str, Any]], result: ResultChannel) -> None:
        """
        Handle one method call.

        Validation happens synchronously on the calling thread; rejected
        calls are answered before this method returns and never touch the
        network. Valid calls are executed on the worker pool and answered
        through the dispatcher.

        Args:
            method: Method name
            arguments: Argument map (url, token, and body for post)
            result: Channel receiving the single reply
        """
        try:
            call = MethodCall.from_raw(method, arguments)
            request = RelayRequest.from_call(call)
        except RelayError as e:
            logger.debug("Rejected [%s]: %s", method, e.message)
            self._reply(result, Failure(code=e.code, message=e.message))
            return

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("[%s] -> %s %s", method, request.method, sanitize_for_logging(call.arguments))

        try:
            self.executor.submit(self._run, request, result)
        except RuntimeError as e:
            # Executor already shut down
            logger.error("Cannot schedule [%s]: %s", method, e)
            self._reply(result, Failure(code=ErrorCode.NETWORK_ERROR, message=str(e)))

    def submit(self, method: str, arguments: Optional[Dict[str, Any]] = None) -> "Future[Outcome]":
        """
        Handle a call and return a future resolving to its outcome.

        Returns:
            Future resolving to Success or Failure
        """
        channel = FutureResultChannel()
        self.handle(method, arguments, channel)
        return channel.future

    async def handle_async(self, method: str, arguments: Optional[Dict[str, Any]] = None) -> Outcome:
        """
        Await the outcome of a call from a coroutine.

        The outcome is resolved on the running event loop.
        """
        return await asyncio.wrap_future(self.submit(method, arguments))

    def execute(self, request: RelayRequest) -> Success:
        """
        Perform the HTTP exchange for a validated request.

        Args:
            request: Validated request

        Returns:
            Success with the literal status code and decoded body

        Raises:
            NetworkError: On any connection, write or read failure
        """
        data = request.body.encode("utf-8") if request.body is not None else None

        status, text = self.http.send(
            method=request.method,
            url=request.url,
            headers=request.headers(),
            data=data,
            timeout=self.config.timeout,
        )

        logger.debug(
            "[%s] <- status=%d | bodyLength=%d body=%s",
            request.relay_method.value,
            status,
            len(text),
            text,
            extra={"method": request.relay_method.value, "status_code": status},
        )
        return Success(status_code=status, body=text)

    def _run(self, request: RelayRequest, result: ResultChannel) -> None:
        start = time.time()
        method = request.relay_method.value

        try:
            outcome: Outcome = self.execute(request)
            label = str(outcome.status_code)
        except RelayError as e:
            outcome = Failure(code=e.code, message=e.message)
            label = e.code.value
        except Exception as e:
            logger.exception("Unexpected failure in [%s]", method)
            outcome = Failure(code=ErrorCode.NETWORK_ERROR, message=str(e))
            label = ErrorCode.NETWORK_ERROR.value

        metrics_request(method, label, time.time() - start)
        try:
            self.dispatcher(lambda: self._reply(result, outcome))
        except Exception:
            logger.exception("Failed to deliver reply for [%s]", method)

    @staticmethod
    def _reply(result: ResultChannel, outcome: Outcome) -> None:
        if isinstance(outcome, Success):
            result.success(outcome.to_payload())
        elif outcome.code is ErrorCode.NOT_IMPLEMENTED:
            result.not_implemented()
        else:
            result.error(outcome.code.value, outcome.message, None)
