"""
Dispatchers marshal the terminal reply back onto the caller's context.

A dispatcher is any callable taking a zero-argument callback and arranging
for it to run where the caller expects replies.
"""

import asyncio
import logging
import queue
import threading
from typing import Callable, Optional

logger = logging.getLogger("auth_relay.dispatch")

Callback = Callable[[], None]
Dispatcher = Callable[[Callback], None]


def run_inline(callback: Callback) -> None:
    """Run the callback on whichever thread produced the reply."""
    callback()


def asyncio_dispatcher(loop: asyncio.AbstractEventLoop) -> Dispatcher:
    """
    Dispatcher delivering replies on an asyncio event loop.

    Args:
        loop: Event loop that owns the result channel

    Returns:
        Dispatcher using ``loop.call_soon_threadsafe``
    """

    def dispatch(callback: Callback) -> None:
        loop.call_soon_threadsafe(callback)

    return dispatch


class MainThreadDispatcher:
    """
    Run-queue owned by a single thread, e.g. a UI thread.

    Worker threads ``post`` callbacks; the owning thread drains them with
    ``run_pending`` or ``run_until``.

    Example:
        >>> dispatcher = MainThreadDispatcher()
        >>> relay = RequestRelay(dispatcher=dispatcher)
        >>> relay.handle("fetch", {"url": url, "token": token}, channel)
        >>> dispatcher.run_until(lambda: channel.replied, timeout=30)
    """

    def __init__(self, owner: Optional[threading.Thread] = None):
        self.owner = owner or threading.current_thread()
        self._queue: "queue.Queue[Callback]" = queue.Queue()

    def __call__(self, callback: Callback) -> None:
        self.post(callback)

    def post(self, callback: Callback) -> None:
        self._queue.put(callback)

    def _check_thread(self) -> None:
        if threading.current_thread() is not self.owner:
            raise RuntimeError("Dispatcher drained from a thread that does not own it")

    def run_pending(self) -> int:
        """Run every queued callback. Returns how many ran."""
        self._check_thread()
        count = 0
        while True:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                return count
            callback()
            count += 1

    def run_until(self, predicate: Callable[[], bool], timeout: Optional[float] = None) -> bool:
        """
        Block the owning thread, running callbacks until ``predicate`` holds.

        Args:
            predicate: Stop condition checked after each callback
            timeout: Maximum seconds to wait for each callback

        Returns:
            True if the predicate became true, False on timeout
        """
        self._check_thread()
        while not predicate():
            try:
                callback = self._queue.get(timeout=timeout)
            except queue.Empty:
                logger.debug("Timed out waiting for queued reply")
                return False
            callback()
        return True
