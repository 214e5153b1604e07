"""
Thread synchronisation primitives used by a single lookup race.

- CancellationToken: set-once signal telling in-flight fetchers to stop.
- CompletionTracker: wait-group counting fetcher terminations.
- ResultChannel: bounded, closeable handoff of results to the coordinator.

Each race builds fresh instances; none of them are meant to be reused.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any, Callable, Deque, List, Optional

logger = logging.getLogger(__name__)

Callback = Callable[[], Any]


def _invoke(callback: Callback) -> None:
    try:
        callback()
    except Exception:
        logger.exception("Callback %r raised", callback)


class CancellationToken:
    """
    Write-once, read-many cancellation signal.

    The first call to :meth:`cancel` flips the token and runs the registered
    callbacks; later calls are no-ops. Fetchers hook transport teardown in
    through :meth:`add_callback` so a cancel aborts work in flight.
    """

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callback] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> bool:
        """
        Signal cancellation.

        Returns:
            True for the call that actually signalled the token, False if it
            was already cancelled.
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []

        for callback in callbacks:
            _invoke(callback)
        return True

    def add_callback(self, callback: Callback) -> None:
        """Run ``callback`` on cancel, or right away if already cancelled."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        _invoke(callback)

    def remove_callback(self, callback: Callback) -> None:
        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._event.wait(timeout)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(cancelled={self.cancelled})"


class CompletionTracker:
    """
    Counting barrier: parties call :meth:`done` once each, waiters block in
    :meth:`wait` until the counter drops to zero.
    """

    def __init__(self, count: int = 0):
        self._cond = threading.Condition()
        self._pending = 0
        if count:
            self.add(count)

    @property
    def pending(self) -> int:
        with self._cond:
            return self._pending

    def add(self, delta: int = 1) -> None:
        with self._cond:
            if self._pending + delta < 0:
                raise ValueError("CompletionTracker counter went negative")
            self._pending += delta
            if self._pending == 0:
                self._cond.notify_all()

    def done(self) -> None:
        self.add(-1)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until every party is done. Returns False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._pending == 0, timeout)


class ChannelClosed(Exception):
    """Publish attempted on a closed channel."""


class ChannelFull(Exception):
    """Publish attempted on a channel already holding ``capacity`` items."""


class ResultChannel:
    """
    Bounded buffer that never blocks writers.

    Capacity is fixed at construction; a publish past it raises
    :class:`ChannelFull` instead of waiting. Closing wakes every reader and
    fires the close callbacks; buffered items stay readable after close.
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self.capacity = capacity
        self._items: Deque[Any] = deque()
        self._closed = False
        self._cond = threading.Condition()
        self._close_callbacks: List[Callback] = []

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def publish(self, item: Any) -> None:
        with self._cond:
            if self._closed:
                raise ChannelClosed("publish on closed channel")
            if len(self._items) >= self.capacity:
                raise ChannelFull(f"channel full ({self.capacity} items)")
            self._items.append(item)
            self._cond.notify()

    def close(self) -> None:
        with self._cond:
            if self._closed:
                return
            self._closed = True
            self._cond.notify_all()
            callbacks, self._close_callbacks = self._close_callbacks, []

        for callback in callbacks:
            _invoke(callback)

    def add_close_callback(self, callback: Callback) -> None:
        """Run ``callback`` on close, or right away if already closed."""
        with self._cond:
            if not self._closed:
                self._close_callbacks.append(callback)
                return
        _invoke(callback)

    def receive(self, timeout: Optional[float] = None) -> Optional[Any]:
        """
        Take the next item.

        Returns:
            The oldest buffered item, or None once the channel is closed and
            drained.

        Raises:
            TimeoutError: If nothing arrived and the channel stayed open for
                ``timeout`` seconds.
        """
        with self._cond:
            ready = self._cond.wait_for(
                lambda: bool(self._items) or self._closed, timeout
            )
            if not ready:
                raise TimeoutError("no item received")
            if self._items:
                return self._items.popleft()
            return None
