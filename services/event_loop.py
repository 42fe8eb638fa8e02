from __future__ import annotations

import concurrent.futures as _fut
import logging
import queue
import threading
import time
from typing import Callable, List, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Timer:
    """Cancellable timer; a cancelled timer never runs, even if already queued."""

    def __init__(self, loop: "EventLoop", delay: float, callback: Callable[[], None]):
        self._loop = loop
        self._callback = callback
        self.cancelled = False
        self.done = False
        self._thread = threading.Timer(max(0.0, delay), loop.call_soon, args=(self._fire,))
        self._thread.daemon = True

    def start(self) -> None:
        self._thread.start()

    def _fire(self) -> None:
        self.done = True
        self._loop._release(self)
        if not self.cancelled:
            self._callback()

    def cancel(self) -> None:
        self.cancelled = True
        self._thread.cancel()


class EventLoop:
    """Single-consumer callback queue.

    Timers and background calls never touch state themselves: on completion
    they enqueue a callback, and callbacks only run on the thread draining
    the queue via run_pending()/run_until().
    """

    def __init__(self, max_workers: int = 2):
        self._queue: "queue.Queue[Callable[[], None]]" = queue.Queue()
        self._executor = _fut.ThreadPoolExecutor(max_workers=max(1, max_workers), thread_name_prefix="people-fetch")
        self._timers: List[_Timer] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending_timers(self) -> int:
        return len(self._timers)

    def call_soon(self, callback: Callable[[], None]) -> None:
        if self._closed:
            return
        self._queue.put(callback)

    def call_later(self, delay: float, callback: Callable[[], None]) -> _Timer:
        timer = _Timer(self, delay, callback)
        if self._closed:
            timer.cancelled = True
            return timer
        self._timers = [t for t in self._timers if not (t.cancelled or t.done)]
        self._timers.append(timer)
        timer.start()
        return timer

    def _release(self, timer: _Timer) -> None:
        # Called on the loop thread when a timer fires
        if timer in self._timers:
            self._timers.remove(timer)

    def submit(self, fn: Callable[[], T], on_done: Callable[[T], None]) -> None:
        if self._closed:
            return
        future = self._executor.submit(fn)

        def _deliver(f: "_fut.Future[T]") -> None:
            if f.cancelled():
                return
            # result() re-raises worker exceptions on the loop thread
            self.call_soon(lambda: on_done(f.result()))

        future.add_done_callback(_deliver)

    def run_pending(self, timeout: Optional[float] = None) -> int:
        """Run queued callbacks; wait up to `timeout` for the first one. Returns how many ran."""
        ran = 0
        while True:
            wait = timeout if (timeout and ran == 0) else None
            try:
                callback = self._queue.get(block=wait is not None, timeout=wait)
            except queue.Empty:
                return ran
            callback()
            ran += 1

    def run_until(self, predicate: Callable[[], bool], timeout: float = 30.0, poll_interval: float = 0.05) -> bool:
        """Drain callbacks until `predicate()` holds or `timeout` elapses."""
        deadline = time.monotonic() + timeout
        while not predicate():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.warning("event loop timed out waiting for condition", extra={"op": "run_until", "status": "timeout"})
                return False
            self.run_pending(timeout=min(poll_interval, remaining))
        return True

    def close(self) -> None:
        """Cancel timers and abandon background calls without waiting for them."""
        if self._closed:
            return
        self._closed = True
        for timer in self._timers:
            timer.cancel()
        self._timers = []
        self._executor.shutdown(wait=False, cancel_futures=True)
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break
