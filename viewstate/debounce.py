from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

from ports.scheduler import SchedulerPort, TimerHandle


T = TypeVar("T")


class Debouncer(Generic[T]):
    """Delivers the latest triggered value once `delay` passes with no newer trigger."""

    def __init__(self, scheduler: SchedulerPort, delay: float, callback: Callable[[T], None]):
        self.scheduler = scheduler
        self.delay = delay
        self.callback = callback
        self._handle: Optional[TimerHandle] = None
        self._value: Optional[T] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, value: T) -> None:
        self.cancel()
        self._value = value
        self._handle = self.scheduler.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> None:
        if self._handle is None:
            return
        self.cancel()
        self.callback(self._value)  # type: ignore[arg-type]

    def _fire(self) -> None:
        self._handle = None
        self.callback(self._value)  # type: ignore[arg-type]
