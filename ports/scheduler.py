from __future__ import annotations

from typing import Callable, Protocol, TypeVar


T = TypeVar("T")


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class SchedulerPort(Protocol):
    """Serializes callbacks onto one consumer; the only place work may wait."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...

    def submit(self, fn: Callable[[], T], on_done: Callable[[T], None]) -> None:
        ...
