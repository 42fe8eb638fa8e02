from __future__ import annotations

import json
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'services.query'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


class _ManualTimer:
    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual clock: timers fire on advance(); submitted calls wait until completed by the test."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[_ManualTimer] = []
        self.pending: List[tuple] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualTimer:
        timer = _ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def submit(self, fn, on_done) -> None:
        self.pending.append((fn, on_done))

    @property
    def active_timers(self) -> List[_ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted((t for t in self.active_timers if t.due <= self.now), key=lambda t: t.due)
        for timer in due:
            self.timers.remove(timer)
            if not timer.cancelled:
                timer.callback()

    def complete(self, index: int = 0) -> None:
        """Run the submitted call and deliver its result."""
        fn, on_done = self.pending.pop(index)
        on_done(fn())

    def complete_with(self, outcome: Any, index: int = 0) -> None:
        """Deliver a canned result without running the submitted call."""
        _fn, on_done = self.pending.pop(index)
        on_done(outcome)


class StubGateway:
    def __init__(self, outcomes: Optional[List[Any]] = None):
        self.outcomes = list(outcomes or [])
        self.calls = 0

    def fetch_all_records(self):
        self.calls += 1
        return self.outcomes.pop(0)

    def fetch_record_by_id(self, identifier):
        raise AssertionError("not used by the directory controller")


class FakeSession:
    """Stands in for requests.Session: canned responses (or exceptions) per URL."""

    def __init__(self, routes: Dict[str, Any]):
        self.routes = routes
        self.calls: List[str] = []

    def get(self, url, **kwargs):
        self.calls.append(url)
        result = self.routes[url]
        if isinstance(result, Exception):
            raise result
        return result


def make_response(status_code: int, body: Any = None, raw: Optional[bytes] = None):
    import requests

    resp = requests.Response()
    resp.status_code = status_code
    resp._content = raw if raw is not None else json.dumps(body).encode("utf-8")
    resp.headers["Content-Type"] = "application/json"
    resp.encoding = "utf-8"
    return resp


BASE_TIME = datetime(2025, 10, 25, 18, 34, 57, 779000, tzinfo=timezone.utc)


@pytest.fixture
def make_person():
    from models.person_record import PersonRecord

    def _make(entry_number: int, name: str, *, id: Optional[int] = None, created_at: Optional[datetime] = None, **handles):
        return PersonRecord(
            id=id if id is not None else entry_number,
            entry_number=entry_number,
            name=name,
            created_at=created_at or BASE_TIME + timedelta(milliseconds=entry_number),
            **handles,
        )

    return _make


@pytest.fixture
def sample_people(make_person):
    return [
        make_person(1, "Santos Flores"),
        make_person(2, "Juan Perez", twitter_handle="@juanp"),
        make_person(3, "John Doe", instagram_handle="@johndoe"),
    ]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def stub_gateway():
    return StubGateway


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def api_settings():
    from config.settings import Settings

    return Settings(
        api_base_url="http://people.test",
        request_timeout_seconds=5,
        search_debounce_ms=300,
        log_level="INFO",
        db_path=":memory:",
        run_env="test",
    )
