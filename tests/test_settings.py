from __future__ import annotations

import logging

import pytest

from config.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("PEOPLE_API_URL", "SEARCH_DEBOUNCE_MS", "REQUEST_TRACE", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert s.api_base_url == "http://127.0.0.1:8000"
    assert s.search_debounce_ms == 300
    assert s.search_debounce_seconds == pytest.approx(0.3)
    assert s.request_trace is False
    assert s.log_file is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PEOPLE_API_URL", "http://people.internal:9000/")
    monkeypatch.setenv("SEARCH_DEBOUNCE_MS", "0")
    monkeypatch.setenv("REQUEST_TRACE", "yes")
    s = get_settings()
    assert s.api_base_url == "http://people.internal:9000"
    assert s.search_debounce_seconds == 0
    assert s.request_trace is True


def test_negative_debounce_is_rejected(monkeypatch):
    monkeypatch.setenv("SEARCH_DEBOUNCE_MS", "-5")
    with pytest.raises(RuntimeError):
        get_settings()


def test_formatter_fills_missing_extras():
    from utils.logging_setup import SafeExtraFormatter

    formatter = SafeExtraFormatter(fmt="%(message)s op=%(op)s generation=%(generation)s")
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "hello", None, None)
    record.op = "fetch_all"
    assert formatter.format(record) == "hello op=fetch_all generation=-"
