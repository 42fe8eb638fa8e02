from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _as_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Data service consumed by the directory client
    api_base_url: str
    request_timeout_seconds: float

    # Search box quiescence window
    search_debounce_ms: int

    log_level: str

    # Core/runtime
    db_path: str
    run_env: str

    # Data service process
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    # Logging/tracing
    log_file: str | None = None
    request_trace: bool = False
    request_log_path: str = "logs/api_calls.jsonl"

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    debounce_ms = int(os.getenv("SEARCH_DEBOUNCE_MS", "300"))
    if debounce_ms < 0:
        raise RuntimeError("SEARCH_DEBOUNCE_MS must be zero or a positive number of milliseconds")
    return Settings(
        api_base_url=os.getenv("PEOPLE_API_URL", "http://127.0.0.1:8000").rstrip("/"),
        request_timeout_seconds=float(os.getenv("REQUEST_TIMEOUT", "10")),
        search_debounce_ms=debounce_ms,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE") or None,
        db_path=os.getenv("DB_PATH", "people.db"),
        run_env=os.getenv("RUN_ENV", "local"),
        server_host=os.getenv("SERVER_HOST", "127.0.0.1"),
        server_port=int(os.getenv("SERVER_PORT", "8000")),
        request_trace=_as_bool(os.getenv("REQUEST_TRACE", "false")),
        request_log_path=os.getenv("REQUEST_LOG_PATH", "logs/api_calls.jsonl"),
    )
