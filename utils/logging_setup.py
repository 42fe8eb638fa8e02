from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any

from config.settings import get_settings


_INITIALIZED: bool = False

# Chatty third-party loggers that would drown the directory's own lines
_NOISY_LOGGERS = ("urllib3", "httpx", "uvicorn.access")


class SafeExtraFormatter(logging.Formatter):
    """Formatter that tolerates missing extra fields by injecting defaults."""

    DEFAULTS: dict[str, Any] = {
        "op": "-",
        "status": "-",
        "duration_ms": "-",
        "generation": "-",
        "error": "-",
        "run_id": "-",
    }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        for key, value in self.DEFAULTS.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        if record.run_id == "-" and os.getenv("RUN_ID"):
            record.run_id = os.getenv("RUN_ID")
        return super().format(record)


def _formatter() -> SafeExtraFormatter:
    return SafeExtraFormatter(
        fmt=(
            "%(asctime)s %(levelname)s %(name)s %(message)s "
            "op=%(op)s status=%(status)s duration_ms=%(duration_ms)s "
            "generation=%(generation)s error=%(error)s run_id=%(run_id)s"
        )
    )


def init_logging(level: str | None = None) -> None:
    """Configure the root logger once: stdout, plus LOG_FILE when set."""
    global _INITIALIZED
    if _INITIALIZED:
        return

    settings = get_settings()
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)
        handler.setFormatter(_formatter())
        root_logger.addHandler(handler)

    if settings.log_file:
        path = Path(settings.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(_formatter())
        root_logger.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    _INITIALIZED = True
