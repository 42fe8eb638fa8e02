from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


def _as_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def _ensure_parent_dir(path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass


def log_call(
    *,
    caller: str,
    method: str,
    url: str,
    status_code: Optional[int] = None,
    duration_ms: Optional[int] = None,
    status: str = "ok",
    error: Optional[str] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Append a single JSON line describing a data service call if tracing is enabled.

    Controlled by REQUEST_TRACE / REQUEST_LOG_PATH in config/settings.py
    """
    from config.settings import get_settings
    settings = get_settings()
    # REQUEST_TRACE / REQUEST_LOG_PATH are read live; cached settings are the fallback
    trace = os.getenv("REQUEST_TRACE")
    if not (_as_bool(trace) if trace is not None else settings.request_trace):
        return

    log_path = Path(os.getenv("REQUEST_LOG_PATH") or settings.request_log_path)
    _ensure_parent_dir(log_path)

    payload: Dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "caller": caller,
        "method": method,
        "url": url,
        "status_code": status_code,
        "duration_ms": duration_ms,
        "status": status,
        "error": error,
    }
    run_id = os.getenv("RUN_ID")
    if run_id:
        payload["run_id"] = run_id

    if extras:
        # Shallow merge extras under a dedicated key to avoid collisions
        payload["extras"] = extras

    try:
        with log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(payload, ensure_ascii=False) + "\n")
    except OSError:
        # Never break the app on logging failures
        return
