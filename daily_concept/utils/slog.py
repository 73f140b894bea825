# =============================================
# File: daily_concept/utils/slog.py
# Purpose: Structured request logs (one JSON object per line) for the FastAPI middleware
# =============================================
from __future__ import annotations
import hashlib
import json
import logging
import os
import uuid
from typing import Any, Dict, Mapping, Optional

LOGGER_NAME = "daily_concept"

# raw user text never reaches the log; routers pass `thash` instead
_REDACTED_KEYS = frozenset({"topic", "query", "teaser"})

_log = logging.getLogger(LOGGER_NAME)
if not _log.handlers:
    _log.setLevel(getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))
    _h = logging.StreamHandler()
    _h.setFormatter(logging.Formatter("%(message)s"))
    _log.addHandler(_h)
    _log.propagate = True  # caplog


def thash(topic: str) -> str:
    """Short hash of a normalized topic, so free-text queries stay out of the logs."""
    norm = " ".join((topic or "").strip().lower().split())
    return hashlib.sha256(norm.encode("utf-8")).hexdigest()[:10]


def new_request_id() -> str:
    return uuid.uuid4().hex


def _level_for(status: Optional[int]) -> int:
    if status is None or status < 400:
        return logging.INFO
    return logging.WARNING if status < 500 else logging.ERROR


def _emit(level: int, event: str, fields: Mapping[str, Any]) -> None:
    rec: Dict[str, Any] = {"event": event}
    rec.update({k: v for k, v in fields.items() if k not in _REDACTED_KEYS})
    _log.log(level, json.dumps(rec, ensure_ascii=False, default=str))


def log_event(event: str, **fields: Any) -> None:
    _emit(logging.INFO, event, fields)


def finalize_request_log(
    request_id: str,
    method: str,
    path: str,
    status: int,
    latency_ms: int,
    client_ip: Optional[str],
    ctx: Optional[Mapping[str, Any]] = None,
) -> None:
    """One `request.completed` line; router context is merged but cannot override the core fields."""
    core = {
        "request_id": request_id,
        "method": method,
        "path": path,
        "status": status,
        "latency_ms": latency_ms,
        "client_ip": client_ip or "",
    }
    _emit(_level_for(status), "request.completed", {**(ctx or {}), **core})
