# aibridge/observability.py
from __future__ import annotations
import json
import logging
import os
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from aibridge.config import AppSettings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_lock = threading.Lock()


def audit_log_path() -> str:
    # AIBRIDGE_AUDIT_LOG, re-read on each call
    return AppSettings().audit_log


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging once for the server and CLI entry points."""
    lvl = (level or os.getenv("AIBRIDGE_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, lvl, logging.INFO), format=LOG_FORMAT)


def new_run_id() -> str:
    return uuid.uuid4().hex[:12]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def audit_log(
    *,
    run_id: str,
    action: str,
    status: str,
    params: Dict[str, Any] | None = None,
    message: str | None = None,
    extra: Dict[str, Any] | None = None,
) -> None:
    """
    Append one JSON line to the audit file.
    status: "start" | "ok" | "error"
    """
    rec = {
        "ts": _now_iso(),
        "run_id": run_id,
        "action": action,
        "status": status,
        "params": params or {},
        "message": message or "",
        **(extra or {}),
    }
    line = json.dumps(rec, ensure_ascii=False, default=str)
    path = audit_log_path()
    with _lock:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")


def _read_records() -> List[Dict[str, Any]]:
    path = audit_log_path()
    if not os.path.exists(path):
        return []
    out: List[Dict[str, Any]] = []
    with open(path, "r", encoding="utf-8") as f:
        for ln in f:
            if not ln.strip():
                continue
            try:
                out.append(json.loads(ln))
            except json.JSONDecodeError:
                # a partially written line from a crashed process
                continue
    return out


def list_events(limit: int = 200) -> List[Dict[str, Any]]:
    return _read_records()[-limit:]


def list_run(run_id: str) -> List[Dict[str, Any]]:
    return [rec for rec in _read_records() if rec.get("run_id") == run_id]
