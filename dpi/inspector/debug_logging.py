"""Structured debug logging for training and suggestion decisions."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Mapping

from dpi.config import Settings, get_settings

LOG = logging.getLogger("dpi.inspector.debug")


def _env_debug_enabled() -> bool:
    """Allow environment overrides for ad-hoc debugging (DPI_DEBUG_ALL=1)."""
    val = os.getenv("DPI_DEBUG_TRAINING", "") or os.getenv("DPI_DEBUG_ALL", "")
    return val.lower() in {"1", "true", "yes", "on"}


def is_enabled(settings: Settings | None = None) -> bool:
    """Return True if structured debug logging should be emitted.

    `settings` is the caller's explicit configuration; the cached global
    settings are consulted when it is omitted.
    """
    return (settings or get_settings()).debug_training or _env_debug_enabled()


def _json_safe(obj: Any) -> Any:
    """Make arbitrary objects JSON-serialisable in a lossy but safe way."""
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_json_safe(x) for x in obj]
    if isinstance(obj, Mapping):
        return {str(k): _json_safe(v) for k, v in obj.items()}
    return repr(obj)


def log_decision(
    *,
    stage: str,
    action: str,
    token: str,
    key: str | None = None,
    score: float | None = None,
    details: dict[str, Any] | None = None,
    settings: Settings | None = None,
) -> None:
    """Emit a JSONL debug line when debugging is enabled.

    Example line:
        {"stage": "suggest", "action": "accept", "token": "3869", ...}
    """
    if not is_enabled(settings):
        return

    payload = {
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        "stage": stage,
        "action": action,
        "token": token,
        "key": key,
        "score": float(score) if score is not None else None,
        "details": _json_safe(details or {}),
    }
    LOG.info(json.dumps(payload, ensure_ascii=False))
