"""Structured logging helpers."""

from __future__ import annotations

import json
import logging
from typing import Any

_audit_logger = logging.getLogger("account_state.audit")

_REDACTED = "***REDACTED***"
_SENSITIVE_KEYS = {"token", "secret", "password", "credentials", "authorization"}


def _is_sensitive_key(key: str) -> bool:
    normalized = key.lower().replace("-", "_")
    return (
        normalized in _SENSITIVE_KEYS
        or normalized.endswith("_key")
        or normalized.endswith("_secret")
        or "authorization" in normalized
    )


def redact_sensitive_fields(value: Any) -> Any:
    if isinstance(value, dict):
        redacted: dict[str, Any] = {}
        for key, nested in value.items():
            if _is_sensitive_key(str(key)):
                redacted[key] = _REDACTED
            else:
                redacted[key] = redact_sensitive_fields(nested)
        return redacted
    if isinstance(value, list):
        return [redact_sensitive_fields(item) for item in value]
    return value


def log_structured_event(event_type: str, *, level: int = logging.INFO, **fields: Any) -> str:
    payload = redact_sensitive_fields({"event_type": event_type, **fields})
    serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    _audit_logger.log(level, serialized)
    return serialized
