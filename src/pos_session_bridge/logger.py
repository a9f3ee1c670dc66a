from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

_REDACTED = "***"
_SENSITIVE_KEYS = {
    "password",
    "pwd",
    "usr",
    "cookie",
    "cookies",
    "cookie_header",
    "csrf_token",
    "token",
    "authorization",
}


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def redact(context: dict[str, Any] | None) -> dict[str, Any] | None:
    if not context:
        return context
    return {
        key: _REDACTED if key.lower() in _SENSITIVE_KEYS else value
        for key, value in context.items()
    }


def log_call(
    logger: logging.Logger,
    module: str,
    action: str,
    outcome: str,
    status: int | None = None,
    duration_ms: int | None = None,
    context: dict[str, Any] | None = None,
) -> None:
    level = logging.INFO if outcome == "success" else logging.WARNING
    logger.log(
        level,
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": logging.getLevelName(level),
                "module": module,
                "action": action,
                "outcome": outcome,
                "status": status,
                "duration_ms": duration_ms,
                "context": redact(context),
            },
            default=str,
        ),
    )
