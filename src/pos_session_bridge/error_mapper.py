from __future__ import annotations

from .exceptions import BridgeError, TransportError
from .models import ResponseEnvelope

TRANSPORT_FAILURE_STATUS = 500


def is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


def rejection_kind(status_code: int) -> str:
    """Name the kind of backend answer, for logs only; payloads are never interpreted."""
    if 200 <= status_code <= 299:
        return "ok"
    if status_code in {401, 403}:
        return "auth"
    if status_code in {400, 404, 417, 422}:
        return "validation"
    if status_code == 409:
        return "conflict"
    if status_code == 429:
        return "rate_limit"
    if status_code <= 0:
        return "network"
    return "internal"


def envelope_for_error(error: Exception) -> ResponseEnvelope:
    if isinstance(error, TransportError):
        return ResponseEnvelope(
            success=False,
            http_status=TRANSPORT_FAILURE_STATUS,
            error=error.message,
        )
    if isinstance(error, BridgeError):
        return ResponseEnvelope(
            success=False,
            http_status=error.status_code or TRANSPORT_FAILURE_STATUS,
            error=error.message,
        )
    return ResponseEnvelope(
        success=False,
        http_status=TRANSPORT_FAILURE_STATUS,
        error=str(error),
    )
