from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

from ..classifier import classify_body
from ..config import DEFAULT_DOCUMENT_KEYWORDS
from ..error_mapper import envelope_for_error, is_success, rejection_kind
from ..exceptions import TransportError
from ..http_client import build_url
from ..logger import get_logger, log_call
from ..models import RequestDescriptor, ResponseEnvelope
from .base import BaseClient

logger = get_logger(__name__)


def _split_form(body: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any] | None]:
    """Separate plain form fields from file parts; file parts force multipart."""
    fields: dict[str, Any] = {}
    files: dict[str, Any] = {}
    for key, value in body.items():
        if isinstance(value, (bytes, bytearray, tuple)) or hasattr(value, "read"):
            files[key] = value
        else:
            fields[key] = value
    return fields, files or None


@dataclass
class RelayClient(BaseClient):
    document_keywords: tuple[str, ...] = DEFAULT_DOCUMENT_KEYWORDS

    def relay(self, descriptor: RequestDescriptor) -> ResponseEnvelope:
        headers = self._credential_headers()
        data: Any = None
        files: dict[str, Any] | None = None
        if descriptor.body is not None:
            if descriptor.body_is_form:
                if isinstance(descriptor.body, Mapping):
                    data, files = _split_form(descriptor.body)
                else:
                    data = descriptor.body
            else:
                headers["Content-Type"] = "application/json"
                data = json.dumps(descriptor.body, default=str)

        sequence = self.state.next_sequence()
        try:
            response = self.http.send(
                descriptor.method,
                build_url(self.origin(), descriptor.path),
                headers=headers,
                params=descriptor.params,
                data=data,
                files=files,
                module="relay",
                operation=descriptor.path,
            )
        except TransportError as exc:
            return envelope_for_error(exc)

        self._capture_credentials(response, sequence)
        classified = classify_body(
            response.content,
            response.headers.get("Content-Type"),
            descriptor.path,
            self.document_keywords,
        )
        ok = is_success(response.status_code)
        log_call(
            logger,
            "relay",
            descriptor.method,
            "success" if ok else rejection_kind(response.status_code),
            status=response.status_code,
            context={"path": descriptor.path, "body_kind": classified.kind},
        )
        return ResponseEnvelope(
            success=ok,
            http_status=response.status_code,
            data=classified.data,
            binary_payload=classified.binary_payload,
        )
