from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from typing import Any, Iterable

from .config import DEFAULT_DOCUMENT_KEYWORDS

PDF_MAGIC = b"%PDF"
PDF_DATA_URL_PREFIX = "data:application/pdf;base64,"
BINARY_CONTENT_TYPES = ("application/pdf", "application/octet-stream")
AMBIGUOUS_BODY_ERROR = "not PDF or JSON"


@dataclass(frozen=True)
class ClassifiedBody:
    data: Any = field(default_factory=dict)
    binary_payload: str | None = None
    kind: str = "json"


def is_binary_candidate(content_type: str | None, path: str, keywords: Iterable[str] = DEFAULT_DOCUMENT_KEYWORDS) -> bool:
    content_type = (content_type or "").strip().lower()
    if not content_type:
        return True
    if any(marker in content_type for marker in BINARY_CONTENT_TYPES):
        return True
    return any(keyword and keyword in path for keyword in keywords)


def looks_like_pdf(content: bytes) -> bool:
    return content[: len(PDF_MAGIC)] == PDF_MAGIC


def pdf_data_url(content: bytes) -> str:
    return PDF_DATA_URL_PREFIX + base64.b64encode(content).decode("ascii")


def _parse_json(content: bytes) -> Any:
    if not content:
        raise ValueError("empty body")
    return json.loads(content.decode("utf-8"))


def json_or_empty(content: bytes) -> Any:
    try:
        return _parse_json(content)
    except ValueError:
        return {}


def classify_body(
    content: bytes,
    content_type: str | None,
    path: str = "",
    keywords: Iterable[str] = DEFAULT_DOCUMENT_KEYWORDS,
) -> ClassifiedBody:
    """Decide whether a backend body is a PDF document or structured data.

    The backend serves invoices as raw bytes on endpoints that otherwise
    answer JSON, and its content type is unreliable, so the order is:
    declared JSON is trusted; declared binary, a missing type or a document
    path is sniffed for the PDF magic, then JSON; anything else is JSON.
    """
    declared = (content_type or "").lower()
    if "json" in declared:
        try:
            return ClassifiedBody(data=_parse_json(content))
        except ValueError:
            return ClassifiedBody(data={}, kind="unparsed")

    if is_binary_candidate(content_type, path, keywords):
        if looks_like_pdf(content):
            return ClassifiedBody(data={}, binary_payload=pdf_data_url(content), kind="pdf")
        try:
            return ClassifiedBody(data=_parse_json(content))
        except ValueError:
            return ClassifiedBody(data={"error": AMBIGUOUS_BODY_ERROR}, kind="ambiguous")

    try:
        return ClassifiedBody(data=_parse_json(content))
    except ValueError:
        return ClassifiedBody(data={}, kind="unparsed")
