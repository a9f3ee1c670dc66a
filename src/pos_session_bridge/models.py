from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

FORM_MARKER = "__form"


class _HostModel(BaseModel):
    """Models handed to the host UI, which expects camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class SessionState(_HostModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    cookie_header: str = ""
    csrf_token: str = ""
    logged_in: bool = False


class RequestDescriptor(BaseModel):
    method: str = "GET"
    path: str
    params: dict[str, Any] | None = None
    body: Any | None = None
    body_is_form: bool = False

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return (value or "GET").strip().upper() or "GET"

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RequestDescriptor":
        """Build a descriptor from the host's `{method?, url, params?, data?}` call."""
        body = payload.get("data")
        body_is_form = isinstance(body, Mapping) and body.get(FORM_MARKER) is True
        if body_is_form:
            body = {key: value for key, value in body.items() if key != FORM_MARKER}
        return cls(
            method=payload.get("method") or "GET",
            path=payload["url"],
            params=payload.get("params") or None,
            body=body,
            body_is_form=body_is_form,
        )


class ResponseEnvelope(_HostModel):
    success: bool
    http_status: int
    data: Any = Field(default_factory=dict)
    binary_payload: str | None = None
    error: str | None = None
    cookies: str | None = None
    csrf_token: str | None = None

    def to_payload(self) -> dict[str, Any]:
        # cookies/csrfToken only exist on login answers.
        login_only = {name for name in ("cookies", "csrf_token") if getattr(self, name) is None}
        return self.model_dump(by_alias=True, exclude=login_only)

    @property
    def is_binary(self) -> bool:
        return self.binary_payload is not None


class SessionInquiry(_HostModel):
    success: bool = True
    session_data: SessionState


class ActionResult(_HostModel):
    success: bool = True


class BaseUrlResult(_HostModel):
    success: bool = True
    base_url: str
