from __future__ import annotations

import time
from dataclasses import dataclass
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Mapping

import requests
from requests.adapters import HTTPAdapter

from .config import BridgeConfig
from .error_mapper import is_success
from .exceptions import TransportError
from .logger import get_logger, log_call

XHR_HEADER = "X-Requested-With"
XHR_VALUE = "XMLHttpRequest"

logger = get_logger(__name__)


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_url(origin: str, path: str) -> str:
    return f"{origin}{'' if path.startswith('/') else '/'}{path}"


def set_cookie_values(response: requests.Response) -> list[str]:
    """Every Set-Cookie header of a response; requests folds repeats into one string."""
    raw_headers = getattr(response.raw, "headers", None)
    getlist = getattr(raw_headers, "getlist", None)
    if callable(getlist):
        values = list(getlist("Set-Cookie"))
        if values:
            return values
    single = response.headers.get("Set-Cookie")
    return [single] if single else []


@dataclass
class HttpClient:
    config: BridgeConfig
    session: requests.Session | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
                max_retries=0,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)
        # Credentials live in the session state cache only.
        self.session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        data: Any = None,
        files: Any = None,
        module: str = "transport",
        operation: str = "send",
    ) -> requests.Response:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {XHR_HEADER: XHR_VALUE}
        if headers:
            request_headers.update(headers)
        query = {key: stringify(value) for key, value in params.items()} if params else None

        started = time.monotonic()
        try:
            response = self.session.request(
                method=method.upper(),
                url=url,
                headers=request_headers,
                params=query,
                data=data,
                files=files,
                timeout=self.config.timeout_seconds,
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            log_call(
                logger,
                module,
                operation,
                "transport_error",
                duration_ms=_elapsed_ms(started),
                context={"method": method.upper(), "error_type": type(exc).__name__},
            )
            raise TransportError(
                code="TRANSPORT_ERROR",
                message=str(exc),
                details={"type": type(exc).__name__},
            ) from exc

        log_call(
            logger,
            module,
            operation,
            "success" if is_success(response.status_code) else "rejected",
            status=response.status_code,
            duration_ms=_elapsed_ms(started),
            context={"method": method.upper()},
        )
        return response


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
