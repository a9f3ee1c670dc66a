from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import requests

from ..http_client import HttpClient, set_cookie_values
from ..session_state import SessionStateCache

OriginProvider = Callable[[], str]


@dataclass
class BaseClient:
    http: HttpClient
    state: SessionStateCache
    origin: OriginProvider

    def _credential_headers(self) -> dict[str, str]:
        snapshot = self.state.read()
        headers: dict[str, str] = {}
        if snapshot.cookie_header:
            headers["Cookie"] = snapshot.cookie_header
        if snapshot.csrf_token:
            headers[self.state.csrf_header] = snapshot.csrf_token
        return headers

    def _capture_credentials(self, response: requests.Response, sequence: int | None = None) -> None:
        self.state.apply_response_headers(
            response.headers,
            set_cookies=set_cookie_values(response),
            sequence=sequence,
        )
