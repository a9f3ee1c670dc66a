from __future__ import annotations

from ..classifier import json_or_empty
from ..error_mapper import envelope_for_error, is_success, rejection_kind
from ..exceptions import TransportError
from ..http_client import build_url
from ..logger import get_logger, log_call
from ..models import ResponseEnvelope
from .base import BaseClient

LOGIN_PATH = "/api/method/login"

logger = get_logger(__name__)


class AuthClient(BaseClient):
    def login(self, username: str, password: str) -> ResponseEnvelope:
        sequence = self.state.next_sequence()
        try:
            response = self.http.send(
                "POST",
                build_url(self.origin(), LOGIN_PATH),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                data={"usr": username, "pwd": password},
                module="auth",
                operation="login",
            )
        except TransportError as exc:
            return envelope_for_error(exc)

        ok = is_success(response.status_code)
        # Even a rejected attempt may hand out a fresh CSRF token.
        self._capture_credentials(response, sequence)
        self.state.mark_logged_in(ok, sequence)
        snapshot = self.state.read()
        log_call(
            logger,
            "auth",
            "login",
            "success" if ok else rejection_kind(response.status_code),
            status=response.status_code,
            context={"logged_in": snapshot.logged_in},
        )
        return ResponseEnvelope(
            success=ok,
            http_status=response.status_code,
            data=json_or_empty(response.content),
            cookies=snapshot.cookie_header,
            csrf_token=snapshot.csrf_token,
        )
