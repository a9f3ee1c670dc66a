from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .auth_store import AuthDataStore
from .base_url import BaseUrlResolver
from .clients.auth import AuthClient
from .clients.relay import RelayClient
from .config import BridgeConfig
from .exceptions import PreferencesError
from .http_client import HttpClient
from .logger import get_logger, log_call
from .models import (
    ActionResult,
    BaseUrlResult,
    RequestDescriptor,
    ResponseEnvelope,
    SessionInquiry,
)
from .preferences import PreferencesStore
from .session_state import SessionStateCache

logger = get_logger(__name__)


@dataclass
class SessionBridge:
    """Everything the host UI reaches: login, relay, session inquiry and the target origin.

    One bridge per host process. Its collaborators are built from ``config``
    unless passed in, so tests can swap any of them.
    """

    config: BridgeConfig
    preferences: PreferencesStore | None = None
    state: SessionStateCache | None = None
    http: HttpClient | None = None
    resolver: BaseUrlResolver | None = None
    auth_store: AuthDataStore | None = None

    def __post_init__(self) -> None:
        self.preferences = self.preferences or PreferencesStore(
            app_name=self.config.app_name, directory=self.config.config_dir
        )
        self.auth_store = self.auth_store or AuthDataStore(
            app_name=self.config.app_name, directory=self.config.config_dir
        )
        self.state = self.state or SessionStateCache(csrf_header=self.config.csrf_header)
        self.http = self.http or HttpClient(config=self.config)
        self.resolver = self.resolver or BaseUrlResolver(self.preferences, self.config.default_base_url)

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http, state=self.state, origin=self.resolver.get_origin)

    def relay_client(self) -> RelayClient:
        return RelayClient(
            http=self.http,
            state=self.state,
            origin=self.resolver.get_origin,
            document_keywords=self.config.document_keywords,
        )

    def login(self, username: str, password: str) -> ResponseEnvelope:
        return self.auth_client().login(username, password)

    def request(self, descriptor: RequestDescriptor | Mapping[str, Any]) -> ResponseEnvelope:
        if not isinstance(descriptor, RequestDescriptor):
            descriptor = RequestDescriptor.from_payload(descriptor)
        return self.relay_client().relay(descriptor)

    def session(self) -> SessionInquiry:
        return SessionInquiry(session_data=self.state.read())

    def logout(self) -> ActionResult:
        # Local only: the backend session stays valid until it expires.
        self.state.clear()
        log_call(logger, "session", "logout", "success")
        return ActionResult()

    def set_base_url(self, url: str | None) -> BaseUrlResult:
        try:
            origin = self.resolver.set_origin(url)
        except PreferencesError as exc:
            # The new origin is live for this process even when it could not be saved.
            log_call(logger, "config", "set_base_url", "persist_failed", context={"error": exc.message})
            return BaseUrlResult(success=False, base_url=self.resolver.get_origin())
        log_call(logger, "config", "set_base_url", "success", context={"base_url": origin})
        return BaseUrlResult(base_url=origin)

    def get_base_url(self) -> str:
        return self.resolver.get_origin()
