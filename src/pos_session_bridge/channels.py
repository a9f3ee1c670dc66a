from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from pydantic import ValidationError

from .bridge import SessionBridge
from .exceptions import InvalidPayloadError, PreferencesError, UnknownChannelError
from .logger import get_logger, log_call
from .models import RequestDescriptor, ResponseEnvelope
from .version import __version__

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChannelRoute:
    name: str
    handler: str
    description: str


ROUTES: list[ChannelRoute] = [
    ChannelRoute("proxy-login", "_login", "Log in and capture session credentials"),
    ChannelRoute("proxy-request", "_request", "Relay a request with session credentials"),
    ChannelRoute("proxy-session", "_session", "Read the session state"),
    ChannelRoute("proxy-logout", "_logout", "Forget the session state"),
    ChannelRoute("set-api-base-url", "_set_base_url", "Target and persist a backend origin"),
    ChannelRoute("get-api-base-url", "_get_base_url", "Current backend origin"),
    ChannelRoute("store-user-preferences", "_store_preferences", "Merge into the preferences record"),
    ChannelRoute("get-user-preferences", "_get_preferences", "Read the preferences record"),
    ChannelRoute("clear-user-preferences", "_clear_preferences", "Delete the preferences record"),
    ChannelRoute("store-auth-data", "_store_auth_data", "Save the UI auth record"),
    ChannelRoute("get-auth-data", "_get_auth_data", "Read the UI auth record"),
    ChannelRoute("clear-auth-data", "_clear_auth_data", "Delete the UI auth record"),
    ChannelRoute("get-app-version", "_get_app_version", "Bridge package version"),
]


def _require_mapping(payload: Any, channel: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise InvalidPayloadError(
            code="INVALID_PAYLOAD",
            message=f"{channel} expects an object payload",
            status_code=400,
        )
    return payload


def _bad_request(message: str) -> dict[str, Any]:
    return ResponseEnvelope(success=False, http_status=400, data=None, error=message).to_payload()


class ChannelRouter:
    """Maps the host UI's named calls onto the bridge and returns JSON-ready values."""

    def __init__(self, bridge: SessionBridge) -> None:
        self.bridge = bridge
        self._routes: dict[str, Callable[[Any], Any]] = {
            route.name: getattr(self, route.handler) for route in ROUTES
        }

    @property
    def channels(self) -> list[str]:
        return [route.name for route in ROUTES]

    def handle(self, channel: str, payload: Any = None) -> Any:
        handler = self._routes.get(channel)
        if handler is None:
            raise UnknownChannelError(code="UNKNOWN_CHANNEL", message=f"No handler for {channel!r}")
        try:
            return handler(payload)
        except InvalidPayloadError as exc:
            return _bad_request(exc.message)
        except ValidationError as exc:
            return _bad_request(f"{channel}: {exc.errors()[0]['msg']}")

    def _login(self, payload: Any) -> dict[str, Any]:
        body = _require_mapping(payload, "proxy-login")
        username = body.get("username")
        password = body.get("password")
        if not isinstance(username, str) or not isinstance(password, str):
            raise InvalidPayloadError(
                code="INVALID_PAYLOAD",
                message="proxy-login expects username and password",
                status_code=400,
            )
        return self.bridge.login(username, password).to_payload()

    def _request(self, payload: Any) -> dict[str, Any]:
        body = _require_mapping(payload, "proxy-request")
        if not isinstance(body.get("url"), str):
            raise InvalidPayloadError(code="INVALID_PAYLOAD", message="proxy-request expects a url", status_code=400)
        return self.bridge.request(RequestDescriptor.from_payload(body)).to_payload()

    def _session(self, payload: Any) -> dict[str, Any]:
        return self.bridge.session().to_payload()

    def _logout(self, payload: Any) -> dict[str, Any]:
        return self.bridge.logout().to_payload()

    def _set_base_url(self, payload: Any) -> dict[str, Any]:
        url = payload.get("url") if isinstance(payload, Mapping) else payload
        if url is not None and not isinstance(url, str):
            raise InvalidPayloadError(code="INVALID_PAYLOAD", message="set-api-base-url expects a string url", status_code=400)
        return self.bridge.set_base_url(url).to_payload()

    def _get_base_url(self, payload: Any) -> str:
        return self.bridge.get_base_url()

    def _store_preferences(self, payload: Any) -> bool:
        updates = _require_mapping(payload, "store-user-preferences")
        return self._persisted(lambda: self.bridge.preferences.merge(updates), "store_preferences")

    def _get_preferences(self, payload: Any) -> dict[str, Any]:
        try:
            return self.bridge.preferences.read()
        except PreferencesError:
            return {}

    def _clear_preferences(self, payload: Any) -> bool:
        return self._persisted(self.bridge.preferences.clear, "clear_preferences")

    def _store_auth_data(self, payload: Any) -> bool:
        auth_data = _require_mapping(payload, "store-auth-data")
        return self._persisted(lambda: self.bridge.auth_store.save(auth_data), "store_auth_data")

    def _get_auth_data(self, payload: Any) -> dict[str, Any] | None:
        try:
            return self.bridge.auth_store.load()
        except PreferencesError:
            return None

    def _clear_auth_data(self, payload: Any) -> bool:
        return self._persisted(self.bridge.auth_store.clear, "clear_auth_data")

    def _persisted(self, action: Callable[[], Any], name: str) -> bool:
        try:
            action()
        except PreferencesError as exc:
            log_call(logger, "storage", name, "persist_failed", context={"error": exc.message})
            return False
        return True

    def _get_app_version(self, payload: Any) -> str:
        return __version__
