from .base_url import BaseUrlResolver, sanitize_base_url
from .bridge import SessionBridge
from .channels import ChannelRouter
from .classifier import ClassifiedBody, classify_body
from .config import BridgeConfig, ConfigError, load_config
from .exceptions import (
    BridgeError,
    InvalidPayloadError,
    PreferencesError,
    TransportError,
    UnknownChannelError,
)
from .http_client import HttpClient
from .models import (
    ActionResult,
    BaseUrlResult,
    RequestDescriptor,
    ResponseEnvelope,
    SessionInquiry,
    SessionState,
)
from .preferences import PreferencesStore
from .session_state import SessionStateCache
from .version import __version__

__all__ = [
    "ActionResult",
    "BaseUrlResolver",
    "BaseUrlResult",
    "BridgeConfig",
    "BridgeError",
    "ChannelRouter",
    "ClassifiedBody",
    "ConfigError",
    "HttpClient",
    "InvalidPayloadError",
    "PreferencesError",
    "PreferencesStore",
    "RequestDescriptor",
    "ResponseEnvelope",
    "SessionBridge",
    "SessionInquiry",
    "SessionState",
    "SessionStateCache",
    "TransportError",
    "UnknownChannelError",
    "__version__",
    "classify_body",
    "load_config",
    "sanitize_base_url",
]
