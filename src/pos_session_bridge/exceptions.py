from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BridgeError(Exception):
    code: str
    message: str
    status_code: int = 0
    details: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class TransportError(BridgeError):
    """Network/transport failure before an HTTP response was returned."""


class PreferencesError(BridgeError):
    """The preferences record could not be read or written."""


class UnknownChannelError(BridgeError):
    pass


class InvalidPayloadError(BridgeError):
    """A host call arrived with a payload the bridge cannot interpret."""
