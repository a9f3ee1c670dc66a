from .auth import AuthClient
from .base import BaseClient
from .relay import RelayClient

__all__ = ["AuthClient", "BaseClient", "RelayClient"]
