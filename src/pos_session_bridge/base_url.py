from __future__ import annotations

import re

from .config import DEFAULT_BASE_URL
from .exceptions import PreferencesError
from .logger import get_logger
from .preferences import PreferencesStore

BASE_URL_PREF_KEY = "baseUrl"

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_TRAILING_SLASHES_RE = re.compile(r"/+$")

logger = get_logger(__name__)


def sanitize_base_url(raw: str | None, default: str = DEFAULT_BASE_URL) -> str:
    if not raw or not raw.strip():
        return default
    sanitized = raw.strip()
    if not _SCHEME_RE.match(sanitized):
        sanitized = f"http://{sanitized}"
    sanitized = _WHITESPACE_RE.sub("", sanitized)
    return _TRAILING_SLASHES_RE.sub("", sanitized)


class BaseUrlResolver:
    """Holds the backend origin the bridge targets and persists changes to it."""

    def __init__(self, preferences: PreferencesStore, default_base_url: str = DEFAULT_BASE_URL) -> None:
        self.preferences = preferences
        self.default_base_url = sanitize_base_url(default_base_url, DEFAULT_BASE_URL)
        self._origin = self.default_base_url
        self.load()

    def resolve(self, raw: str | None) -> str:
        return sanitize_base_url(raw, self.default_base_url)

    def load(self) -> str:
        try:
            stored = self.preferences.read().get(BASE_URL_PREF_KEY)
        except PreferencesError as exc:
            logger.warning("Failed to load persisted base URL, using default: %s", exc.message)
            stored = None
        if isinstance(stored, str) and stored:
            self._origin = self.resolve(stored)
        return self._origin

    def set_origin(self, raw: str | None) -> str:
        self._origin = self.resolve(raw)
        self.preferences.merge({BASE_URL_PREF_KEY: self._origin})
        return self._origin

    def get_origin(self) -> str:
        return self._origin
