from __future__ import annotations

import itertools
import threading
from typing import Iterable, Mapping

from .config import DEFAULT_CSRF_HEADER
from .models import SessionState

SET_COOKIE_HEADER = "Set-Cookie"


def _header(headers: Mapping[str, str], name: str) -> str:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return ""


class SessionStateCache:
    """Cookie header, CSRF token and logged-in flag shared by every bridge call.

    Writes are serialized by one lock. Callers that take a ticket from
    :meth:`next_sequence` before dispatching a request get out-of-order
    protection: a response only overwrites a field that was last written by
    an older ticket.
    """

    def __init__(self, csrf_header: str = DEFAULT_CSRF_HEADER) -> None:
        self.csrf_header = csrf_header
        self._lock = threading.Lock()
        self._sequence = itertools.count(1)
        self._state = SessionState()
        self._cookie_seq = 0
        self._csrf_seq = 0
        self._logged_in_seq = 0

    def read(self) -> SessionState:
        with self._lock:
            return self._state

    def next_sequence(self) -> int:
        with self._lock:
            return next(self._sequence)

    def apply_response_headers(
        self,
        headers: Mapping[str, str],
        set_cookies: Iterable[str] | None = None,
        sequence: int | None = None,
    ) -> bool:
        """Take new credentials from a response. Returns True if anything changed."""
        if set_cookies is None:
            single = _header(headers, SET_COOKIE_HEADER)
            set_cookies = [single] if single else []
        cookies = [value.strip() for value in set_cookies if value and value.strip()]
        csrf_token = _header(headers, self.csrf_header).strip()

        changes: dict[str, str] = {}
        with self._lock:
            if cookies and self._accepts(sequence, self._cookie_seq):
                changes["cookie_header"] = "; ".join(cookies)
                self._cookie_seq = sequence or self._cookie_seq
            if csrf_token and self._accepts(sequence, self._csrf_seq):
                changes["csrf_token"] = csrf_token
                self._csrf_seq = sequence or self._csrf_seq
            if changes:
                self._state = self._state.model_copy(update=changes)
        return bool(changes)

    def mark_logged_in(self, logged_in: bool, sequence: int | None = None) -> bool:
        with self._lock:
            if not self._accepts(sequence, self._logged_in_seq):
                return False
            self._logged_in_seq = sequence or self._logged_in_seq
            self._state = self._state.model_copy(update={"logged_in": logged_in})
        return True

    def clear(self) -> None:
        with self._lock:
            self._state = SessionState()
            # Responses to requests dispatched before the clear must not repopulate it.
            watermark = next(self._sequence)
            self._cookie_seq = watermark
            self._csrf_seq = watermark
            self._logged_in_seq = watermark

    @staticmethod
    def _accepts(sequence: int | None, last_applied: int) -> bool:
        return sequence is None or sequence > last_applied
