from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .exceptions import PreferencesError
from .preferences import config_base


@dataclass
class AuthDataStore:
    """UI-owned auth record (profile, user id) kept beside the preferences file.

    Cookies and CSRF tokens stay in memory and are never written here.
    """

    app_name: str = "pos-session-bridge"
    filename: str = "auth.json"
    directory: str | Path | None = None

    def _path(self) -> Path:
        return config_base(self.app_name, self.directory) / self.filename

    def save(self, auth_data: Mapping[str, Any]) -> None:
        path = self._path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(dict(auth_data), indent=2), encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise PreferencesError(code="AUTH_DATA_UNWRITABLE", message=f"Cannot write {path}: {exc}") from exc
        try:
            path.chmod(0o600)
        except OSError:
            pass

    def load(self) -> dict[str, Any] | None:
        path = self._path()
        try:
            if not path.is_file():
                return None
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError:
            return None
        except ValueError:
            self.clear()
            return None
        if not isinstance(data, dict):
            self.clear()
            return None
        return data

    def clear(self) -> None:
        path = self._path()
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise PreferencesError(code="AUTH_DATA_UNWRITABLE", message=f"Cannot remove {path}: {exc}") from exc
