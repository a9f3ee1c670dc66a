from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from platformdirs import user_config_dir

from .exceptions import PreferencesError

PREFS_FILE_NAME = "user-prefs.json"


def config_base(app_name: str, directory: str | Path | None) -> Path:
    return Path(directory) if directory else Path(user_config_dir(app_name, appauthor=False))


@dataclass
class PreferencesStore:
    """Flat JSON preferences record kept in the per-user config directory."""

    app_name: str = "pos-session-bridge"
    filename: str = PREFS_FILE_NAME
    directory: str | Path | None = None

    def path(self) -> Path:
        return config_base(self.app_name, self.directory) / self.filename

    def read(self) -> dict[str, Any]:
        path = self.path()
        try:
            if not path.is_file():
                return {}
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PreferencesError(code="PREFS_UNREADABLE", message=f"Cannot read {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PreferencesError(code="PREFS_UNREADABLE", message=f"Expected a JSON object in {path}")
        return data

    def write(self, preferences: Mapping[str, Any]) -> None:
        # The record is always replaced whole, never patched in place.
        path = self.path()
        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".prefs-", suffix=".tmp", dir=path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as fp:
                json.dump(dict(preferences), fp, indent=2)
            os.replace(tmp_name, path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise PreferencesError(code="PREFS_UNWRITABLE", message=f"Cannot write {path}: {exc}") from exc

    def merge(self, updates: Mapping[str, Any]) -> dict[str, Any]:
        try:
            current = self.read()
        except PreferencesError:
            current = {}
        merged = {**current, **updates}
        self.write(merged)
        return merged

    def clear(self) -> None:
        path = self.path()
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise PreferencesError(code="PREFS_UNWRITABLE", message=f"Cannot remove {path}: {exc}") from exc
