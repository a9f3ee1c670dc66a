from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_BASE_URL = "http://172.104.140.136"
DEFAULT_CSRF_HEADER = "X-Frappe-CSRF-Token"
DEFAULT_DOCUMENT_KEYWORDS = ("create_order",)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class BridgeConfig:
    default_base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 10.0
    verify_ssl: bool = True
    csrf_header: str = DEFAULT_CSRF_HEADER
    document_keywords: tuple[str, ...] = DEFAULT_DOCUMENT_KEYWORDS
    app_name: str = "pos-session-bridge"
    config_dir: str | None = None
    max_connections: int = 10


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _read_keywords(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> BridgeConfig:
    """Load bridge settings from the environment with optional .env override."""
    load_dotenv(env_file)

    default_base_url = (os.getenv("POS_BRIDGE_DEFAULT_BASE_URL") or DEFAULT_BASE_URL).strip()
    _validate(
        default_base_url.lower().startswith(("http://", "https://")),
        f"Invalid POS_BRIDGE_DEFAULT_BASE_URL: expected an http(s) URL, got {default_base_url!r}",
    )

    timeout_seconds = _read_float("POS_BRIDGE_TIMEOUT_SECONDS", "10")
    _validate(
        timeout_seconds > 0,
        f"Invalid POS_BRIDGE_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    max_connections = _read_int("POS_BRIDGE_MAX_CONNECTIONS", "10")
    _validate(
        max_connections >= 1,
        f"Invalid POS_BRIDGE_MAX_CONNECTIONS: expected >= 1, got {max_connections}",
    )

    csrf_header = (os.getenv("POS_BRIDGE_CSRF_HEADER") or DEFAULT_CSRF_HEADER).strip()
    app_name = (os.getenv("POS_BRIDGE_APP_NAME") or "pos-session-bridge").strip()
    config_dir = (os.getenv("POS_BRIDGE_CONFIG_DIR") or "").strip() or None

    return BridgeConfig(
        default_base_url=default_base_url.rstrip("/"),
        timeout_seconds=timeout_seconds,
        verify_ssl=_coerce_bool(os.getenv("POS_BRIDGE_VERIFY_SSL"), True),
        csrf_header=csrf_header,
        document_keywords=_read_keywords("POS_BRIDGE_DOCUMENT_KEYWORDS", DEFAULT_DOCUMENT_KEYWORDS),
        app_name=app_name,
        config_dir=config_dir,
        max_connections=max_connections,
    )
