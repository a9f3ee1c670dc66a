from __future__ import annotations

import pytest

from pos_session_bridge import BridgeConfig, SessionBridge

BASE_URL = "https://erp.example.com"


@pytest.fixture
def config(tmp_path) -> BridgeConfig:
    return BridgeConfig(default_base_url=BASE_URL, config_dir=str(tmp_path))


@pytest.fixture
def bridge(config: BridgeConfig) -> SessionBridge:
    return SessionBridge(config)
