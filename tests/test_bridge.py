from __future__ import annotations

import responses

from pos_session_bridge import BridgeConfig, PreferencesError, SessionBridge

BASE_URL = "https://erp.example.com"


def test_fresh_bridge_is_logged_out(bridge: SessionBridge) -> None:
    inquiry = bridge.session()
    assert inquiry.success is True
    assert inquiry.session_data.cookie_header == ""
    assert inquiry.session_data.csrf_token == ""
    assert inquiry.session_data.logged_in is False


@responses.activate
def test_logout_is_local_only(bridge: SessionBridge) -> None:
    responses.add(responses.POST, f"{BASE_URL}/api/method/login", json={}, headers={"Set-Cookie": "sid=abc"})
    bridge.login("u", "p")

    assert bridge.logout().success is True
    assert len(responses.calls) == 1
    assert bridge.session().session_data.logged_in is False


def test_bridges_do_not_share_state(config: BridgeConfig) -> None:
    first = SessionBridge(config)
    second = SessionBridge(config)
    first.state.apply_response_headers({}, set_cookies=["sid=one"])

    assert second.session().session_data.cookie_header == ""


def test_set_base_url_survives_unwritable_prefs(bridge: SessionBridge, monkeypatch) -> None:
    def fail(_preferences) -> None:
        raise PreferencesError(code="PREFS_UNWRITABLE", message="read-only disk")

    monkeypatch.setattr(bridge.preferences, "write", fail)

    result = bridge.set_base_url("pos.example.org")

    assert result.success is False
    assert result.base_url == "http://pos.example.org"
    assert bridge.get_base_url() == "http://pos.example.org"


def test_request_accepts_descriptor_or_payload(bridge: SessionBridge) -> None:
    with responses.RequestsMock() as rsps:
        rsps.add(responses.DELETE, f"{BASE_URL}/api/resource/Item/ITEM-1", json={"message": "ok"}, status=202)
        envelope = bridge.request({"method": "delete", "url": "/api/resource/Item/ITEM-1"})

    assert envelope.success is True
    assert envelope.http_status == 202


def test_undecodable_prefs_fall_back_to_default(tmp_path) -> None:
    (tmp_path / "user-prefs.json").write_bytes(b'{"baseUrl": "\xff\xfe"}')

    bridge = SessionBridge(BridgeConfig(default_base_url=BASE_URL, config_dir=str(tmp_path)))

    assert bridge.get_base_url() == BASE_URL


def test_unusable_config_dir_is_not_fatal(tmp_path) -> None:
    blocker = tmp_path / "notadir"
    blocker.write_text("")

    bridge = SessionBridge(BridgeConfig(default_base_url=BASE_URL, config_dir=str(blocker)))
    result = bridge.set_base_url("pos.example.org")

    assert bridge.get_base_url() == "http://pos.example.org"
    assert result.success is False
    assert result.base_url == "http://pos.example.org"
