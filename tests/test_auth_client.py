from __future__ import annotations

import requests
import responses

from pos_session_bridge import SessionBridge
from pos_session_bridge.models import SessionState

BASE_URL = "https://erp.example.com"
LOGIN_URL = f"{BASE_URL}/api/method/login"


@responses.activate
def test_login_success_captures_session(bridge: SessionBridge) -> None:
    responses.add(
        responses.POST,
        LOGIN_URL,
        json={"message": "Logged In", "full_name": "Cashier One"},
        status=200,
        headers={"Set-Cookie": "sid=abc; Path=/; HttpOnly", "X-Frappe-CSRF-Token": "csrf-1"},
    )

    envelope = bridge.login("cashier@example.com", "s3cret&more")

    assert envelope.success is True
    assert envelope.http_status == 200
    assert envelope.data == {"message": "Logged In", "full_name": "Cashier One"}
    assert envelope.cookies and "sid=abc" in envelope.cookies
    assert envelope.csrf_token == "csrf-1"

    state = bridge.session().session_data
    assert state.logged_in is True
    assert "sid=abc" in state.cookie_header
    assert state.csrf_token == "csrf-1"

    request = responses.calls[0].request
    assert request.headers["X-Requested-With"] == "XMLHttpRequest"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert request.body == "usr=cashier%40example.com&pwd=s3cret%26more"
    assert "Cookie" not in request.headers


@responses.activate
def test_login_joins_multiple_set_cookie_headers(bridge: SessionBridge) -> None:
    responses.add(
        responses.POST,
        LOGIN_URL,
        json={"message": "Logged In"},
        headers=[("Set-Cookie", "sid=abc; Path=/"), ("Set-Cookie", "system_user=yes; Path=/")],
    )

    bridge.login("u", "p")

    assert bridge.session().session_data.cookie_header == "sid=abc; Path=/; system_user=yes; Path=/"


@responses.activate
def test_login_rejected_keeps_fresh_csrf(bridge: SessionBridge) -> None:
    responses.add(
        responses.POST,
        LOGIN_URL,
        json={"message": "Invalid Login. Try again."},
        status=401,
        headers={"X-Frappe-CSRF-Token": "csrf-guest"},
    )

    envelope = bridge.login("nobody", "wrong")

    assert envelope.success is False
    assert envelope.http_status == 401
    assert envelope.data == {"message": "Invalid Login. Try again."}
    state = bridge.session().session_data
    assert state.logged_in is False
    assert state.csrf_token == "csrf-guest"


@responses.activate
def test_failed_relogin_drops_logged_in_flag(bridge: SessionBridge) -> None:
    responses.add(responses.POST, LOGIN_URL, json={}, status=200, headers={"Set-Cookie": "sid=abc"})
    responses.add(responses.POST, LOGIN_URL, json={}, status=401)

    bridge.login("u", "p")
    bridge.login("u", "bad")

    state = bridge.session().session_data
    assert state.logged_in is False
    assert state.cookie_header == "sid=abc"


@responses.activate
def test_login_transport_failure_leaves_cache_untouched(bridge: SessionBridge) -> None:
    bridge.state.apply_response_headers({"X-Frappe-CSRF-Token": "before"}, set_cookies=["sid=before"])
    responses.add(responses.POST, LOGIN_URL, body=requests.ConnectionError("connection refused"))

    envelope = bridge.login("u", "p")

    assert envelope.success is False
    assert envelope.http_status == 500
    assert "connection refused" in (envelope.error or "")
    state = bridge.session().session_data
    assert state.cookie_header == "sid=before"
    assert state.csrf_token == "before"


@responses.activate
def test_login_non_json_body_yields_empty_data(bridge: SessionBridge) -> None:
    responses.add(responses.POST, LOGIN_URL, body="<html>ok</html>", content_type="text/html", status=200)

    envelope = bridge.login("u", "p")

    assert envelope.success is True
    assert envelope.data == {}


@responses.activate
def test_login_targets_configured_origin(bridge: SessionBridge) -> None:
    bridge.set_base_url("pos.example.org/")
    responses.add(responses.POST, "http://pos.example.org/api/method/login", json={"message": "Logged In"})

    assert bridge.login("u", "p").success is True


@responses.activate
def test_logout_during_login_leaves_session_logged_out(bridge: SessionBridge) -> None:
    def logout_then_answer(request):
        bridge.logout()
        return 200, {"Set-Cookie": "sid=abc", "X-Frappe-CSRF-Token": "csrf-1"}, '{"message": "Logged In"}'

    responses.add_callback(responses.POST, LOGIN_URL, callback=logout_then_answer, content_type="application/json")

    envelope = bridge.login("u", "p")

    assert envelope.success is True
    assert bridge.session().session_data == SessionState()
