from __future__ import annotations

from pos_session_bridge.models import RequestDescriptor, ResponseEnvelope, SessionInquiry, SessionState


def test_descriptor_from_host_payload_defaults() -> None:
    descriptor = RequestDescriptor.from_payload({"url": "/api/method/ping"})
    assert descriptor.method == "GET"
    assert descriptor.params is None
    assert descriptor.body is None
    assert descriptor.body_is_form is False


def test_descriptor_form_marker_is_stripped() -> None:
    descriptor = RequestDescriptor.from_payload(
        {"method": "put", "url": "x", "data": {"__form": True, "doctype": "Item"}}
    )
    assert descriptor.method == "PUT"
    assert descriptor.body_is_form is True
    assert descriptor.body == {"doctype": "Item"}


def test_descriptor_marker_must_be_true() -> None:
    descriptor = RequestDescriptor.from_payload({"url": "x", "data": {"__form": "yes"}})
    assert descriptor.body_is_form is False
    assert descriptor.body == {"__form": "yes"}


def test_host_payloads_use_camel_case() -> None:
    envelope = ResponseEnvelope(success=True, http_status=200, binary_payload="data:application/pdf;base64,AA==")
    assert envelope.is_binary
    assert envelope.to_payload() == {
        "success": True,
        "httpStatus": 200,
        "data": {},
        "binaryPayload": "data:application/pdf;base64,AA==",
        "error": None,
    }
    inquiry = SessionInquiry(session_data=SessionState(cookie_header="sid=1"))
    assert inquiry.to_payload() == {
        "success": True,
        "sessionData": {"cookieHeader": "sid=1", "csrfToken": "", "loggedIn": False},
    }


def test_envelope_keeps_null_fields_for_the_host() -> None:
    relayed = ResponseEnvelope(success=True, http_status=200, data=None)
    assert relayed.to_payload() == {
        "success": True,
        "httpStatus": 200,
        "data": None,
        "binaryPayload": None,
        "error": None,
    }

    login = ResponseEnvelope(success=False, http_status=401, cookies="", csrf_token="tok")
    assert login.to_payload()["cookies"] == ""
    assert login.to_payload()["csrfToken"] == "tok"
