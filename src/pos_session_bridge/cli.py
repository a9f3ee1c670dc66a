from __future__ import annotations

import argparse
import base64
import json
from pathlib import Path
from typing import Any

from .bridge import SessionBridge
from .classifier import PDF_DATA_URL_PREFIX
from .config import ConfigError, load_config
from .models import RequestDescriptor, ResponseEnvelope


def _bridge(args: argparse.Namespace) -> SessionBridge:
    return SessionBridge(load_config(args.env_file))


def _print(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _parse_params(pairs: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise SystemExit(f"Invalid --param {pair!r}: expected key=value")
        params[key] = value
    return params


def _finish(envelope: ResponseEnvelope) -> None:
    if not envelope.success:
        raise SystemExit(1)


def cmd_get_base_url(args: argparse.Namespace) -> None:
    print(_bridge(args).get_base_url())


def cmd_set_base_url(args: argparse.Namespace) -> None:
    _print(_bridge(args).set_base_url(args.url).to_payload())


def cmd_login(args: argparse.Namespace) -> None:
    envelope = _bridge(args).login(args.username, args.password)
    _print(envelope.model_dump(by_alias=True, exclude_none=True, exclude={"cookies", "csrf_token"}))
    _finish(envelope)


def cmd_request(args: argparse.Namespace) -> None:
    bridge = _bridge(args)
    if args.username:
        login = bridge.login(args.username, args.password or "")
        if not login.success:
            _print(login.model_dump(by_alias=True, exclude_none=True, exclude={"cookies", "csrf_token"}))
            raise SystemExit(1)
    descriptor = RequestDescriptor(
        method=args.method,
        path=args.path,
        params=_parse_params(args.param) or None,
        body=json.loads(args.data) if args.data else None,
    )
    envelope = bridge.request(descriptor)
    payload = envelope.to_payload()
    if envelope.binary_payload and args.output:
        raw = base64.b64decode(envelope.binary_payload[len(PDF_DATA_URL_PREFIX):])
        Path(args.output).write_bytes(raw)
        payload["binaryPayload"] = f"saved {len(raw)} bytes to {args.output}"
    _print(payload)
    _finish(envelope)


def main() -> None:
    parser = argparse.ArgumentParser(description="POS session bridge CLI")
    parser.add_argument("--env-file", default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    get_url_parser = subparsers.add_parser("get-base-url")
    get_url_parser.set_defaults(func=cmd_get_base_url)

    set_url_parser = subparsers.add_parser("set-base-url")
    set_url_parser.add_argument("url")
    set_url_parser.set_defaults(func=cmd_set_base_url)

    login_parser = subparsers.add_parser("login")
    login_parser.add_argument("--username", required=True)
    login_parser.add_argument("--password", required=True)
    login_parser.set_defaults(func=cmd_login)

    request_parser = subparsers.add_parser("request")
    request_parser.add_argument("path")
    request_parser.add_argument("--method", default="GET")
    request_parser.add_argument("--param", action="append", default=[], metavar="KEY=VALUE")
    request_parser.add_argument("--data", default=None, help="JSON body")
    request_parser.add_argument("--username", default=None)
    request_parser.add_argument("--password", default=None)
    request_parser.add_argument("--output", default=None, help="write a PDF payload to this file")
    request_parser.set_defaults(func=cmd_request)

    args = parser.parse_args()
    try:
        args.func(args)
    except ConfigError as exc:
        _print({"error": "CONFIG_ERROR", "message": str(exc)})
        raise SystemExit(2) from exc
    except json.JSONDecodeError as exc:
        _print({"error": "INVALID_DATA", "message": str(exc)})
        raise SystemExit(2) from exc


if __name__ == "__main__":
    main()
