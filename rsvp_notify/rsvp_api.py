from __future__ import annotations

import json
import logging
from http import HTTPStatus
from wsgiref.simple_server import make_server

from rsvp_notify.cors import ALLOWED_METHODS, base_cors_headers, preflight_headers
from rsvp_notify.email_transport import EmailDeliveryError, EmailDeliveryTimeout
from rsvp_notify.models import AppSettings, RsvpRequest, RsvpResponse
from rsvp_notify.rsvp_service import RsvpInputError, parse_submission, send_rsvp_confirmation
from rsvp_notify.settings import load_settings

logger = logging.getLogger(__name__)


def run_api_server(host: str, port: int) -> None:
    with make_server(host, port, app) as server:
        logger.info("rsvp-api listening on http://%s:%s", host, port)
        server.serve_forever()


def app(environ: dict, start_response):  # type: ignore[no-untyped-def]
    try:
        request = _request_from_environ(environ)
    except ValueError as exc:
        request = RsvpRequest(
            method=environ.get("REQUEST_METHOD", "GET"),
            headers=_headers_from_environ(environ),
        )
        logger.info("rsvp rejected code=INVALID_JSON message=%s", exc)
        response = _json(
            HTTPStatus.BAD_REQUEST,
            {"error": "INVALID_JSON", "message": str(exc)},
            base_cors_headers(request),
        )
    else:
        response = handle_request(request)
    status = HTTPStatus(response.status)
    start_response(f"{status.value} {status.phrase}", response.headers)
    return [response.body]


def handle_request(request: RsvpRequest, settings: AppSettings | None = None) -> RsvpResponse:
    method = request.method.upper()
    cors = base_cors_headers(request)
    try:
        if method == "OPTIONS":
            return RsvpResponse(HTTPStatus.NO_CONTENT, preflight_headers(request))

        if method == "HEAD":
            return RsvpResponse(HTTPStatus.NO_CONTENT, cors)

        if method != "POST":
            return _json(
                HTTPStatus.METHOD_NOT_ALLOWED,
                {"error": "METHOD_NOT_ALLOWED", "message": "Method not allowed. Use POST."},
                [*cors, ("Allow", ALLOWED_METHODS)],
            )

        submission = parse_submission(request.header("Content-Type"), request.body)
        result = send_rsvp_confirmation(submission, settings or load_settings())
        return _json(
            HTTPStatus.OK,
            {"message": "Email sent successfully!", "id": result.get("id")},
            cors,
        )
    except RsvpInputError as exc:
        logger.info("rsvp rejected code=%s message=%s", exc.code, exc)
        payload = {"error": exc.code, "message": str(exc)}
        if exc.field is not None:
            payload["field"] = exc.field
        return _json(exc.status, payload, cors)
    except EmailDeliveryTimeout as exc:
        return _json(
            HTTPStatus.GATEWAY_TIMEOUT,
            {"error": "DELIVERY_TIMEOUT", "message": str(exc)},
            cors,
        )
    except EmailDeliveryError as exc:
        return _json(
            HTTPStatus.BAD_GATEWAY,
            {
                "error": "DELIVERY_FAILED",
                "message": str(exc),
                "detail": exc.detail,
                "provider_status": exc.status,
            },
            cors,
        )
    except Exception as exc:
        logger.exception("rsvp request failed method=%s", method)
        return _json(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            {"error": "INTERNAL_ERROR", "message": str(exc)},
            cors,
        )


def _request_from_environ(environ: dict) -> RsvpRequest:
    raw_length = environ.get("CONTENT_LENGTH", "0") or "0"
    try:
        body_size = int(raw_length)
    except ValueError as exc:
        raise ValueError(f"invalid Content-Length: {raw_length!r}") from exc
    body = environ["wsgi.input"].read(body_size) if body_size > 0 else b""
    return RsvpRequest(
        method=environ.get("REQUEST_METHOD", "GET"),
        headers=_headers_from_environ(environ),
        body=body,
    )


def _headers_from_environ(environ: dict) -> dict[str, str]:
    headers: dict[str, str] = {}
    for key, value in environ.items():
        if key.startswith("HTTP_"):
            headers[key[5:].replace("_", "-").title()] = value
    if environ.get("CONTENT_TYPE"):
        headers["Content-Type"] = environ["CONTENT_TYPE"]
    return headers


def _json(status: HTTPStatus, payload: dict, headers: list[tuple[str, str]]) -> RsvpResponse:
    body = json.dumps(payload, ensure_ascii=True).encode("utf-8")
    return RsvpResponse(
        status,
        [
            *headers,
            ("Content-Type", "application/json; charset=utf-8"),
            ("Content-Length", str(len(body))),
        ],
        body,
    )
