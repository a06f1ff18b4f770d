from __future__ import annotations

from rsvp_notify.models import RsvpRequest

ALLOWED_METHODS = "POST, OPTIONS, HEAD"
DEFAULT_ALLOWED_HEADERS = "authorization, x-client-info, apikey, content-type"
PREFLIGHT_MAX_AGE_SEC = 86400


def base_cors_headers(request: RsvpRequest) -> list[tuple[str, str]]:
    return [
        ("Access-Control-Allow-Origin", request.header("Origin") or "*"),
        ("Vary", "Origin, Access-Control-Request-Method, Access-Control-Request-Headers"),
    ]


def preflight_headers(request: RsvpRequest) -> list[tuple[str, str]]:
    requested = request.header("Access-Control-Request-Headers") or DEFAULT_ALLOWED_HEADERS
    return [
        *base_cors_headers(request),
        ("Access-Control-Allow-Methods", ALLOWED_METHODS),
        ("Access-Control-Allow-Headers", requested),
        ("Access-Control-Max-Age", str(PREFLIGHT_MAX_AGE_SEC)),
    ]
