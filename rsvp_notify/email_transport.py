from __future__ import annotations

import json
import logging
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from rsvp_notify.models import AppSettings

logger = logging.getLogger(__name__)


class EmailConfigError(RuntimeError):
    pass


class EmailDeliveryError(RuntimeError):
    def __init__(self, message: str, *, status: int | None = None, detail: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.detail = detail


class EmailDeliveryTimeout(EmailDeliveryError):
    pass


def send_email(settings: AppSettings, *, to_email: str, subject: str, html: str) -> dict:
    """Send one HTML email through the Resend HTTP API.

    A single attempt is made; the caller decides what a failure means.
    Returns the decoded provider response (usually ``{"id": ...}``).
    """
    if not settings.resend_api_key:
        raise EmailConfigError("RESEND_API_KEY is not set")
    if not settings.resend_from_email:
        raise EmailConfigError("RESEND_FROM_EMAIL is not set")

    payload = {
        "from": format_sender(settings),
        "to": [to_email],
        "subject": subject,
        "html": html,
    }
    req = Request(
        settings.resend_api_url,
        data=json.dumps(payload).encode("utf-8"),
        method="POST",
        headers={
            "Authorization": f"Bearer {settings.resend_api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        },
    )
    try:
        with urlopen(req, timeout=settings.resend_timeout_sec) as response:
            status = response.status
            body = response.read().decode("utf-8", errors="replace")
    except HTTPError as exc:
        detail = _read_error_body(exc)
        logger.warning("resend rejected email to=%s status=%s", to_email, exc.code)
        raise EmailDeliveryError("Resend failed", status=exc.code, detail=detail) from exc
    except TimeoutError as exc:
        raise EmailDeliveryTimeout(
            f"Resend did not respond within {settings.resend_timeout_sec}s",
            detail=str(exc),
        ) from exc
    except URLError as exc:
        if isinstance(exc.reason, TimeoutError):
            raise EmailDeliveryTimeout(
                f"Resend did not respond within {settings.resend_timeout_sec}s",
                detail=str(exc.reason),
            ) from exc
        logger.warning("resend unreachable to=%s reason=%s", to_email, exc.reason)
        raise EmailDeliveryError("Resend failed", detail=str(exc.reason)) from exc

    if not 200 <= status < 300:
        logger.warning("resend rejected email to=%s status=%s", to_email, status)
        raise EmailDeliveryError("Resend failed", status=status, detail=body)

    logger.info("resend accepted email to=%s status=%s", to_email, status)
    try:
        decoded = json.loads(body) if body else {}
    except json.JSONDecodeError:
        return {}
    return decoded if isinstance(decoded, dict) else {}


def format_sender(settings: AppSettings) -> str:
    if settings.resend_from_name:
        return f"{settings.resend_from_name} <{settings.resend_from_email}>"
    return settings.resend_from_email


def _read_error_body(exc: HTTPError) -> str:
    try:
        return exc.read().decode("utf-8", errors="replace")
    except OSError:
        return ""
