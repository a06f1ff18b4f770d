from __future__ import annotations

import json
import logging
from http import HTTPStatus

from rsvp_notify.email_render import render_rsvp_email
from rsvp_notify.email_transport import send_email
from rsvp_notify.models import REQUIRED_FIELDS, AppSettings, RsvpSubmission

logger = logging.getLogger(__name__)


class RsvpInputError(ValueError):
    def __init__(
        self,
        code: str,
        message: str,
        *,
        status: HTTPStatus = HTTPStatus.BAD_REQUEST,
        field: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status = status
        self.field = field


def parse_submission(content_type: str | None, body: bytes) -> RsvpSubmission:
    if "application/json" not in (content_type or "").lower():
        raise RsvpInputError(
            "UNSUPPORTED_MEDIA_TYPE",
            "Content-Type must be application/json",
            status=HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
        )

    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RsvpInputError("INVALID_JSON", str(exc)) from exc
    if not isinstance(payload, dict):
        raise RsvpInputError("INVALID_JSON", "request body must be JSON object")

    for key in REQUIRED_FIELDS:
        if key not in payload:
            raise RsvpInputError("MISSING_FIELD", f"Missing field: {key}", field=key)

    return RsvpSubmission.from_dict(payload)


def send_rsvp_confirmation(submission: RsvpSubmission, settings: AppSettings) -> dict:
    html = render_rsvp_email(
        submission,
        signature=settings.resend_from_name,
        escape=settings.escape_html,
    )
    logger.info("sending rsvp confirmation to=%s guests=%s", submission.email, submission.guest_count)
    return send_email(
        settings,
        to_email=submission.email,
        subject=settings.email_subject,
        html=html,
    )
