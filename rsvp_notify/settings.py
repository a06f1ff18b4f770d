from __future__ import annotations

import os

from dotenv import load_dotenv

from rsvp_notify.models import AppSettings

DEFAULT_RESEND_API_URL = "https://api.resend.com/emails"
DEFAULT_SUBJECT = "✓ Your RSVP is Confirmed!"


def load_settings() -> AppSettings:
    load_dotenv()
    return AppSettings(
        resend_api_key=os.getenv("RESEND_API_KEY", ""),
        resend_from_email=os.getenv("RESEND_FROM_EMAIL", ""),
        resend_from_name=os.getenv("RESEND_FROM_NAME", "Muhil & Kalyanni"),
        resend_api_url=os.getenv("RESEND_API_URL", DEFAULT_RESEND_API_URL),
        resend_timeout_sec=float(os.getenv("RESEND_TIMEOUT_SEC", "15")),
        email_subject=os.getenv("RSVP_EMAIL_SUBJECT", DEFAULT_SUBJECT),
        escape_html=_env_flag("RSVP_ESCAPE_HTML"),
        api_host=os.getenv("API_HOST", "127.0.0.1"),
        api_port=int(os.getenv("API_PORT", "8080")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}
