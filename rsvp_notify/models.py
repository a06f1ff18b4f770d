from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

REQUIRED_FIELDS = ("name", "email", "guest_count", "non_veg", "veg")


@dataclass(frozen=True)
class RsvpSubmission:
    name: Any
    email: Any
    guest_count: Any
    non_veg: Any
    veg: Any
    comments: Any = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> RsvpSubmission:
        return cls(
            name=payload["name"],
            email=payload["email"],
            guest_count=payload["guest_count"],
            non_veg=payload["non_veg"],
            veg=payload["veg"],
            comments=payload.get("comments"),
        )


@dataclass(frozen=True)
class AppSettings:
    resend_api_key: str
    resend_from_email: str
    resend_from_name: str
    resend_api_url: str
    resend_timeout_sec: float
    email_subject: str
    escape_html: bool
    api_host: str
    api_port: int
    log_level: str


@dataclass(frozen=True)
class RsvpRequest:
    method: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def header(self, name: str, default: str | None = None) -> str | None:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default


@dataclass(frozen=True)
class RsvpResponse:
    status: int
    headers: list[tuple[str, str]]
    body: bytes = b""
