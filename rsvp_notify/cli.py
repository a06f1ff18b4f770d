from __future__ import annotations

import argparse
import sys

from rsvp_notify.email_render import render_rsvp_email
from rsvp_notify.logging_utils import setup_logging
from rsvp_notify.rsvp_api import run_api_server
from rsvp_notify.rsvp_service import RsvpInputError, parse_submission
from rsvp_notify.settings import load_settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="rsvp-notify")
    parser.add_argument("command", choices=["api-run", "preview"])
    parser.add_argument(
        "--input",
        help="submission JSON file for preview (defaults to stdin)",
    )
    parser.add_argument("--log-file", action="store_true", help="also write logs under logs/")
    args = parser.parse_args(argv)

    settings = load_settings()
    setup_logging(settings.log_level, log_to_file=args.log_file)

    if args.command == "api-run":
        run_api_server(settings.api_host, settings.api_port)
        return 0
    return _preview(args.input, escape=settings.escape_html, signature=settings.resend_from_name)


def _preview(path: str | None, *, escape: bool, signature: str) -> int:
    if path:
        with open(path, "rb") as fh:
            raw = fh.read()
    else:
        raw = sys.stdin.buffer.read()
    try:
        submission = parse_submission("application/json", raw)
    except RsvpInputError as exc:
        print(f"{exc.code}: {exc}", file=sys.stderr)
        return 2
    print(render_rsvp_email(submission, signature=signature, escape=escape))
    return 0


if __name__ == "__main__":
    sys.exit(main())
