from __future__ import annotations

import html

from rsvp_notify.models import RsvpSubmission


def render_rsvp_email(
    submission: RsvpSubmission,
    *,
    signature: str,
    escape: bool = False,
) -> str:
    """Build the confirmation email body.

    Values are interpolated as-is unless ``escape`` is set; the invitation
    flow is private and the recipient is the submitter.
    """

    def fmt(value: object) -> str:
        text = str(value)
        return html.escape(text) if escape else text

    comments_html = ""
    if submission.comments:
        comments_html = f"<p><strong>Comments:</strong> {fmt(submission.comments)}</p>"

    return f"""
      <html><body style="font-family: Arial, sans-serif;">
        <h2>Thank You for your RSVP, {fmt(submission.name)}!</h2>
        <p>Here is a summary:</p>
        <div>
          <p><strong>Total Guests:</strong> {fmt(submission.guest_count)}</p>
          <p><strong>Non-Veg Meals:</strong> {fmt(submission.non_veg)}</p>
          <p><strong>Veg Meals:</strong> {fmt(submission.veg)}</p>
          {comments_html}
        </div>
        <p>With love,<br>{fmt(signature)}</p>
      </body></html>
    """
