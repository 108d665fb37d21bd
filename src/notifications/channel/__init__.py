"""Mail transport registry: pluggable email delivery.

Provides singleton access to the mail transport. Uses the fake adapter by
default; ``MAIL_TRANSPORT=sendgrid`` (with ``SENDGRID_API_KEY``) switches to
SendGrid in production.
"""

import os

from notifications.channel.mail_port import MailTransport

_transport: MailTransport | None = None


def get_mail_transport() -> MailTransport:
    """Return the configured mail transport (singleton)."""
    global _transport
    if _transport is None:
        backend = os.environ.get("MAIL_TRANSPORT", "fake")
        if backend == "fake":
            from notifications.channel.fake_email import FakeEmailAdapter

            _transport = FakeEmailAdapter()
        elif backend == "sendgrid":
            from notifications.channel.sendgrid import SendGridAdapter

            api_key = os.environ.get("SENDGRID_API_KEY")
            if not api_key:
                raise ValueError("SENDGRID_API_KEY is required for the sendgrid mail transport")
            _transport = SendGridAdapter(api_key=api_key)
        else:
            raise ValueError(f"Unknown mail transport: {backend}")

    return _transport


def reset_mail_transport():
    """Reset the mail transport singleton (useful for testing)."""
    global _transport
    _transport = None
