"""Fake email adapter: records sent emails for testing."""

import asyncio
from uuid import uuid4

from notifications.channel.mail_port import MailTransport


class FakeEmailAdapter(MailTransport):
    """Mail transport that records messages in memory for test assertions.

    Failures can be forced for every address or only for ``fail_for``;
    ``delays`` holds per-address latencies in seconds to exercise timeouts.
    """

    def __init__(self):
        self.sent_emails: list[dict] = []
        self.attempts: list[str] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.fail_for: set[str] = set()
        self.delays: dict[str, float] = {}

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Email delivery failed",
        fail_for=None,
        delays: dict[str, float] | None = None,
    ):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.fail_for = set(fail_for or ())
        self.delays = dict(delays or {})

    async def send(
        self,
        to: str,
        from_email: str,
        subject: str,
        body: str,
    ) -> dict:
        self.attempts.append(to)

        delay = self.delays.get(to, 0)
        if delay:
            await asyncio.sleep(delay)

        if not self.should_succeed or to in self.fail_for:
            return {
                "message_id": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        message_id = f"email-{uuid4().hex[:12]}"
        record = {
            "message_id": message_id,
            "to": to,
            "from_email": from_email,
            "subject": subject,
            "body": body,
        }
        self.sent_emails.append(record)

        return {"message_id": message_id, "status": "sent"}

    def sent_to(self, address: str) -> list[dict]:
        return [e for e in self.sent_emails if e["to"] == address]

    def reset(self):
        """Clear sent emails (useful between tests)."""
        self.sent_emails.clear()
        self.attempts.clear()
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.fail_for = set()
        self.delays = {}
