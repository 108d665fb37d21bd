"""Dispatch fan-out coordinator: sends one notification to many recipients.

Every recipient is handled independently and concurrently: the global toggle
gate, then the recipient's preferences (both bypassed for ``always_notify``
recipients), then a single delivery attempt bounded by the send timeout. One
recipient failing or stalling never affects the others. Every outcome,
skips included, is written to the audit log, and the caller gets a
DispatchReport instead of an exception.
"""

import asyncio
import time

import structlog

from notifications.audit.port import AuditLog
from notifications.channel.mail_port import MailTransport
from notifications.notification.event import NotificationEvent, Recipient
from notifications.notification.outcome import (
    AggregateOutcome,
    DeliveryStatus,
    DispatchReport,
    RecipientOutcome,
    SkipReason,
)
from notifications.preference.resolver import PreferenceResolver
from notifications.preference.toggles import GlobalToggleGate
from notifications.settings import NotificationSettings
from notifications.templates import get_template
from shared.errors import DispatchError

logger = structlog.get_logger(__name__)

# Marks a dedupe claim whose delivery has not finished yet
_IN_FLIGHT = None


def _unique_by_address(recipients) -> list[Recipient]:
    seen = set()
    unique = []
    for recipient in recipients:
        key = recipient.address.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(recipient)
    return unique


class DispatchCoordinator:
    def __init__(
        self,
        transport: MailTransport,
        settings: NotificationSettings,
        preferences: PreferenceResolver,
        audit: AuditLog,
        gate: GlobalToggleGate | None = None,
        clock=time.monotonic,
    ):
        self.transport = transport
        self.settings = settings
        self.preferences = preferences
        self.audit = audit
        self.gate = gate or GlobalToggleGate(settings)
        self._clock = clock
        # (dedupe_key, address) -> monotonic send time, or _IN_FLIGHT
        self._claims: dict[tuple[str, str], float | None] = {}

    async def dispatch(
        self,
        event: NotificationEvent,
        recipients,
        dedupe_key: str | None = None,
    ) -> DispatchReport:
        dedupe_key = dedupe_key or event.dedupe_key
        rendered = get_template(event.notification_type).render(event.context)

        self._expire_claims()
        targets = _unique_by_address(recipients)

        outcomes = await asyncio.gather(
            *(self._dispatch_one(event, recipient, rendered, dedupe_key) for recipient in targets)
        )

        report = DispatchReport(
            notification_type=event.notification_type,
            category=event.category.value,
            outcomes=list(outcomes),
        )
        self._log_report(event, report)
        return report

    # -------------------------------------------------------------------
    # Per-recipient pipeline
    # -------------------------------------------------------------------
    async def _dispatch_one(self, event, recipient, rendered, dedupe_key) -> RecipientOutcome:
        outcome = await self._gate(event, recipient)
        if outcome is None:
            outcome = await self._attempt(recipient, rendered, dedupe_key)

        await self._record(event, outcome, rendered["subject"])
        return outcome

    async def _gate(self, event, recipient) -> RecipientOutcome | None:
        """Return a skip outcome, or None when the recipient should be tried."""
        if recipient.always_notify:
            return None

        if not self.gate.is_category_enabled(event.category):
            return RecipientOutcome.skipped(recipient, SkipReason.GLOBAL_TOGGLE_DISABLED)

        if recipient.user_id is not None:
            allowed = await self.preferences.should_send(recipient.user_id, event.category, critical=event.critical)
            if not allowed:
                return RecipientOutcome.skipped(recipient, SkipReason.PREFERENCE_DISABLED)

        return None

    async def _attempt(self, recipient, rendered, dedupe_key) -> RecipientOutcome:
        claim = (dedupe_key, recipient.address.strip().lower()) if dedupe_key else None
        if claim is not None:
            if claim in self._claims:
                return RecipientOutcome.skipped(recipient, SkipReason.DUPLICATE)
            self._claims[claim] = _IN_FLIGHT

        outcome = None
        try:
            outcome = await self._deliver(recipient, rendered)
        finally:
            if claim is not None:
                if outcome is not None and outcome.status == DeliveryStatus.SENT:
                    self._claims[claim] = self._clock()
                else:
                    # Failed or cancelled attempts may be retried
                    self._claims.pop(claim, None)
        return outcome

    async def _deliver(self, recipient, rendered) -> RecipientOutcome:
        try:
            result = await asyncio.wait_for(
                self.transport.send(
                    to=recipient.address,
                    from_email=self.settings.sender_email,
                    subject=rendered["subject"],
                    body=rendered["body"],
                ),
                timeout=self.settings.send_timeout_seconds,
            )
            if result.get("status") != "sent":
                raise DispatchError(recipient.address, result.get("error") or "Unknown dispatch error")
        except TimeoutError:
            logger.warning(
                "Notification send timed out",
                recipient=recipient.address,
                timeout=self.settings.send_timeout_seconds,
            )
            return RecipientOutcome.failed(recipient, "timeout")
        except DispatchError as e:
            logger.warning("Notification send failed", recipient=recipient.address, error=e.reason)
            return RecipientOutcome.failed(recipient, e.reason)
        except Exception as e:
            logger.error("Notification transport error", recipient=recipient.address, error=str(e))
            return RecipientOutcome.failed(recipient, str(e))

        return RecipientOutcome.sent(recipient, message_id=result.get("message_id"))

    # -------------------------------------------------------------------
    # Bookkeeping
    # -------------------------------------------------------------------
    def _expire_claims(self):
        window = self.settings.dedupe_window_seconds
        now = self._clock()
        expired = [key for key, sent_at in self._claims.items() if sent_at is not _IN_FLIGHT and now - sent_at >= window]
        for key in expired:
            del self._claims[key]

    async def _record(self, event, outcome: RecipientOutcome, subject):
        try:
            await self.audit.record(
                notification_type=event.notification_type,
                recipient=outcome.recipient.address,
                status=outcome.status.value,
                error=outcome.error,
                reason=outcome.reason.value if outcome.reason else None,
                subject=subject,
            )
        except Exception as e:
            logger.error(
                "Failed to write audit entry",
                notification_type=event.notification_type,
                recipient=outcome.recipient.address,
                error=str(e),
            )

    def _log_report(self, event, report: DispatchReport):
        fields = dict(
            notification_type=event.notification_type,
            category=event.category.value,
            outcome=report.outcome.value,
            sent=report.sent_count,
            failed=report.failed_count,
            skipped=report.skipped_count,
            source_event=event.source_event,
        )
        if report.outcome == AggregateOutcome.PARTIAL_FAILURE:
            logger.warning("Notification partially delivered", **fields)
        elif report.outcome == AggregateOutcome.TOTAL_FAILURE:
            logger.error("Notification delivery failed", **fields)
        else:
            logger.info("Notification dispatched", **fields)
