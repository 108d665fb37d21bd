"""Digest dispatch: flushes a window and sends the resulting reports."""

import asyncio

import structlog

from notifications.digest.tracking import DEFAULT_WINDOW, DigestAggregator, DigestReport
from notifications.notification.dispatch import DispatchCoordinator
from notifications.notification.event import (
    AdminList,
    NotificationCategory,
    NotificationEvent,
    NotificationType,
    Recipient,
)
from notifications.notification.recipients import RecipientResolver

logger = structlog.get_logger(__name__)


class DigestDispatcher:
    def __init__(
        self,
        aggregator: DigestAggregator,
        coordinator: DispatchCoordinator,
        recipients: RecipientResolver,
    ):
        self.aggregator = aggregator
        self.coordinator = coordinator
        self.recipients = recipients

    async def send(self, window_id: str = DEFAULT_WINDOW, include_admin: bool = True) -> list:
        """Flush ``window_id`` and dispatch every report concurrently.

        Returns the DispatchReports. An empty window sends nothing.
        """
        flushed = self.aggregator.flush(window_id, include_admin=include_admin)
        if flushed.is_empty:
            logger.info("Digest window empty, nothing to send", window_id=window_id)
            return []

        sends = [self._send_user_report(report, window_id) for report in flushed.user_reports.values()]
        if flushed.admin_report is not None:
            sends.append(self._send_admin_report(flushed.admin_report, window_id))

        results = await asyncio.gather(*sends)
        return [report for report in results if report is not None]

    async def send_user(self, user_id, window_id: str = DEFAULT_WINDOW):
        """Flush and send a single owner's digest."""
        report = self.aggregator.flush_user(user_id, window_id)
        if report is None:
            return None
        return await self._send_user_report(report, window_id)

    async def _send_user_report(self, report: DigestReport, window_id):
        if not report.recipient_email:
            logger.warning("Digest dropped, owner has no email", owner_id=report.owner_id, rows=len(report))
            return None

        event = NotificationEvent(
            category=NotificationCategory.TRACKING_DELIVERY,
            notification_type=NotificationType.TRACKING_DIGEST,
            context={"rows": list(report.rows), "owner_id": report.owner_id, "owner_name": report.recipient_name},
            user_id=report.owner_id,
            source_event="TrackingDigest",
        )
        recipient = Recipient(address=report.recipient_email, user_id=report.owner_id, name=report.recipient_name)
        dispatched = await self.coordinator.dispatch(event, [recipient])
        self._log_result(dispatched, window_id, owner_id=report.owner_id, rows=len(report))
        return dispatched

    async def _send_admin_report(self, report: DigestReport, window_id):
        event = NotificationEvent(
            category=NotificationCategory.TRACKING_DELIVERY,
            notification_type=NotificationType.ADMIN_TRACKING_DIGEST,
            context={"rows": list(report.rows)},
            admin_list=AdminList.TRACKING_REPORT,
            source_event="TrackingDigest",
        )
        recipients = self.recipients.admin_recipients(AdminList.TRACKING_REPORT)
        if not recipients:
            logger.warning("Admin digest dropped, no tracking report recipients", rows=len(report))
            return None

        dispatched = await self.coordinator.dispatch(event, recipients)
        self._log_result(dispatched, window_id, owner_id=None, rows=len(report))
        return dispatched

    def _log_result(self, dispatched, window_id, owner_id, rows):
        if dispatched.succeeded:
            return
        logger.error(
            "Digest not delivered, dropping",
            window_id=window_id,
            owner_id=owner_id,
            rows=rows,
            outcome=dispatched.outcome.value,
        )
