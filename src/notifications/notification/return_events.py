"""Return notifications relay: dispatches what a lifecycle operation produced.

Runs after the return is saved. Dispatch problems are logged and reported,
never raised: the return change already happened.
"""

import structlog

from notifications.notification.dispatch import DispatchCoordinator
from notifications.notification.recipients import RecipientResolver

logger = structlog.get_logger(__name__)


class ReturnNotificationRelay:
    def __init__(self, coordinator: DispatchCoordinator, recipients: RecipientResolver):
        self.coordinator = coordinator
        self.recipients = recipients

    async def deliver(self, result) -> list:
        """Dispatch every pending notification on a LifecycleResult, in order."""
        reports = []
        for event in result.notifications:
            try:
                targets = await self.recipients.resolve(event)
                if not targets:
                    logger.info(
                        "No recipients for return notification",
                        return_id=str(result.record.id),
                        notification_type=event.notification_type,
                    )
                    continue
                reports.append(await self.coordinator.dispatch(event, targets))
            except Exception as e:
                logger.error(
                    "Return notification dispatch failed",
                    return_id=str(result.record.id),
                    notification_type=event.notification_type,
                    error=str(e),
                )
        return reports
