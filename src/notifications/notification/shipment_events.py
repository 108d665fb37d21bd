"""Shipment notifications: approvals, tracking numbers, tracking updates and delivery issues.

Tracking updates are digest material and only go into the aggregator; the
other events are dispatched immediately. A delivery issue goes to the
operations list and the shipment owner in one dispatch, so the caller sees
whether both, one or neither were reached.
"""

import structlog

from notifications.digest.tracking import DEFAULT_WINDOW, DigestAggregator, TrackingUpdate
from notifications.notification.dispatch import DispatchCoordinator
from notifications.notification.event import (
    AdminList,
    NotificationCategory,
    NotificationEvent,
    NotificationType,
)
from notifications.notification.recipients import RecipientResolver
from shared.shipments import ShipmentSnapshot

logger = structlog.get_logger(__name__)


def _shipment_context(shipment: ShipmentSnapshot) -> dict:
    return {
        "shipment_id": shipment.shipment_id,
        "carrier_tracking_number": shipment.carrier_tracking_number,
        "receiver_name": shipment.receiver_name,
        "destination": shipment.destination,
        "owner_name": shipment.owner_name,
    }


class ShipmentNotifier:
    def __init__(
        self,
        coordinator: DispatchCoordinator,
        recipients: RecipientResolver,
        aggregator: DigestAggregator,
    ):
        self.coordinator = coordinator
        self.recipients = recipients
        self.aggregator = aggregator

    async def _dispatch(self, event: NotificationEvent, shipment: ShipmentSnapshot):
        targets = await self.recipients.resolve(event, user_address=shipment.owner_email, user_name=shipment.owner_name)
        return await self.coordinator.dispatch(event, targets)

    async def shipment_approved(self, shipment: ShipmentSnapshot):
        event = NotificationEvent(
            category=NotificationCategory.SHIPMENT_IMMEDIATE,
            notification_type=NotificationType.SHIPMENT_APPROVED,
            context=_shipment_context(shipment),
            user_id=shipment.owner_id,
            dedupe_key=f"{shipment.shipment_id}:approved",
            source_event="ShipmentApproved",
        )
        return await self._dispatch(event, shipment)

    async def tracking_number_added(self, shipment: ShipmentSnapshot):
        event = NotificationEvent(
            category=NotificationCategory.TRACKING_DELIVERY,
            notification_type=NotificationType.TRACKING_NUMBER,
            context=_shipment_context(shipment),
            user_id=shipment.owner_id,
            dedupe_key=f"{shipment.shipment_id}:tracking:{shipment.carrier_tracking_number}",
            source_event="TrackingNumberAdded",
        )
        return await self._dispatch(event, shipment)

    def tracking_updated(
        self,
        shipment: ShipmentSnapshot,
        status,
        status_description="",
        issue_type=None,
        window_id: str = DEFAULT_WINDOW,
    ) -> TrackingUpdate:
        update = TrackingUpdate.capture(
            shipment,
            status=status,
            status_description=status_description,
            issue_type=issue_type,
        )
        self.aggregator.enqueue(update, window_id=window_id)
        logger.debug(
            "Tracking update buffered",
            shipment_id=shipment.shipment_id,
            status=status,
            window_id=window_id,
        )
        return update

    async def delivery_issue_detected(self, shipment: ShipmentSnapshot, issue_type, status_description=""):
        context = _shipment_context(shipment)
        context.update(issue_type=issue_type, status_description=status_description)
        event = NotificationEvent(
            category=NotificationCategory.TRACKING_DELIVERY,
            notification_type=NotificationType.DELIVERY_ISSUE,
            context=context,
            user_id=shipment.owner_id,
            admin_list=AdminList.OPERATIONS,
            dedupe_key=f"{shipment.shipment_id}:issue:{issue_type}",
            source_event="DeliveryIssueDetected",
        )
        return await self._dispatch(event, shipment)
