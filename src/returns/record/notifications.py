"""Pending notifications raised by return lifecycle events.

Maps the domain events a ReturnRecord raised during one operation to the
NotificationEvents that should follow. Nothing is sent here; the relay in the
notifications context dispatches them after the record is saved.
"""

from notifications.notification.event import (
    NotificationCategory,
    NotificationEvent,
    NotificationType,
)
from returns.record.events import (
    ReturnAssigned,
    ReturnCreated,
    ReturnPhotosAdded,
    ReturnStatusChanged,
)


def _return_context(record) -> dict:
    return {
        "return_id": str(record.id),
        "order_number": record.order_number,
        "product_name": record.product_name,
        "customer_name": record.customer_name,
        "return_reason": record.return_reason,
        "status": record.status,
    }


def _on_created(record, event):
    return NotificationEvent(
        category=NotificationCategory.REFUND_RETURN,
        notification_type=NotificationType.RETURN_CREATED,
        context=_return_context(record),
        user_id=str(record.seller_id),
        dedupe_key=f"{record.id}:created",
        source_event="ReturnCreated",
    )


def _on_status_changed(record, event):
    context = _return_context(record)
    context.update(
        previous_status=event.previous_status,
        new_status=event.new_status,
        admin_notes=event.admin_notes,
    )
    return NotificationEvent(
        category=NotificationCategory.REFUND_RETURN,
        notification_type=NotificationType.RETURN_STATUS_UPDATE,
        context=context,
        user_id=str(event.seller_id),
        dedupe_key=f"{record.id}:status:{event.new_status}",
        source_event="ReturnStatusChanged",
    )


def _on_photos_added(record, event):
    # Sellers are only told about photos the warehouse took
    if not event.uploaded_by_admin:
        return None
    context = _return_context(record)
    context["photo_count"] = event.photo_count
    return NotificationEvent(
        category=NotificationCategory.REFUND_RETURN,
        notification_type=NotificationType.RETURN_PHOTOS_ADDED,
        context=context,
        user_id=str(event.seller_id),
        source_event="ReturnPhotosAdded",
    )


def _on_assigned(record, event):
    context = _return_context(record)
    context.update(assignee_id=str(event.assignee_id), assigner_id=str(event.assigner_id))
    return NotificationEvent(
        category=NotificationCategory.ADMIN,
        notification_type=NotificationType.RETURN_ASSIGNMENT,
        context=context,
        user_id=str(event.assignee_id),
        dedupe_key=f"{record.id}:assigned:{event.assignee_id}",
        source_event="ReturnAssigned",
    )


_TRANSLATORS = {
    ReturnCreated: _on_created,
    ReturnStatusChanged: _on_status_changed,
    ReturnPhotosAdded: _on_photos_added,
    ReturnAssigned: _on_assigned,
}


def notifications_for(record, events) -> list[NotificationEvent]:
    """Translate raised domain events into pending notifications, in order."""
    pending = []
    for event in events:
        translator = _TRANSLATORS.get(type(event))
        if translator is None:
            continue
        notification = translator(record, event)
        if notification is not None:
            pending.append(notification)
    return pending
