"""Template registry: maps NotificationType to template classes.

Each template renders a subject and a plain-text body from the event context.
"""

from notifications.notification.event import NotificationType
from notifications.templates.delivery_issue import DeliveryIssueTemplate
from notifications.templates.return_assignment import ReturnAssignmentTemplate
from notifications.templates.return_created import ReturnCreatedTemplate
from notifications.templates.return_photos_added import ReturnPhotosAddedTemplate
from notifications.templates.return_status_update import ReturnStatusUpdateTemplate
from notifications.templates.shipment_approved import ShipmentApprovedTemplate
from notifications.templates.tracking_digest import (
    AdminTrackingDigestTemplate,
    TrackingDigestTemplate,
)
from notifications.templates.tracking_number import TrackingNumberTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.RETURN_CREATED.value: ReturnCreatedTemplate,
    NotificationType.RETURN_STATUS_UPDATE.value: ReturnStatusUpdateTemplate,
    NotificationType.RETURN_PHOTOS_ADDED.value: ReturnPhotosAddedTemplate,
    NotificationType.RETURN_ASSIGNMENT.value: ReturnAssignmentTemplate,
    NotificationType.SHIPMENT_APPROVED.value: ShipmentApprovedTemplate,
    NotificationType.TRACKING_NUMBER.value: TrackingNumberTemplate,
    NotificationType.DELIVERY_ISSUE.value: DeliveryIssueTemplate,
    NotificationType.TRACKING_DIGEST.value: TrackingDigestTemplate,
    NotificationType.ADMIN_TRACKING_DIGEST.value: AdminTrackingDigestTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
