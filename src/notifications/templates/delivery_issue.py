"""Delivery issue template: sent to operations and the owner on a carrier exception."""

from notifications.notification.event import NotificationType
from notifications.templates._formatting import humanize


class DeliveryIssueTemplate:
    notification_type = NotificationType.DELIVERY_ISSUE.value

    @staticmethod
    def render(context: dict) -> dict:
        shipment_id = context.get("shipment_id", "N/A")
        tracking_number = context.get("carrier_tracking_number") or "N/A"
        issue_type = humanize(context.get("issue_type"))
        description = context.get("status_description") or "No details from the carrier"
        return {
            "subject": f"Delivery Issue - Shipment {shipment_id}",
            "body": (
                f"The carrier reported a problem delivering shipment {shipment_id}.\n\n"
                f"Tracking Number: {tracking_number}\n"
                f"Issue: {issue_type}\n"
                f"Details: {description}\n\n"
                "Our operations team has been notified and is looking into it."
            ),
        }
