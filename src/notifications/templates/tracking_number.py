"""Tracking number template: sent when the carrier tracking number is known."""

from notifications.notification.event import NotificationType


class TrackingNumberTemplate:
    notification_type = NotificationType.TRACKING_NUMBER.value

    @staticmethod
    def render(context: dict) -> dict:
        shipment_id = context.get("shipment_id", "N/A")
        tracking_number = context.get("carrier_tracking_number", "N/A")
        return {
            "subject": f"Tracking Number for Shipment {shipment_id}",
            "body": (
                f"Your shipment {shipment_id} now has a tracking number.\n\n"
                f"Tracking Number: {tracking_number}\n\n"
                "You can track your package using the tracking number above."
            ),
        }
