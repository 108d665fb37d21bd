"""Shipment approved template: sent when a shipment clears review."""

from notifications.notification.event import NotificationType


class ShipmentApprovedTemplate:
    notification_type = NotificationType.SHIPMENT_APPROVED.value

    @staticmethod
    def render(context: dict) -> dict:
        shipment_id = context.get("shipment_id", "N/A")
        receiver_name = context.get("receiver_name") or "your receiver"
        destination = context.get("destination") or "N/A"
        return {
            "subject": f"Shipment {shipment_id} Approved",
            "body": (
                f"Your shipment {shipment_id} to {receiver_name} ({destination}) "
                "has been approved and is being prepared for the carrier.\n\n"
                "You will receive the tracking number once it is available."
            ),
        }
