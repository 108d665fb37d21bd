"""Return photos template: sent when the warehouse photographs a returned item."""

from notifications.notification.event import NotificationType


class ReturnPhotosAddedTemplate:
    notification_type = NotificationType.RETURN_PHOTOS_ADDED.value

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        photo_count = context.get("photo_count", 0)
        noun = "photo" if photo_count == 1 else "photos"
        return {
            "subject": f"New Return Photos - Order {order_number}",
            "body": (
                f"Our warehouse team added {photo_count} {noun} to the return "
                f"for order {order_number}.\n\n"
                "Open the return in your dashboard to review them."
            ),
        }
