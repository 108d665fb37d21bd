"""Return created template: confirms a return was registered for the seller."""

from notifications.notification.event import NotificationType


class ReturnCreatedTemplate:
    notification_type = NotificationType.RETURN_CREATED.value

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        product_name = context.get("product_name") or "your item"
        reason = context.get("return_reason") or "not specified"
        return {
            "subject": f"Return Registered - Order {order_number}",
            "body": (
                f"A return has been registered for order {order_number} "
                f"({product_name}).\n\n"
                f"Reason: {reason}\n\n"
                "We will let you know as soon as the warehouse receives it."
            ),
        }
