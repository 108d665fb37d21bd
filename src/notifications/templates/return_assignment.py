"""Return assignment template: internal notice to the assigned staff member."""

from notifications.notification.event import NotificationType
from notifications.templates._formatting import humanize


class ReturnAssignmentTemplate:
    notification_type = NotificationType.RETURN_ASSIGNMENT.value

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        return_id = context.get("return_id", "N/A")
        status = humanize(context.get("status"))
        customer_name = context.get("customer_name") or "N/A"
        return {
            "subject": f"[Returns] Assigned to you - Order {order_number}",
            "body": (
                f"Return {return_id} has been assigned to you.\n\n"
                f"Order: {order_number}\n"
                f"Customer: {customer_name}\n"
                f"Current Status: {status}\n"
            ),
        }
