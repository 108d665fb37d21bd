"""Return status update template: sent when the warehouse moves a return forward."""

from notifications.notification.event import NotificationType
from notifications.templates._formatting import humanize


class ReturnStatusUpdateTemplate:
    notification_type = NotificationType.RETURN_STATUS_UPDATE.value

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        new_status = humanize(context.get("new_status"))
        previous_status = humanize(context.get("previous_status"))
        admin_notes = context.get("admin_notes")

        body = (
            f"The return for order {order_number} has moved from "
            f"{previous_status} to {new_status}.\n"
        )
        if admin_notes:
            body += f"\nNotes from the warehouse:\n{admin_notes}\n"
        body += "\nYou can follow the return from your dashboard."

        return {
            "subject": f"Return Update - Order {order_number}: {new_status}",
            "body": body,
        }
