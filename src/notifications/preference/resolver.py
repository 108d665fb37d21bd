"""Preference resolver: decides whether a user has opted in to a category.

A user that does not exist is never notified, and neither is a category
without a preference field. When the store cannot be read the decision falls
back to the notification's criticality: critical notifications are sent
anyway, everything else is suppressed.
"""

import structlog

from notifications.notification.event import NotificationCategory, parse_category
from shared.errors import PreferenceLookupError, ValidationError
from shared.users import ShipmentUpdateMode, UserStore

logger = structlog.get_logger(__name__)


def _flag(field_name):
    return lambda user: bool(getattr(user, field_name))


def _shipment_mode(mode: ShipmentUpdateMode):
    return lambda user: user.shipment_status_updates == mode.value


PREFERENCE_RULES = {
    NotificationCategory.MARKETING: _flag("email_marketing_campaigns"),
    NotificationCategory.SHIPMENT_IMMEDIATE: _shipment_mode(ShipmentUpdateMode.IMMEDIATE),
    NotificationCategory.SHIPMENT_DIGEST: _shipment_mode(ShipmentUpdateMode.DAILY_DIGEST),
    NotificationCategory.ACCOUNT: _flag("account_notifications"),
    NotificationCategory.ADMIN: _flag("admin_notifications"),
    NotificationCategory.TRACKING_DELIVERY: _flag("tracking_delivery_notifications"),
    NotificationCategory.REFUND_RETURN: _flag("refund_return_notifications"),
    NotificationCategory.SUPPORT_TICKET: _flag("support_ticket_notifications"),
    NotificationCategory.CUSTOMS: _flag("customs_notifications"),
}


class PreferenceResolver:
    def __init__(self, users: UserStore):
        self.users = users

    async def _lookup(self, user_id):
        try:
            return await self.users.get_user(user_id)
        except Exception as exc:
            raise PreferenceLookupError(user_id, cause=exc) from exc

    async def should_send(self, user_id, category, critical: bool = False) -> bool:
        try:
            category = parse_category(category)
        except ValidationError:
            logger.info("Unknown notification category", user_id=user_id, category=category)
            return False

        try:
            user = await self._lookup(user_id)
        except PreferenceLookupError as exc:
            logger.warning(
                "Preference lookup failed, using criticality fallback",
                user_id=user_id,
                category=category.value,
                critical=critical,
                error=str(exc.cause),
            )
            return critical

        if user is None:
            logger.info("Preference check for unknown user", user_id=user_id)
            return False

        rule = PREFERENCE_RULES.get(category)
        if rule is None:
            return False
        return rule(user)
