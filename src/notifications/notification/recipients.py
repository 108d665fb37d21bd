"""Recipient resolution: turns a NotificationEvent's targets into addresses.

User targets are looked up in the user store for their email address, unless
the caller already captured one. Admin list targets come from settings and are
always notified.
"""

import structlog

from notifications.notification.event import NotificationEvent, Recipient
from notifications.settings import NotificationSettings
from shared.users import UserStore

logger = structlog.get_logger(__name__)


class RecipientResolver:
    def __init__(self, users: UserStore, settings: NotificationSettings):
        self.users = users
        self.settings = settings

    def admin_recipients(self, admin_list) -> list[Recipient]:
        return [Recipient(address=address, always_notify=True) for address in self.settings.admin_list(admin_list)]

    async def _user_recipient(self, user_id, address=None, name="") -> Recipient | None:
        if address:
            return Recipient(address=address, user_id=str(user_id), name=name)

        try:
            user = await self.users.get_user(user_id)
        except Exception as exc:
            logger.warning("Could not resolve recipient address", user_id=user_id, error=str(exc))
            return None

        if user is None or not user.email:
            logger.info("No address for notification recipient", user_id=user_id)
            return None
        return Recipient(address=user.email, user_id=str(user.id), name=user.name)

    async def resolve(self, event: NotificationEvent, user_address=None, user_name="") -> list[Recipient]:
        """Admin list members first, then the targeted user."""
        recipients = []
        if event.admin_list:
            admins = self.admin_recipients(event.admin_list)
            if not admins:
                logger.warning("Admin list has no members", admin_list=event.admin_list)
            recipients.extend(admins)

        if event.user_id is not None:
            recipient = await self._user_recipient(event.user_id, address=user_address, name=user_name)
            if recipient is not None:
                recipients.append(recipient)

        return recipients
