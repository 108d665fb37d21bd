"""Notification settings: platform-wide toggles, admin lists and dispatch limits.

Settings are an explicit object handed to the gate, the resolver and the
coordinator. ``from_env()`` builds one from ``SHIPDESK_*`` variables, which is
what the application does once at startup; tests construct them directly.
"""

import os

from pydantic import BaseModel, Field, field_validator

from notifications.notification.event import AdminList, NotificationCategory

_CATEGORY_VALUES = {c.value for c in NotificationCategory}
_ADMIN_LIST_VALUES = {a.value for a in AdminList}


def _split(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class NotificationSettings(BaseModel):
    sender_email: str = "notifications@shipdesk.local"
    send_timeout_seconds: float = Field(default=10.0, gt=0)
    dedupe_window_seconds: float = Field(default=300.0, ge=0)

    # category value -> enabled; categories absent here are enabled
    global_toggles: dict[str, bool] = Field(default_factory=dict)

    # admin list name -> email addresses
    admin_recipients: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("global_toggles")
    @classmethod
    def _known_categories(cls, value: dict[str, bool]) -> dict[str, bool]:
        unknown = sorted(set(value) - _CATEGORY_VALUES)
        if unknown:
            raise ValueError(f"Unknown notification categories: {', '.join(unknown)}")
        return value

    @field_validator("admin_recipients")
    @classmethod
    def _known_lists(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        unknown = sorted(set(value) - _ADMIN_LIST_VALUES)
        if unknown:
            raise ValueError(f"Unknown admin lists: {', '.join(unknown)}")
        return value

    def admin_list(self, name) -> list[str]:
        if isinstance(name, AdminList):
            name = name.value
        return list(self.admin_recipients.get(name, []))

    @classmethod
    def from_env(cls, environ=None) -> "NotificationSettings":
        """Build settings from ``SHIPDESK_*`` environment variables.

        ``SHIPDESK_DISABLED_CATEGORIES`` is a comma-separated list of categories
        switched off platform-wide. Admin lists are read from
        ``SHIPDESK_ADMIN_OPERATIONS``, ``SHIPDESK_ADMIN_RETURNS`` and
        ``SHIPDESK_ADMIN_TRACKING_REPORT``.
        """
        env = os.environ if environ is None else environ

        values: dict = {}
        if env.get("SHIPDESK_SENDER_EMAIL"):
            values["sender_email"] = env["SHIPDESK_SENDER_EMAIL"]
        if env.get("SHIPDESK_SEND_TIMEOUT_SECONDS"):
            values["send_timeout_seconds"] = float(env["SHIPDESK_SEND_TIMEOUT_SECONDS"])
        if env.get("SHIPDESK_DEDUPE_WINDOW_SECONDS"):
            values["dedupe_window_seconds"] = float(env["SHIPDESK_DEDUPE_WINDOW_SECONDS"])

        values["global_toggles"] = {
            category: False for category in _split(env.get("SHIPDESK_DISABLED_CATEGORIES"))
        }

        admin_recipients = {}
        for admin_list in AdminList:
            addresses = _split(env.get(f"SHIPDESK_ADMIN_{admin_list.value.upper()}"))
            if addresses:
                admin_recipients[admin_list.value] = addresses
        values["admin_recipients"] = admin_recipients

        return cls(**values)
