"""Global toggle gate: platform-wide on/off switch per notification category."""

from notifications.notification.event import parse_category
from notifications.settings import NotificationSettings


class GlobalToggleGate:
    def __init__(self, settings: NotificationSettings):
        self.settings = settings

    def is_category_enabled(self, category) -> bool:
        """Categories without a configured switch are enabled."""
        category = parse_category(category)
        return self.settings.global_toggles.get(category.value, True)
