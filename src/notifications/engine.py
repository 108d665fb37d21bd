"""Notification engine: wires settings, stores and transport into the services.

``get_engine()`` builds the process-wide engine from the environment on first
use. Tests build their own with ``build_engine`` and explicit collaborators.
"""

from dataclasses import dataclass

from notifications.audit import get_audit_log
from notifications.audit.port import AuditLog
from notifications.channel import get_mail_transport
from notifications.channel.mail_port import MailTransport
from notifications.digest.dispatch import DigestDispatcher
from notifications.digest.tracking import DigestAggregator
from notifications.notification.dispatch import DispatchCoordinator
from notifications.notification.recipients import RecipientResolver
from notifications.notification.return_events import ReturnNotificationRelay
from notifications.notification.shipment_events import ShipmentNotifier
from notifications.preference.resolver import PreferenceResolver
from notifications.preference.toggles import GlobalToggleGate
from notifications.settings import NotificationSettings
from shared.users import UserStore, get_user_store


@dataclass
class NotificationEngine:
    settings: NotificationSettings
    coordinator: DispatchCoordinator
    recipients: RecipientResolver
    aggregator: DigestAggregator
    digests: DigestDispatcher
    shipments: ShipmentNotifier
    returns: ReturnNotificationRelay


def build_engine(
    settings: NotificationSettings | None = None,
    transport: MailTransport | None = None,
    users: UserStore | None = None,
    audit: AuditLog | None = None,
) -> NotificationEngine:
    settings = settings or NotificationSettings.from_env()
    transport = transport or get_mail_transport()
    users = users or get_user_store()
    audit = audit or get_audit_log()

    coordinator = DispatchCoordinator(
        transport=transport,
        settings=settings,
        preferences=PreferenceResolver(users),
        audit=audit,
        gate=GlobalToggleGate(settings),
    )
    recipients = RecipientResolver(users, settings)
    aggregator = DigestAggregator()

    return NotificationEngine(
        settings=settings,
        coordinator=coordinator,
        recipients=recipients,
        aggregator=aggregator,
        digests=DigestDispatcher(aggregator, coordinator, recipients),
        shipments=ShipmentNotifier(coordinator, recipients, aggregator),
        returns=ReturnNotificationRelay(coordinator, recipients),
    )


_engine: NotificationEngine | None = None


def get_engine() -> NotificationEngine:
    """Return the process-wide engine (singleton)."""
    global _engine
    if _engine is None:
        _engine = build_engine()
    return _engine


def set_engine(engine: NotificationEngine) -> None:
    global _engine
    _engine = engine


def reset_engine():
    """Reset the engine singleton (useful for testing)."""
    global _engine
    _engine = None
