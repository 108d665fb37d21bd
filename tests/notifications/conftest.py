"""Shared fixtures for the notifications tests.

Everything here is in-process: users live in an InMemoryUserStore, mail goes
to the FakeEmailAdapter and the audit log is a list. Tests that persist
audit entries opt into the notifications domain through ``notifications_ctx``.
"""

import pytest
from notifications.audit.memory import InMemoryAuditLog
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.notification.dispatch import DispatchCoordinator
from notifications.notification.recipients import RecipientResolver
from notifications.preference.resolver import PreferenceResolver
from notifications.settings import NotificationSettings
from protean.integrations.pytest import DomainFixture
from shared.users import InMemoryUserStore, ShipmentUpdateMode, User, UserRole


@pytest.fixture()
def users():
    return InMemoryUserStore(
        [
            User(id="seller-1", email="seller1@example.com", name="Sam Seller"),
            User(id="seller-2", email="seller2@example.com", name="Sky Seller"),
            User(
                id="seller-quiet",
                email="quiet@example.com",
                name="Quinn Quiet",
                refund_return_notifications=False,
                tracking_delivery_notifications=False,
                shipment_status_updates=ShipmentUpdateMode.OFF.value,
            ),
            User(id="admin-1", email="admin1@example.com", name="Ada Admin", role=UserRole.ADMIN.value),
        ]
    )


@pytest.fixture()
def settings():
    return NotificationSettings(
        sender_email="desk@shipdesk.test",
        send_timeout_seconds=1.0,
        dedupe_window_seconds=60,
        admin_recipients={
            "operations": ["ops1@shipdesk.test", "ops2@shipdesk.test"],
            "returns": ["returns@shipdesk.test"],
            "tracking_report": ["tracking@shipdesk.test"],
        },
    )


@pytest.fixture()
def transport():
    return FakeEmailAdapter()


@pytest.fixture()
def audit():
    return InMemoryAuditLog()


@pytest.fixture()
def coordinator(transport, settings, users, audit):
    return DispatchCoordinator(
        transport=transport,
        settings=settings,
        preferences=PreferenceResolver(users),
        audit=audit,
    )


@pytest.fixture()
def recipients(users, settings):
    return RecipientResolver(users, settings)


@pytest.fixture(scope="session")
def notifications_bed():
    from notifications.domain import notifications

    bed = DomainFixture(notifications)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture()
def notifications_ctx(notifications_bed):
    with notifications_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()
