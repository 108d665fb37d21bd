"""Shared BDD fixtures and step definitions for the Returns domain."""

import pytest
from notifications.audit.memory import InMemoryAuditLog
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.notification.dispatch import DispatchCoordinator
from notifications.preference.resolver import PreferenceResolver
from notifications.settings import NotificationSettings
from pytest_bdd import given, parsers, then
from returns.record.record import ReturnRecord
from shared.users import InMemoryUserStore, User


@pytest.fixture()
def desk():
    """Everything a scenario touches, kept in one place."""
    users = InMemoryUserStore()
    transport = FakeEmailAdapter()
    audit = InMemoryAuditLog()
    coordinator = DispatchCoordinator(
        transport=transport,
        settings=NotificationSettings(),
        preferences=PreferenceResolver(users),
        audit=audit,
    )
    return {
        "users": users,
        "transport": transport,
        "audit": audit,
        "coordinator": coordinator,
        "pending": [],
        "error": None,
        "inspection_date": None,
    }


@given(parsers.cfparse('seller "{seller_id}" owns a pending return'), target_fixture="record")
def pending_return(desk, seller_id):
    desk["users"].add(User(id=seller_id, email=f"{seller_id}@example.com"))
    desk["seller"] = seller_id
    record = ReturnRecord.create(seller_id=seller_id, order_number="ORD-BDD-1")
    record._events.clear()
    return record


@then(parsers.cfparse('the return status is "{status}"'))
def return_status_is(record, status):
    assert record.status == status
