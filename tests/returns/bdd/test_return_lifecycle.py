"""BDD tests for the return lifecycle."""

import asyncio

from notifications.notification.event import Recipient
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when
from returns.record.notifications import notifications_for

scenarios("features/return_lifecycle.feature")


@given("the seller has turned off refund and return emails")
def seller_opts_out(desk):
    user = desk["users"].users[desk["seller"]]
    user.refund_return_notifications = False


@when(parsers.cfparse('an admin sets the status to "{status}"'))
def admin_sets_status(desk, record, status):
    record.transition_status(status)
    desk["pending"] = notifications_for(record, record._events)
    record._events.clear()
    if record.inspection_date is not None and desk["inspection_date"] is None:
        desk["inspection_date"] = record.inspection_date


@when(parsers.cfparse('an admin tries to set the status to "{status}"'))
def admin_tries_status(desk, record, status):
    try:
        record.transition_status(status)
    except ValidationError as exc:
        desk["error"] = exc


@when("the pending notifications are dispatched")
def dispatch_pending(desk):
    async def _dispatch():
        for event in desk["pending"]:
            user = desk["users"].users[event.user_id]
            await desk["coordinator"].dispatch(event, [Recipient(address=user.email, user_id=user.id)])

    asyncio.run(_dispatch())


@then("the inspection date is not set")
def inspection_not_set(record):
    assert record.inspection_date is None


@then("the inspection date is set")
def inspection_set(record):
    assert record.inspection_date is not None


@then("the inspection date is unchanged")
def inspection_unchanged(desk, record):
    assert record.inspection_date == desk["inspection_date"]


@then(parsers.cfparse('a refund-return notification is pending for "{seller_id}"'))
def refund_return_pending(desk, seller_id):
    assert len(desk["pending"]) == 1
    assert desk["pending"][0].category.value == "refund-return"
    assert desk["pending"][0].user_id == seller_id


@then("no notification is pending")
def nothing_pending(desk):
    assert desk["pending"] == []


@then("the seller receives no email")
def seller_no_email(desk):
    assert desk["transport"].sent_emails == []


@then(parsers.cfparse("the seller receives {count:d} email"))
def seller_receives(desk, count):
    assert len(desk["transport"].sent_to(f"{desk['seller']}@example.com")) == count


@then(parsers.cfparse('the audit log shows "{status}" with reason "{reason}"'))
def audit_shows(desk, status, reason):
    entries = desk["audit"].entries
    assert len(entries) == 1
    assert entries[0].status == status
    assert entries[0].reason == reason


@then("the transition is rejected")
def transition_rejected(desk):
    assert isinstance(desk["error"], ValidationError)


@then("the audit log records a send")
def audit_records_send(desk):
    entries = desk["audit"].entries
    assert [e.status for e in entries] == ["sent"]
    assert entries[0].reason is None
