"""Application tests for the preference resolver."""

import pytest
from notifications.notification.event import NotificationCategory
from notifications.preference.resolver import PreferenceResolver
from shared.users import InMemoryUserStore, ShipmentUpdateMode, User


@pytest.fixture()
def resolver(users):
    return PreferenceResolver(users)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "category,field_name",
    [
        ("marketing", "email_marketing_campaigns"),
        ("account", "account_notifications"),
        ("admin", "admin_notifications"),
        ("tracking-delivery", "tracking_delivery_notifications"),
        ("refund-return", "refund_return_notifications"),
        ("support-ticket", "support_ticket_notifications"),
        ("customs", "customs_notifications"),
    ],
)
async def test_boolean_categories_follow_their_field(category, field_name):
    store = InMemoryUserStore(
        [
            User(id="on", email="on@example.com", **{field_name: True}),
            User(id="off", email="off@example.com", **{field_name: False}),
        ]
    )
    resolver = PreferenceResolver(store)

    assert await resolver.should_send("on", category) is True
    assert await resolver.should_send("off", category) is False


@pytest.mark.asyncio
async def test_marketing_is_opt_in(resolver):
    assert await resolver.should_send("seller-1", NotificationCategory.MARKETING) is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "mode,immediate,digest",
    [
        (ShipmentUpdateMode.IMMEDIATE, True, False),
        (ShipmentUpdateMode.DAILY_DIGEST, False, True),
        (ShipmentUpdateMode.OFF, False, False),
    ],
)
async def test_shipment_update_mode(mode, immediate, digest):
    store = InMemoryUserStore([User(id="u1", email="u1@example.com", shipment_status_updates=mode.value)])
    resolver = PreferenceResolver(store)

    assert await resolver.should_send("u1", "shipment-immediate") is immediate
    assert await resolver.should_send("u1", "shipment-digest") is digest


@pytest.mark.asyncio
async def test_unknown_user_is_not_notified(resolver):
    assert await resolver.should_send("ghost", "refund-return") is False
    assert await resolver.should_send("ghost", "refund-return", critical=True) is False


@pytest.mark.asyncio
async def test_unknown_category_is_not_notified(resolver):
    assert await resolver.should_send("seller-1", "carrier-pigeon") is False


@pytest.mark.asyncio
async def test_opted_out_user(resolver):
    assert await resolver.should_send("seller-quiet", "refund-return") is False
    assert await resolver.should_send("seller-1", "refund-return") is True


@pytest.mark.asyncio
async def test_store_unavailable_critical_is_sent(users, resolver):
    users.configure(unavailable=True)
    assert await resolver.should_send("seller-1", "tracking-delivery", critical=True) is True


@pytest.mark.asyncio
async def test_store_unavailable_non_critical_is_suppressed(users, resolver):
    users.configure(unavailable=True)
    assert await resolver.should_send("seller-1", "tracking-delivery") is False


@pytest.mark.asyncio
async def test_store_unavailable_ignores_opt_out(users, resolver):
    # The opt-out cannot be read, so criticality decides alone
    users.configure(unavailable=True)
    assert await resolver.should_send("seller-quiet", "refund-return", critical=True) is True
