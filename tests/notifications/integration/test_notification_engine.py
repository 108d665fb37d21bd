"""Integration tests for the notification engine wiring."""

import pytest
from notifications.audit import get_audit_log
from notifications.audit.memory import InMemoryAuditLog
from notifications.channel import get_mail_transport
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.engine import build_engine, get_engine, reset_engine, set_engine
from notifications.notification.outcome import AggregateOutcome
from shared.shipments import ShipmentSnapshot
from shared.users import User, get_user_store


def _shipment(shipment_id="SHP-1"):
    return ShipmentSnapshot(
        shipment_id=shipment_id,
        owner_id="seller-1",
        owner_email="seller1@example.com",
        owner_name="Sam Seller",
        receiver_name="Riley Receiver",
        receiver_city="Lyon",
        receiver_country="FR",
        carrier_tracking_number=f"TRK-{shipment_id}",
    )


class TestEngineRegistry:
    def test_get_engine_is_singleton(self):
        assert get_engine() is get_engine()

    def test_reset_builds_a_new_engine(self):
        first = get_engine()
        reset_engine()
        assert get_engine() is not first

    def test_set_engine(self, settings, users, transport, audit):
        engine = build_engine(settings=settings, transport=transport, users=users, audit=audit)
        set_engine(engine)
        assert get_engine() is engine

    def test_defaults_come_from_registries(self):
        engine = get_engine()
        assert engine.coordinator.transport is get_mail_transport()
        assert engine.coordinator.audit is get_audit_log()
        assert engine.recipients.users is get_user_store()

    def test_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("SHIPDESK_SENDER_EMAIL", "env@shipdesk.test")
        monkeypatch.setenv("SHIPDESK_DISABLED_CATEGORIES", "marketing")
        engine = get_engine()
        assert engine.settings.sender_email == "env@shipdesk.test"
        assert engine.coordinator.gate.is_category_enabled("marketing") is False


class TestEngineFlows:
    @pytest.fixture()
    def engine(self, settings, users, transport, audit):
        return build_engine(settings=settings, transport=transport, users=users, audit=audit)

    def test_services_share_collaborators(self, engine):
        assert engine.shipments.coordinator is engine.coordinator
        assert engine.digests.coordinator is engine.coordinator
        assert engine.returns.coordinator is engine.coordinator
        assert engine.shipments.aggregator is engine.digests.aggregator

    @pytest.mark.asyncio
    async def test_tracking_updates_reach_digest(self, engine, transport, audit):
        engine.shipments.tracking_updated(_shipment("SHP-1"), "in_transit")
        engine.shipments.tracking_updated(_shipment("SHP-2"), "delivered")

        reports = await engine.digests.send()

        assert [r.outcome for r in reports] == [AggregateOutcome.ALL_SUCCESS, AggregateOutcome.ALL_SUCCESS]
        assert len(transport.sent_to("seller1@example.com")) == 1
        assert len(transport.sent_to("tracking@shipdesk.test")) == 1
        assert {e.notification_type for e in audit.entries} == {"TrackingDigest", "AdminTrackingDigest"}

    @pytest.mark.asyncio
    async def test_registry_backed_engine_sends(self):
        get_user_store().add(User(id="seller-1", email="seller1@example.com"))
        engine = get_engine()

        report = await engine.shipments.shipment_approved(_shipment())

        assert report.outcome == AggregateOutcome.ALL_SUCCESS
        transport = get_mail_transport()
        assert isinstance(transport, FakeEmailAdapter)
        assert transport.sent_to("seller1@example.com")
        assert isinstance(get_audit_log(), InMemoryAuditLog)
        assert len(get_audit_log().entries) == 1
