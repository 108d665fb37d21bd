"""Application tests for shipment notifications."""

import pytest
from notifications.digest.tracking import DigestAggregator
from notifications.notification.outcome import AggregateOutcome, DeliveryStatus, SkipReason
from notifications.notification.shipment_events import ShipmentNotifier
from shared.shipments import ShipmentSnapshot


@pytest.fixture()
def aggregator():
    return DigestAggregator()


@pytest.fixture()
def notifier(coordinator, recipients, aggregator):
    return ShipmentNotifier(coordinator, recipients, aggregator)


def _shipment(owner_id="seller-1", email="seller1@example.com", tracking="1Z999"):
    return ShipmentSnapshot(
        shipment_id="SHP-1",
        owner_id=owner_id,
        owner_email=email,
        owner_name="Sam Seller",
        receiver_name="Riley Receiver",
        receiver_city="Lyon",
        receiver_country="FR",
        carrier_tracking_number=tracking,
    )


class TestShipmentApproved:
    @pytest.mark.asyncio
    async def test_sent_to_owner(self, notifier, transport):
        report = await notifier.shipment_approved(_shipment())

        assert report.outcome == AggregateOutcome.ALL_SUCCESS
        email = transport.sent_to("seller1@example.com")[0]
        assert email["subject"] == "Shipment SHP-1 Approved"
        assert "Riley Receiver (Lyon, FR)" in email["body"]

    @pytest.mark.asyncio
    async def test_digest_users_do_not_get_immediate(self, notifier, users, transport):
        users.users["seller-1"].shipment_status_updates = "daily_digest"
        report = await notifier.shipment_approved(_shipment())
        assert report.outcome == AggregateOutcome.SKIPPED
        assert transport.attempts == []

    @pytest.mark.asyncio
    async def test_repeat_is_deduplicated(self, notifier, transport):
        await notifier.shipment_approved(_shipment())
        report = await notifier.shipment_approved(_shipment())
        assert report.outcomes[0].reason == SkipReason.DUPLICATE
        assert len(transport.sent_emails) == 1

    @pytest.mark.asyncio
    async def test_owner_address_looked_up_when_not_captured(self, notifier, transport):
        await notifier.shipment_approved(_shipment(email=None))
        assert transport.attempts == ["seller1@example.com"]


class TestTrackingNumber:
    @pytest.mark.asyncio
    async def test_sent_once_per_number(self, notifier, transport):
        await notifier.tracking_number_added(_shipment(tracking="1Z1"))
        await notifier.tracking_number_added(_shipment(tracking="1Z1"))
        await notifier.tracking_number_added(_shipment(tracking="1Z2"))

        subjects = [e["body"] for e in transport.sent_emails]
        assert len(subjects) == 2
        assert "1Z1" in subjects[0]
        assert "1Z2" in subjects[1]

    @pytest.mark.asyncio
    async def test_respects_tracking_preference(self, notifier, transport):
        report = await notifier.tracking_number_added(_shipment(owner_id="seller-quiet", email="quiet@example.com"))
        assert report.outcomes[0].reason == SkipReason.PREFERENCE_DISABLED


class TestTrackingUpdated:
    def test_buffers_without_sending(self, notifier, aggregator, transport):
        update = notifier.tracking_updated(_shipment(), "in_transit", status_description="Departed")

        assert update.status == "in_transit"
        assert update.destination == "Lyon, FR"
        assert aggregator.pending() == 1
        assert transport.attempts == []

    def test_window_selection(self, notifier, aggregator):
        notifier.tracking_updated(_shipment(), "delivered", window_id="evening")
        assert aggregator.pending() == 0
        assert aggregator.pending("evening") == 1


class TestDeliveryIssue:
    @pytest.mark.asyncio
    async def test_operations_and_owner_notified(self, notifier, transport):
        report = await notifier.delivery_issue_detected(_shipment(), "address_problem", "Recipient moved")

        assert report.outcome == AggregateOutcome.ALL_SUCCESS
        assert sorted(transport.attempts) == ["ops1@shipdesk.test", "ops2@shipdesk.test", "seller1@example.com"]
        assert "Address Problem" in transport.sent_to("ops1@shipdesk.test")[0]["body"]

    @pytest.mark.asyncio
    async def test_operations_notified_when_owner_opted_out(self, notifier, transport):
        report = await notifier.delivery_issue_detected(
            _shipment(owner_id="seller-quiet", email="quiet@example.com"), "damaged"
        )

        assert report.for_address("quiet@example.com").status == DeliveryStatus.SKIPPED
        assert report.for_address("ops1@shipdesk.test").status == DeliveryStatus.SENT
        assert report.outcome == AggregateOutcome.ALL_SUCCESS

    @pytest.mark.asyncio
    async def test_owner_failure_is_partial(self, notifier, transport):
        transport.configure(fail_for=["seller1@example.com"])
        report = await notifier.delivery_issue_detected(_shipment(), "delayed")
        assert report.outcome == AggregateOutcome.PARTIAL_FAILURE
