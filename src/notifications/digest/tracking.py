"""Tracking digest aggregation: buffers tracking updates and groups them by owner.

Updates are captured with everything a report row needs (receiver, destination
and the owner's name and email as they were at capture time), so flushing
never looks anything up and later changes to a user never rewrite history.

Windows are flushed by an outside trigger. A flush empties the window before
anything is sent: a digest that then fails to send is dropped, not retried.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from shared.errors import ValidationError
from shared.shipments import ShipmentSnapshot

logger = structlog.get_logger(__name__)

DEFAULT_WINDOW = "default"


def _text(value) -> str:
    # A missing id stays empty so enqueue rejects it
    return "" if value is None else str(value)


@dataclass(frozen=True)
class TrackingUpdate:
    shipment_id: str
    owner_id: str
    status: str
    carrier_tracking_number: str | None = None
    status_description: str = ""
    issue_type: str | None = None

    # Captured from the shipment and its owner at enqueue time
    receiver_name: str = ""
    destination: str = ""
    owner_name: str = ""
    owner_email: str | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def capture(
        cls,
        shipment: ShipmentSnapshot,
        status,
        status_description="",
        issue_type=None,
        created_at=None,
    ) -> "TrackingUpdate":
        return cls(
            shipment_id=_text(shipment.shipment_id),
            owner_id=_text(shipment.owner_id),
            status=status,
            carrier_tracking_number=shipment.carrier_tracking_number,
            status_description=status_description or "",
            issue_type=issue_type,
            receiver_name=shipment.receiver_name,
            destination=shipment.destination,
            owner_name=shipment.owner_name,
            owner_email=shipment.owner_email,
            created_at=created_at or datetime.now(UTC),
        )

    def row(self) -> dict:
        return {
            "shipment_id": self.shipment_id,
            "carrier_tracking_number": self.carrier_tracking_number,
            "receiver_name": self.receiver_name,
            "destination": self.destination,
            "status": self.status,
            "status_description": self.status_description,
            "issue_type": self.issue_type,
            "created_at": self.created_at,
        }

    def admin_row(self) -> dict:
        row = self.row()
        row.update(owner_id=self.owner_id, owner_name=self.owner_name, owner_email=self.owner_email)
        return row


@dataclass(frozen=True)
class DigestReport:
    """One consolidated report. ``owner_id`` is None for the admin report."""

    rows: tuple
    owner_id: str | None = None
    recipient_email: str | None = None
    recipient_name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.owner_id is None

    def __len__(self):
        return len(self.rows)


@dataclass
class DigestFlush:
    window_id: str
    user_reports: dict[str, DigestReport] = field(default_factory=dict)
    admin_report: DigestReport | None = None

    @property
    def is_empty(self) -> bool:
        return not self.user_reports and self.admin_report is None

    @property
    def update_count(self) -> int:
        return sum(len(report) for report in self.user_reports.values())


def _user_report(owner_id, updates) -> DigestReport:
    # The most recently captured address wins when an owner's email changed mid-window
    email = next((u.owner_email for u in reversed(updates) if u.owner_email), None)
    name = next((u.owner_name for u in reversed(updates) if u.owner_name), "")
    return DigestReport(
        rows=tuple(u.row() for u in updates),
        owner_id=owner_id,
        recipient_email=email,
        recipient_name=name,
    )


class DigestAggregator:
    def __init__(self):
        # window_id -> owner_id -> updates, both in first-seen order
        self._windows: dict[str, dict[str, list[TrackingUpdate]]] = {}

    def enqueue(self, update: TrackingUpdate, window_id: str = DEFAULT_WINDOW) -> None:
        errors = {}
        if not update.shipment_id:
            errors["shipment_id"] = ["Shipment is required"]
        if not update.owner_id:
            errors["owner_id"] = ["Owner is required"]
        if not update.status:
            errors["status"] = ["Status is required"]
        if errors:
            raise ValidationError(errors)

        window = self._windows.setdefault(window_id, {})
        window.setdefault(update.owner_id, []).append(update)

    def pending(self, window_id: str = DEFAULT_WINDOW) -> int:
        return sum(len(updates) for updates in self._windows.get(window_id, {}).values())

    def flush(self, window_id: str = DEFAULT_WINDOW, include_admin: bool = True) -> DigestFlush:
        """Empty the window and build its reports."""
        window = self._windows.pop(window_id, {})
        flushed = DigestFlush(window_id=window_id)
        if not window:
            return flushed

        flushed.user_reports = {owner_id: _user_report(owner_id, updates) for owner_id, updates in window.items()}
        if include_admin:
            flushed.admin_report = DigestReport(
                rows=tuple(u.admin_row() for updates in window.values() for u in updates),
            )

        logger.info(
            "Digest window flushed",
            window_id=window_id,
            users=len(flushed.user_reports),
            updates=flushed.update_count,
        )
        return flushed

    def flush_user(self, user_id, window_id: str = DEFAULT_WINDOW) -> DigestReport | None:
        """Take one owner's updates out of the window, leaving the rest buffered."""
        window = self._windows.get(window_id)
        if not window or str(user_id) not in window:
            return None

        updates = window.pop(str(user_id))
        if not window:
            del self._windows[window_id]
        return _user_report(str(user_id), updates)
