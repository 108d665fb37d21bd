"""ReturnRecord aggregate (CQRS): a single customer return handled by the warehouse.

Status moves forward through the milestones below. Forward jumps are
allowed, moving back to an earlier stage is not. Reaching INSPECTED,
REFUND_INITIATED or COMPLETED stamps the matching milestone date once; later
transitions never overwrite it.

State Machine (5 states):
    PENDING → RECEIVED → INSPECTED → REFUND_INITIATED → COMPLETED

The controlled flag and the staff assignment are orthogonal to status and may
change in any state.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from returns.domain import returns
from returns.record.events import (
    AdminNotesUpdated,
    ReturnAssigned,
    ReturnControlToggled,
    ReturnCreated,
    ReturnPhotosAdded,
    ReturnStatusChanged,
    ReturnUnassigned,
    SellerNotesUpdated,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ReturnStatus(Enum):
    PENDING = "pending"
    RECEIVED = "received"
    INSPECTED = "inspected"
    REFUND_INITIATED = "refund_initiated"
    COMPLETED = "completed"


# Milestone order; a transition may only move right in this list
_STATUS_ORDER = [
    ReturnStatus.PENDING,
    ReturnStatus.RECEIVED,
    ReturnStatus.INSPECTED,
    ReturnStatus.REFUND_INITIATED,
    ReturnStatus.COMPLETED,
]

_MILESTONE_FIELDS = {
    ReturnStatus.INSPECTED: "inspection_date",
    ReturnStatus.REFUND_INITIATED: "refund_initiated_date",
    ReturnStatus.COMPLETED: "completed_date",
}


def parse_status(value) -> ReturnStatus:
    """Coerce a status string (or enum) into ReturnStatus."""
    if isinstance(value, ReturnStatus):
        return value
    try:
        return ReturnStatus(value)
    except ValueError:
        raise ValidationError({"status": [f"Unknown return status: {value}"]}) from None


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@returns.aggregate
class ReturnRecord:
    """A return request registered for one of a seller's orders."""

    # Ownership
    seller_id: Identifier(required=True)

    # Return details
    order_number: String(required=True, max_length=100)
    product_name: String(max_length=255)
    customer_name: String(max_length=255)
    customer_email: String(max_length=255)
    return_reason: Text()

    # Lifecycle
    status: String(choices=ReturnStatus, default=ReturnStatus.PENDING.value)
    is_controlled: Boolean(default=False)

    # Assignment
    assigned_to_id: Identifier()
    assigned_by_id: Identifier()
    assigned_at: DateTime()

    # Milestones (write-once)
    inspection_date: DateTime()
    refund_initiated_date: DateTime()
    completed_date: DateTime()

    # Notes
    admin_notes: Text()
    seller_notes: Text()

    photo_count: Integer(default=0)

    # Timestamps
    created_at: DateTime()
    updated_at: DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        seller_id,
        order_number,
        product_name=None,
        customer_name=None,
        customer_email=None,
        return_reason=None,
        return_id=None,
    ):
        """Register a new return in PENDING status."""
        now = datetime.now(UTC)

        attributes = dict(
            seller_id=seller_id,
            order_number=order_number,
            product_name=product_name,
            customer_name=customer_name,
            customer_email=customer_email,
            return_reason=return_reason,
            status=ReturnStatus.PENDING.value,
            is_controlled=False,
            photo_count=0,
            created_at=now,
            updated_at=now,
        )
        if return_id is not None:
            attributes["id"] = return_id

        record = cls(**attributes)

        record.raise_(
            ReturnCreated(
                return_id=str(record.id),
                seller_id=str(seller_id),
                order_number=order_number,
                status=ReturnStatus.PENDING.value,
                created_at=now,
            )
        )

        return record

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def transition_status(self, new_status, admin_notes=None, at=None):
        """Move the return to ``new_status``.

        Returns True when the status changed. Re-applying the current status
        is a no-op: no event is raised and no milestone date is rewritten.
        """
        target = parse_status(new_status)
        current = ReturnStatus(self.status)

        if _STATUS_ORDER.index(target) < _STATUS_ORDER.index(current):
            raise ValidationError({"status": [f"Cannot move return from {current.value} back to {target.value}"]})

        now = at or datetime.now(UTC)

        if admin_notes is not None:
            self.admin_notes = admin_notes
            self.updated_at = now

        milestone = _MILESTONE_FIELDS.get(target)
        if milestone and getattr(self, milestone) is None:
            setattr(self, milestone, now)

        if target == current:
            return False

        self.status = target.value
        self.updated_at = now

        self.raise_(
            ReturnStatusChanged(
                return_id=str(self.id),
                seller_id=str(self.seller_id),
                previous_status=current.value,
                new_status=target.value,
                admin_notes=self.admin_notes,
                changed_at=now,
            )
        )
        return True

    # -------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------
    def update_admin_notes(self, notes):
        now = datetime.now(UTC)
        self.admin_notes = notes
        self.updated_at = now

        self.raise_(AdminNotesUpdated(return_id=str(self.id), updated_at=now))

    def update_seller_notes(self, notes):
        now = datetime.now(UTC)
        self.seller_notes = notes
        self.updated_at = now

        self.raise_(
            SellerNotesUpdated(
                return_id=str(self.id),
                seller_id=str(self.seller_id),
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Side flags
    # -------------------------------------------------------------------
    def toggle_controlled(self):
        """Flip the controlled flag and return its new value."""
        now = datetime.now(UTC)
        self.is_controlled = not self.is_controlled
        self.updated_at = now

        self.raise_(
            ReturnControlToggled(
                return_id=str(self.id),
                is_controlled=self.is_controlled,
                toggled_at=now,
            )
        )
        return self.is_controlled

    def assign(self, assignee_id, assigner_id):
        """Assign the return to a staff member."""
        if not assignee_id:
            raise ValidationError({"assigned_to_id": ["Assignee is required"]})

        now = datetime.now(UTC)
        self.assigned_to_id = assignee_id
        self.assigned_by_id = assigner_id
        self.assigned_at = now
        self.updated_at = now

        self.raise_(
            ReturnAssigned(
                return_id=str(self.id),
                assignee_id=str(assignee_id),
                assigner_id=str(assigner_id),
                assigned_at=now,
            )
        )

    def unassign(self):
        """Clear the assignment. Unassigning an unassigned return does nothing."""
        if not self.is_assigned:
            return False

        now = datetime.now(UTC)
        previous = self.assigned_to_id
        self.assigned_to_id = None
        self.assigned_by_id = None
        self.assigned_at = None
        self.updated_at = now

        self.raise_(
            ReturnUnassigned(
                return_id=str(self.id),
                previous_assignee_id=str(previous),
                unassigned_at=now,
            )
        )
        return True

    # -------------------------------------------------------------------
    # Photos
    # -------------------------------------------------------------------
    def record_photos(self, count, uploaded_by_admin=False):
        """Record that ``count`` photos were attached."""
        if count is None or count < 1:
            raise ValidationError({"photo_count": ["At least one photo is required"]})

        now = datetime.now(UTC)
        self.photo_count = (self.photo_count or 0) + count
        self.updated_at = now

        self.raise_(
            ReturnPhotosAdded(
                return_id=str(self.id),
                seller_id=str(self.seller_id),
                photo_count=count,
                uploaded_by_admin=uploaded_by_admin,
                added_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Query helpers
    # -------------------------------------------------------------------
    @property
    def is_assigned(self):
        return self.assigned_to_id is not None

    def milestone_date(self, status):
        """Return the stamped date for a milestone status, or None."""
        field = _MILESTONE_FIELDS.get(parse_status(status))
        return getattr(self, field) if field else None
