"""Domain events for the ReturnRecord aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from returns.domain import returns


@returns.event(part_of="ReturnRecord")
class ReturnCreated:
    """A return request was registered on intake."""

    __version__ = 1

    return_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    order_number: String(required=True)
    status: String(required=True)
    created_at: DateTime(required=True)


@returns.event(part_of="ReturnRecord")
class ReturnStatusChanged:
    """The return moved to a new lifecycle status."""

    __version__ = 1

    return_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    admin_notes: Text()
    changed_at: DateTime(required=True)


@returns.event(part_of="ReturnRecord")
class AdminNotesUpdated:
    __version__ = 1

    return_id: Identifier(required=True)
    updated_at: DateTime(required=True)


@returns.event(part_of="ReturnRecord")
class SellerNotesUpdated:
    __version__ = 1

    return_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    updated_at: DateTime(required=True)


@returns.event(part_of="ReturnRecord")
class ReturnControlToggled:
    """The controlled flag was flipped."""

    __version__ = 1

    return_id: Identifier(required=True)
    is_controlled: Boolean(default=False)
    toggled_at: DateTime(required=True)


@returns.event(part_of="ReturnRecord")
class ReturnAssigned:
    """The return was assigned to a staff member."""

    __version__ = 1

    return_id: Identifier(required=True)
    assignee_id: Identifier(required=True)
    assigner_id: Identifier(required=True)
    assigned_at: DateTime(required=True)


@returns.event(part_of="ReturnRecord")
class ReturnUnassigned:
    __version__ = 1

    return_id: Identifier(required=True)
    previous_assignee_id: Identifier()
    unassigned_at: DateTime(required=True)


@returns.event(part_of="ReturnRecord")
class ReturnPhotosAdded:
    """Photos were attached to the return."""

    __version__ = 1

    return_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    photo_count: Integer(required=True)
    uploaded_by_admin: Boolean(default=False)
    added_at: DateTime(required=True)
