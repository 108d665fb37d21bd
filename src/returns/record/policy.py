"""Capability checks for return mutations.

One table decides who may do what to a return, so the lifecycle service never
carries its own role checks.
"""

from dataclasses import dataclass
from enum import Enum

from shared.errors import AuthorizationError
from shared.users import UserRole


class ReturnAction(Enum):
    VIEW = "view"
    CHANGE_STATUS = "change_status"
    EDIT_ADMIN_NOTES = "edit_admin_notes"
    EDIT_SELLER_NOTES = "edit_seller_notes"
    TOGGLE_CONTROLLED = "toggle_controlled"
    ASSIGN = "assign"
    UNASSIGN = "unassign"
    ADD_PHOTOS = "add_photos"


@dataclass(frozen=True)
class Actor:
    """Whoever is performing the operation."""

    user_id: str
    role: str = UserRole.SELLER.value

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def _owns(actor, record) -> bool:
    return record is not None and str(record.seller_id) == str(actor.user_id)


_RULES = {
    ReturnAction.VIEW: lambda actor, record: actor.is_admin or _owns(actor, record),
    ReturnAction.CHANGE_STATUS: lambda actor, record: actor.is_admin,
    ReturnAction.EDIT_ADMIN_NOTES: lambda actor, record: actor.is_admin,
    # Seller notes belong to the seller alone, admins included
    ReturnAction.EDIT_SELLER_NOTES: lambda actor, record: _owns(actor, record),
    ReturnAction.TOGGLE_CONTROLLED: lambda actor, record: actor.is_admin or _owns(actor, record),
    ReturnAction.ASSIGN: lambda actor, record: actor.is_admin,
    ReturnAction.UNASSIGN: lambda actor, record: actor.is_admin,
    ReturnAction.ADD_PHOTOS: lambda actor, record: actor.is_admin or _owns(actor, record),
}


def is_allowed(actor: Actor, record, action: ReturnAction) -> bool:
    """Return True when ``actor`` may perform ``action`` on ``record``."""
    rule = _RULES.get(action)
    if rule is None:
        return False
    return bool(rule(actor, record))


def ensure_allowed(actor: Actor, record, action: ReturnAction) -> None:
    """Raise AuthorizationError unless the action is allowed."""
    if not is_allowed(actor, record, action):
        raise AuthorizationError(action.value, actor_id=actor.user_id)
