"""Error taxonomy shared by the returns and notifications contexts.

Rule violations on aggregates use protean's ``ValidationError`` (re-exported
here so callers have one import site). Permission and lookup failures are
raised by the service layer. Dispatch problems are carried as data in
``DispatchReport`` and only use ``DispatchError`` to describe a single failed
attempt.
"""

from protean.exceptions import ValidationError

__all__ = [
    "AuthorizationError",
    "DispatchError",
    "NotFoundError",
    "PreferenceLookupError",
    "ValidationError",
]


class AuthorizationError(Exception):
    """The actor is not allowed to perform the requested mutation."""

    def __init__(self, action: str, actor_id: str | None = None, detail: str | None = None):
        self.action = action
        self.actor_id = actor_id
        self.detail = detail or f"Actor {actor_id} is not allowed to {action}"
        super().__init__(self.detail)


class NotFoundError(Exception):
    """A referenced record or user does not exist."""

    def __init__(self, entity: str, identifier):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} {identifier} not found")


class DispatchError(Exception):
    """A single recipient delivery attempt failed (transport error or timeout)."""

    def __init__(self, recipient: str, reason: str):
        self.recipient = recipient
        self.reason = reason
        super().__init__(f"Delivery to {recipient} failed: {reason}")


class PreferenceLookupError(Exception):
    """The user/preference store could not be queried."""

    def __init__(self, user_id, cause: Exception | None = None):
        self.user_id = user_id
        self.cause = cause
        super().__init__(f"Preference lookup failed for user {user_id}: {cause}")
