"""User/preference store contract: the identity collaborator both contexts read.

Users are owned by the surrounding application. This core only needs to look
a user up by id and read the notification opt-in fields on the record.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class UserRole(Enum):
    ADMIN = "admin"
    SELLER = "seller"


class ShipmentUpdateMode(Enum):
    IMMEDIATE = "immediate"
    DAILY_DIGEST = "daily_digest"
    OFF = "off"


@dataclass
class User:
    id: str
    email: str | None
    name: str = ""
    role: str = UserRole.SELLER.value

    # Notification opt-ins
    email_marketing_campaigns: bool = False
    shipment_status_updates: str = ShipmentUpdateMode.IMMEDIATE.value
    account_notifications: bool = True
    admin_notifications: bool = True
    tracking_delivery_notifications: bool = True
    refund_return_notifications: bool = True
    support_ticket_notifications: bool = True
    customs_notifications: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class UserStore(ABC):
    """Abstract lookup of user records."""

    @abstractmethod
    async def get_user(self, user_id: str) -> User | None:
        """Return the user, or None when no such user exists.

        Raises whatever the backing store raises when it is unavailable.
        """
        ...


class InMemoryUserStore(UserStore):
    """User store backed by a dict, for development and tests."""

    def __init__(self, users: list[User] | None = None):
        self.users: dict[str, User] = {}
        self.unavailable = False
        for user in users or []:
            self.add(user)

    def add(self, user: User) -> User:
        self.users[str(user.id)] = user
        return user

    def configure(self, unavailable: bool = False):
        """Simulate the backing store being down."""
        self.unavailable = unavailable

    async def get_user(self, user_id: str) -> User | None:
        if self.unavailable:
            raise ConnectionError("User store unavailable")
        if user_id is None:
            return None
        return self.users.get(str(user_id))

    def reset(self):
        self.users.clear()
        self.unavailable = False


_user_store: UserStore | None = None


def get_user_store() -> UserStore:
    """Return the configured user store (singleton).

    Only the in-memory store ships with this package; the host application
    plugs its own store in through ``set_user_store``.
    """
    global _user_store
    if _user_store is None:
        backend = os.environ.get("USER_STORE", "memory")
        if backend == "memory":
            _user_store = InMemoryUserStore()
        else:
            raise ValueError(f"Unknown user store: {backend}")
    return _user_store


def set_user_store(store: UserStore):
    global _user_store
    _user_store = store


def reset_user_store():
    """Reset the user store singleton (useful for testing)."""
    global _user_store
    _user_store = None
