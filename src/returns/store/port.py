"""Return store port: abstract persistence for ReturnRecord aggregates.

The lifecycle service programs against this port; adapters are swapped via
configuration.
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


class ReturnStore(ABC):
    """Abstract interface for return persistence adapters."""

    @abstractmethod
    async def get(self, return_id: str):
        """Return the ReturnRecord with this id, or None."""
        ...

    @abstractmethod
    async def add(self, record) -> None:
        """Insert or update a ReturnRecord."""
        ...

    @abstractmethod
    async def list_returns(self, seller_id: str | None = None) -> list:
        """All returns, optionally limited to one seller."""
        ...

    @abstractmethod
    async def find_by_status(self, status: str, seller_id: str | None = None) -> list:
        ...

    @abstractmethod
    async def find_by_order_number(self, order_number: str, seller_id: str | None = None) -> list:
        ...

    @abstractmethod
    async def find_assigned_to(self, user_id: str) -> list:
        ...

    async def find_by_date_range(
        self,
        start: datetime,
        end: datetime,
        seller_id: str | None = None,
    ) -> list:
        """Returns created within [start, end]. Naive bounds are taken as UTC."""
        start, end = _aware(start), _aware(end)
        records = await self.list_returns(seller_id=seller_id)
        return [r for r in records if r.created_at is not None and start <= _aware(r.created_at) <= end]
