"""Audit log port: append-only record of every dispatch attempt and skip."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class AuditEntry:
    notification_type: str
    recipient: str
    status: str
    error: str | None = None
    reason: str | None = None
    subject: str | None = None
    recorded_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class AuditLog(ABC):
    """Abstract interface for audit log adapters."""

    @abstractmethod
    async def record(
        self,
        notification_type: str,
        recipient: str,
        status: str,
        error: str | None = None,
        reason: str | None = None,
        subject: str | None = None,
    ) -> None:
        """Append one entry. Implementations must not reorder or drop entries."""
        ...
