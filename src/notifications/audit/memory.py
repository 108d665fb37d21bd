"""In-memory audit log: keeps entries in a list for development and tests."""

from notifications.audit.port import AuditEntry, AuditLog


class InMemoryAuditLog(AuditLog):
    def __init__(self):
        self.entries: list[AuditEntry] = []
        self.unavailable = False

    def configure(self, unavailable: bool = False):
        """Make ``record`` raise, to exercise audit failures."""
        self.unavailable = unavailable

    async def record(
        self,
        notification_type: str,
        recipient: str,
        status: str,
        error: str | None = None,
        reason: str | None = None,
        subject: str | None = None,
    ) -> None:
        if self.unavailable:
            raise ConnectionError("Audit log unavailable")

        self.entries.append(
            AuditEntry(
                notification_type=notification_type,
                recipient=recipient,
                status=status,
                error=error,
                reason=reason,
                subject=subject,
            )
        )

    def entries_for(self, recipient: str) -> list[AuditEntry]:
        return [e for e in self.entries if e.recipient == recipient]

    def reset(self):
        self.entries.clear()
        self.unavailable = False
