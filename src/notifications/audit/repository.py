"""Audit log backed by the notifications domain's protean repository.

Each call runs inside its own ``notifications`` domain context, so the log
can be written from request handlers that are running under another domain.
"""

from datetime import UTC, datetime
from uuid import uuid4

from protean.utils.globals import current_domain

from notifications.audit.port import AuditEntry, AuditLog
from notifications.audit.projection import DispatchAuditRecord
from notifications.domain import notifications


def _to_entry(row: DispatchAuditRecord) -> AuditEntry:
    return AuditEntry(
        notification_type=row.notification_type,
        recipient=row.recipient,
        status=row.status,
        error=row.error,
        reason=row.reason,
        subject=row.subject,
        recorded_at=row.recorded_at,
    )


class RepositoryAuditLog(AuditLog):
    async def record(
        self,
        notification_type: str,
        recipient: str,
        status: str,
        error: str | None = None,
        reason: str | None = None,
        subject: str | None = None,
    ) -> None:
        with notifications.domain_context():
            current_domain.repository_for(DispatchAuditRecord).add(
                DispatchAuditRecord(
                    entry_id=str(uuid4()),
                    notification_type=notification_type,
                    recipient=recipient,
                    status=status,
                    error=error,
                    reason=reason,
                    subject=subject,
                    recorded_at=datetime.now(UTC),
                )
            )

    def _query(self, **criteria) -> list[AuditEntry]:
        with notifications.domain_context():
            query = current_domain.repository_for(DispatchAuditRecord)._dao.query
            if criteria:
                query = query.filter(**criteria)
            rows = query.limit(None).all().items
        return [_to_entry(row) for row in sorted(rows, key=lambda r: r.recorded_at)]

    @property
    def entries(self) -> list[AuditEntry]:
        return self._query()

    def entries_for(self, recipient: str) -> list[AuditEntry]:
        return self._query(recipient=recipient)
