"""DispatchAuditRecord: one persisted row per dispatch attempt or skip."""

from protean.fields import DateTime, Identifier, String

from notifications.domain import notifications


@notifications.projection
class DispatchAuditRecord:
    entry_id: Identifier(identifier=True, required=True)
    notification_type: String(required=True, max_length=100)
    recipient: String(required=True, max_length=255)
    status: String(required=True, max_length=20)
    error: String(max_length=500)
    reason: String(max_length=50)
    subject: String(max_length=500)
    recorded_at: DateTime(required=True)
