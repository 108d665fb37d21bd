"""Notifications bounded context: notification gating, fan-out and digests.

Decides whether and to whom return and shipment notifications go, sends them
through the mail transport and keeps the dispatch audit trail. Only the audit
trail is persisted through the domain; everything else is plain services.
"""

import structlog
from protean.domain import Domain

notifications = Domain(name="notifications")

logger = structlog.get_logger(__name__)
