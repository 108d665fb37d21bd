"""Returns bounded context: return request lifecycle.

Tracks a return from intake through inspection and refund to completion,
along with notes, the controlled flag and staff assignment. Each mutation
raises domain events; the lifecycle service turns them into pending
notifications for the notifications context to dispatch.
"""

import structlog
from protean.domain import Domain

returns = Domain(name="returns")

logger = structlog.get_logger(__name__)
