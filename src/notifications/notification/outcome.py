"""Dispatch outcomes: per recipient and aggregated over one dispatch call."""

from dataclasses import dataclass, field
from enum import Enum

from notifications.notification.event import Recipient


class DeliveryStatus(Enum):
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


class SkipReason(Enum):
    PREFERENCE_DISABLED = "preference-disabled"
    GLOBAL_TOGGLE_DISABLED = "global-toggle-disabled"
    DUPLICATE = "duplicate"


class AggregateOutcome(Enum):
    ALL_SUCCESS = "all-success"
    PARTIAL_FAILURE = "partial-failure"
    TOTAL_FAILURE = "total-failure"
    SKIPPED = "skipped"

    @classmethod
    def from_outcomes(cls, outcomes) -> "AggregateOutcome":
        """Fold per-recipient outcomes. Skips never count as attempts."""
        attempted = [o for o in outcomes if o.attempted]
        if not attempted:
            return cls.SKIPPED

        sent = sum(1 for o in attempted if o.status == DeliveryStatus.SENT)
        if sent == len(attempted):
            return cls.ALL_SUCCESS
        if sent == 0:
            return cls.TOTAL_FAILURE
        return cls.PARTIAL_FAILURE


@dataclass(frozen=True)
class RecipientOutcome:
    recipient: Recipient
    status: DeliveryStatus
    error: str | None = None
    reason: SkipReason | None = None
    message_id: str | None = None

    @classmethod
    def sent(cls, recipient, message_id=None):
        return cls(recipient=recipient, status=DeliveryStatus.SENT, message_id=message_id)

    @classmethod
    def failed(cls, recipient, error):
        return cls(recipient=recipient, status=DeliveryStatus.FAILED, error=error)

    @classmethod
    def skipped(cls, recipient, reason: SkipReason):
        return cls(recipient=recipient, status=DeliveryStatus.SKIPPED, reason=reason)

    @property
    def attempted(self) -> bool:
        return self.status != DeliveryStatus.SKIPPED


@dataclass
class DispatchReport:
    """Everything one ``dispatch`` call did, in recipient order."""

    notification_type: str
    category: str
    outcomes: list[RecipientOutcome] = field(default_factory=list)

    @property
    def outcome(self) -> AggregateOutcome:
        return AggregateOutcome.from_outcomes(self.outcomes)

    @property
    def succeeded(self) -> bool:
        # Partial failure is good enough; callers should not retry it
        return self.outcome in (AggregateOutcome.ALL_SUCCESS, AggregateOutcome.PARTIAL_FAILURE)

    def _count(self, status):
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def sent_count(self) -> int:
        return self._count(DeliveryStatus.SENT)

    @property
    def failed_count(self) -> int:
        return self._count(DeliveryStatus.FAILED)

    @property
    def skipped_count(self) -> int:
        return self._count(DeliveryStatus.SKIPPED)

    def for_address(self, address) -> RecipientOutcome | None:
        for outcome in self.outcomes:
            if outcome.recipient.address == address:
                return outcome
        return None
