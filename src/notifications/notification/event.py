"""Notification categories and the transient NotificationEvent.

A NotificationEvent describes one logical notification: what it is about,
how critical it is, and who it targets (a single user, an administrator
distribution list, or both). It is never persisted; the audit log records
what happened to each recipient.
"""

from dataclasses import dataclass, field
from enum import Enum

from protean.exceptions import ValidationError


class NotificationCategory(Enum):
    MARKETING = "marketing"
    SHIPMENT_IMMEDIATE = "shipment-immediate"
    SHIPMENT_DIGEST = "shipment-digest"
    ACCOUNT = "account"
    ADMIN = "admin"
    TRACKING_DELIVERY = "tracking-delivery"
    REFUND_RETURN = "refund-return"
    SUPPORT_TICKET = "support-ticket"
    CUSTOMS = "customs"


class NotificationType(Enum):
    RETURN_CREATED = "ReturnCreated"
    RETURN_STATUS_UPDATE = "ReturnStatusUpdate"
    RETURN_PHOTOS_ADDED = "ReturnPhotosAdded"
    RETURN_ASSIGNMENT = "ReturnAssignment"
    SHIPMENT_APPROVED = "ShipmentApproved"
    TRACKING_NUMBER = "TrackingNumber"
    DELIVERY_ISSUE = "DeliveryIssue"
    TRACKING_DIGEST = "TrackingDigest"
    ADMIN_TRACKING_DIGEST = "AdminTrackingDigest"


class AdminList(Enum):
    """Administrator distribution lists configured in NotificationSettings."""

    OPERATIONS = "operations"
    RETURNS = "returns"
    TRACKING_REPORT = "tracking_report"


def parse_category(value) -> NotificationCategory:
    if isinstance(value, NotificationCategory):
        return value
    try:
        return NotificationCategory(value)
    except ValueError:
        raise ValidationError({"category": [f"Unknown notification category: {value}"]}) from None


@dataclass
class NotificationEvent:
    category: NotificationCategory
    notification_type: str
    context: dict = field(default_factory=dict)
    user_id: str | None = None
    admin_list: str | None = None
    critical: bool = False
    dedupe_key: str | None = None
    source_event: str | None = None

    def __post_init__(self):
        self.category = parse_category(self.category)
        if isinstance(self.notification_type, NotificationType):
            self.notification_type = self.notification_type.value
        if isinstance(self.admin_list, AdminList):
            self.admin_list = self.admin_list.value
        if self.user_id is None and self.admin_list is None:
            raise ValidationError({"recipients": ["A notification needs a user or an admin list to target"]})


@dataclass(frozen=True)
class Recipient:
    """One concrete delivery target.

    ``always_notify`` recipients (fixed admin lists) bypass both the global
    toggle and per-user preferences.
    """

    address: str
    user_id: str | None = None
    name: str = ""
    always_notify: bool = False
