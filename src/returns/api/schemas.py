"""Pydantic API schemas for the Returns domain.

These are the external API contracts. The routes translate them into
lifecycle calls and translate ReturnRecords back.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class CreateReturnRequest(BaseModel):
    order_number: str
    product_name: str | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    return_reason: str | None = None
    seller_id: str | None = None


class UpdateStatusRequest(BaseModel):
    status: str
    admin_notes: str | None = None


class UpdateNotesRequest(BaseModel):
    notes: str


class AssignReturnRequest(BaseModel):
    assignee_id: str


class RecordPhotosRequest(BaseModel):
    count: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class ReturnResponse(BaseModel):
    return_id: str
    seller_id: str
    order_number: str
    product_name: str | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    return_reason: str | None = None
    status: str
    is_controlled: bool = False
    assigned_to_id: str | None = None
    assigned_by_id: str | None = None
    assigned_at: datetime | None = None
    inspection_date: datetime | None = None
    refund_initiated_date: datetime | None = None
    completed_date: datetime | None = None
    admin_notes: str | None = None
    seller_notes: str | None = None
    photo_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NotificationSummary(BaseModel):
    notification_type: str
    outcome: str
    sent: int
    failed: int
    skipped: int


class ReturnChangeResponse(BaseModel):
    record: ReturnResponse
    changed: bool
    notifications: list[NotificationSummary] = []
