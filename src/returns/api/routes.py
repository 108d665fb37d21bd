"""FastAPI routes for the Returns domain.

The caller's identity comes from the ``X-User-Id`` and ``X-User-Role``
headers set by the gateway. Every mutation commits first and then hands its
pending notifications to the notification engine; the response reports how
that went but never fails because of it.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Header, HTTPException

from notifications.engine import get_engine
from returns.api.schemas import (
    AssignReturnRequest,
    CreateReturnRequest,
    NotificationSummary,
    RecordPhotosRequest,
    ReturnChangeResponse,
    ReturnResponse,
    UpdateNotesRequest,
    UpdateStatusRequest,
)
from returns.desk import get_lifecycle
from returns.record.policy import Actor
from shared.users import UserRole


def current_actor(
    x_user_id: str = Header(...),
    x_user_role: str = Header(UserRole.SELLER.value),
) -> Actor:
    if x_user_role not in {role.value for role in UserRole}:
        raise HTTPException(status_code=400, detail=f"Unknown role: {x_user_role}")
    return Actor(user_id=x_user_id, role=x_user_role)


def _to_response(record) -> ReturnResponse:
    return ReturnResponse(
        return_id=str(record.id),
        seller_id=str(record.seller_id),
        order_number=record.order_number,
        product_name=record.product_name,
        customer_name=record.customer_name,
        customer_email=record.customer_email,
        return_reason=record.return_reason,
        status=record.status,
        is_controlled=bool(record.is_controlled),
        assigned_to_id=str(record.assigned_to_id) if record.assigned_to_id else None,
        assigned_by_id=str(record.assigned_by_id) if record.assigned_by_id else None,
        assigned_at=record.assigned_at,
        inspection_date=record.inspection_date,
        refund_initiated_date=record.refund_initiated_date,
        completed_date=record.completed_date,
        admin_notes=record.admin_notes,
        seller_notes=record.seller_notes,
        photo_count=record.photo_count or 0,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


async def _deliver(result) -> ReturnChangeResponse:
    reports = await get_engine().returns.deliver(result)
    return ReturnChangeResponse(
        record=_to_response(result.record),
        changed=result.changed,
        notifications=[
            NotificationSummary(
                notification_type=report.notification_type,
                outcome=report.outcome.value,
                sent=report.sent_count,
                failed=report.failed_count,
                skipped=report.skipped_count,
            )
            for report in reports
        ],
    )


# ---------------------------------------------------------------------------
# Returns Router
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/returns", tags=["returns"])


@router.post("", status_code=201, response_model=ReturnChangeResponse)
async def create_return(body: CreateReturnRequest, actor: Actor = Depends(current_actor)) -> ReturnChangeResponse:
    """Register a new return."""
    result = await get_lifecycle().create_return(
        actor,
        order_number=body.order_number,
        product_name=body.product_name,
        customer_name=body.customer_name,
        customer_email=body.customer_email,
        return_reason=body.return_reason,
        seller_id=body.seller_id,
    )
    return await _deliver(result)


@router.get("", response_model=list[ReturnResponse])
async def list_returns(
    status: str | None = None,
    order_number: str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    actor: Actor = Depends(current_actor),
) -> list[ReturnResponse]:
    """List the returns visible to the caller, optionally filtered."""
    records = await get_lifecycle().list_returns(
        actor, status=status, order_number=order_number, start=start, end=end
    )
    return [_to_response(r) for r in records]


@router.get("/assigned/{user_id}", response_model=list[ReturnResponse])
async def assigned_returns(user_id: str, actor: Actor = Depends(current_actor)) -> list[ReturnResponse]:
    records = await get_lifecycle().assigned_returns(actor, user_id)
    return [_to_response(r) for r in records]


@router.get("/{return_id}", response_model=ReturnResponse)
async def get_return(return_id: str, actor: Actor = Depends(current_actor)) -> ReturnResponse:
    record = await get_lifecycle().get_return(return_id, actor)
    return _to_response(record)


@router.put("/{return_id}/status", response_model=ReturnChangeResponse)
async def update_status(
    return_id: str, body: UpdateStatusRequest, actor: Actor = Depends(current_actor)
) -> ReturnChangeResponse:
    """Move a return forward through its lifecycle (admin only)."""
    result = await get_lifecycle().transition_status(return_id, body.status, actor, admin_notes=body.admin_notes)
    return await _deliver(result)


@router.put("/{return_id}/admin-notes", response_model=ReturnChangeResponse)
async def update_admin_notes(
    return_id: str, body: UpdateNotesRequest, actor: Actor = Depends(current_actor)
) -> ReturnChangeResponse:
    result = await get_lifecycle().update_admin_notes(return_id, actor, body.notes)
    return await _deliver(result)


@router.put("/{return_id}/seller-notes", response_model=ReturnChangeResponse)
async def update_seller_notes(
    return_id: str, body: UpdateNotesRequest, actor: Actor = Depends(current_actor)
) -> ReturnChangeResponse:
    result = await get_lifecycle().update_seller_notes(return_id, actor, body.notes)
    return await _deliver(result)


@router.put("/{return_id}/controlled", response_model=ReturnChangeResponse)
async def toggle_controlled(return_id: str, actor: Actor = Depends(current_actor)) -> ReturnChangeResponse:
    result = await get_lifecycle().toggle_controlled(return_id, actor)
    return await _deliver(result)


@router.put("/{return_id}/assignment", response_model=ReturnChangeResponse)
async def assign_return(
    return_id: str, body: AssignReturnRequest, actor: Actor = Depends(current_actor)
) -> ReturnChangeResponse:
    result = await get_lifecycle().assign(return_id, body.assignee_id, actor)
    return await _deliver(result)


@router.delete("/{return_id}/assignment", response_model=ReturnChangeResponse)
async def unassign_return(return_id: str, actor: Actor = Depends(current_actor)) -> ReturnChangeResponse:
    result = await get_lifecycle().unassign(return_id, actor)
    return await _deliver(result)


@router.post("/{return_id}/photos", response_model=ReturnChangeResponse)
async def record_photos(
    return_id: str, body: RecordPhotosRequest, actor: Actor = Depends(current_actor)
) -> ReturnChangeResponse:
    """Record photos uploaded for a return. Warehouse uploads notify the seller."""
    result = await get_lifecycle().record_photos(return_id, actor, body.count)
    return await _deliver(result)
