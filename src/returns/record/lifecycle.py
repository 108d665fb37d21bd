"""Return lifecycle service: loads, authorizes, mutates and saves returns.

Every mutation on a given return id runs under that id's lock, so two
concurrent requests against one return never interleave; different returns
proceed independently. Each operation returns the saved record together with
the notifications it produced. Dispatching those is the caller's job, and its
outcome never affects the saved state.
"""

import asyncio
from dataclasses import dataclass, field
from weakref import WeakValueDictionary

import structlog

from notifications.notification.event import NotificationEvent
from returns.record.notifications import notifications_for
from returns.record.policy import Actor, ReturnAction, ensure_allowed
from returns.record.record import ReturnRecord, parse_status
from returns.store.port import ReturnStore
from shared.errors import AuthorizationError, NotFoundError
from shared.users import UserStore

logger = structlog.get_logger(__name__)


@dataclass
class LifecycleResult:
    record: ReturnRecord
    notifications: list[NotificationEvent] = field(default_factory=list)
    changed: bool = True


class ReturnLifecycle:
    def __init__(self, store: ReturnStore, users: UserStore):
        self.store = store
        self.users = users
        self._locks: WeakValueDictionary = WeakValueDictionary()

    def _lock_for(self, return_id) -> asyncio.Lock:
        key = str(return_id)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def _load(self, return_id) -> ReturnRecord:
        record = await self.store.get(str(return_id))
        if record is None:
            raise NotFoundError("Return", return_id)
        return record

    async def _commit(self, record, changed=True) -> LifecycleResult:
        raised = list(record._events)
        pending = notifications_for(record, raised)

        await self.store.add(record)
        record._events.clear()

        logger.info(
            "Return saved",
            return_id=str(record.id),
            status=record.status,
            events=[type(e).__name__ for e in raised],
            pending_notifications=len(pending),
        )
        return LifecycleResult(record=record, notifications=pending, changed=changed)

    # -------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------
    async def create_return(
        self,
        actor: Actor,
        order_number,
        product_name=None,
        customer_name=None,
        customer_email=None,
        return_reason=None,
        seller_id=None,
    ) -> LifecycleResult:
        """Register a return. Admins may file one on behalf of a seller."""
        owner = seller_id if (seller_id and actor.is_admin) else actor.user_id
        record = ReturnRecord.create(
            seller_id=owner,
            order_number=order_number,
            product_name=product_name,
            customer_name=customer_name,
            customer_email=customer_email,
            return_reason=return_reason,
        )
        async with self._lock_for(record.id):
            return await self._commit(record)

    async def transition_status(self, return_id, new_status, actor: Actor, admin_notes=None) -> LifecycleResult:
        async with self._lock_for(return_id):
            record = await self._load(return_id)
            ensure_allowed(actor, record, ReturnAction.CHANGE_STATUS)

            previous = record.status
            changed = record.transition_status(new_status, admin_notes=admin_notes)
            if not changed:
                logger.info(
                    "Return status unchanged",
                    return_id=str(return_id),
                    status=previous,
                )
            return await self._commit(record, changed=changed)

    async def update_admin_notes(self, return_id, actor: Actor, notes) -> LifecycleResult:
        async with self._lock_for(return_id):
            record = await self._load(return_id)
            ensure_allowed(actor, record, ReturnAction.EDIT_ADMIN_NOTES)
            record.update_admin_notes(notes)
            return await self._commit(record)

    async def update_seller_notes(self, return_id, actor: Actor, notes) -> LifecycleResult:
        async with self._lock_for(return_id):
            record = await self._load(return_id)
            ensure_allowed(actor, record, ReturnAction.EDIT_SELLER_NOTES)
            record.update_seller_notes(notes)
            return await self._commit(record)

    async def toggle_controlled(self, return_id, actor: Actor) -> LifecycleResult:
        async with self._lock_for(return_id):
            record = await self._load(return_id)
            ensure_allowed(actor, record, ReturnAction.TOGGLE_CONTROLLED)
            record.toggle_controlled()
            return await self._commit(record)

    async def assign(self, return_id, assignee_id, actor: Actor) -> LifecycleResult:
        async with self._lock_for(return_id):
            record = await self._load(return_id)
            ensure_allowed(actor, record, ReturnAction.ASSIGN)

            assignee = await self.users.get_user(assignee_id)
            if assignee is None:
                raise NotFoundError("User", assignee_id)

            record.assign(str(assignee.id), actor.user_id)
            return await self._commit(record)

    async def unassign(self, return_id, actor: Actor) -> LifecycleResult:
        async with self._lock_for(return_id):
            record = await self._load(return_id)
            ensure_allowed(actor, record, ReturnAction.UNASSIGN)
            changed = record.unassign()
            return await self._commit(record, changed=changed)

    async def record_photos(self, return_id, actor: Actor, count) -> LifecycleResult:
        """Record photos attached by the warehouse or the seller.

        Storing the files themselves is the upload service's concern.
        """
        async with self._lock_for(return_id):
            record = await self._load(return_id)
            ensure_allowed(actor, record, ReturnAction.ADD_PHOTOS)
            record.record_photos(count, uploaded_by_admin=actor.is_admin)
            return await self._commit(record)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    async def get_return(self, return_id, actor: Actor) -> ReturnRecord:
        record = await self._load(return_id)
        ensure_allowed(actor, record, ReturnAction.VIEW)
        return record

    async def list_returns(self, actor: Actor, status=None, order_number=None, start=None, end=None) -> list:
        """Returns visible to the actor: all for admins, their own for sellers."""
        seller_id = None if actor.is_admin else actor.user_id

        if status:
            return await self.store.find_by_status(parse_status(status).value, seller_id=seller_id)
        if order_number:
            return await self.store.find_by_order_number(order_number, seller_id=seller_id)
        if start and end:
            return await self.store.find_by_date_range(start, end, seller_id=seller_id)
        return await self.store.list_returns(seller_id=seller_id)

    async def assigned_returns(self, actor: Actor, user_id) -> list:
        if not (actor.is_admin or str(actor.user_id) == str(user_id)):
            raise AuthorizationError("view_assignments", actor_id=actor.user_id)
        return await self.store.find_assigned_to(str(user_id))
