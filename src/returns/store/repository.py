"""Return store backed by the returns domain's protean repository.

Requires an active ``returns`` domain context, which the API middleware
pushes for every request. Queries lift protean's default page size so
listings are never truncated.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from returns.record.record import ReturnRecord
from returns.store.port import ReturnStore


class RepositoryReturnStore(ReturnStore):
    def _repo(self):
        return current_domain.repository_for(ReturnRecord)

    def _filter(self, **criteria) -> list:
        items = self._repo()._dao.query.filter(**criteria).limit(None).all().items
        return sorted(items, key=lambda r: r.created_at)

    async def get(self, return_id: str):
        try:
            return self._repo().get(str(return_id))
        except ObjectNotFoundError:
            return None

    async def add(self, record) -> None:
        self._repo().add(record)

    async def list_returns(self, seller_id: str | None = None) -> list:
        if seller_id is not None:
            return self._filter(seller_id=str(seller_id))
        return sorted(self._repo()._dao.query.limit(None).all().items, key=lambda r: r.created_at)

    async def find_by_status(self, status: str, seller_id: str | None = None) -> list:
        criteria = {"status": status}
        if seller_id is not None:
            criteria["seller_id"] = str(seller_id)
        return self._filter(**criteria)

    async def find_by_order_number(self, order_number: str, seller_id: str | None = None) -> list:
        criteria = {"order_number": order_number}
        if seller_id is not None:
            criteria["seller_id"] = str(seller_id)
        return self._filter(**criteria)

    async def find_assigned_to(self, user_id: str) -> list:
        return self._filter(assigned_to_id=str(user_id))
