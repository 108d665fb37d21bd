"""In-memory return store: keeps aggregates in a dict for development and tests."""

from returns.store.port import ReturnStore


class InMemoryReturnStore(ReturnStore):
    def __init__(self):
        self.records: dict[str, object] = {}

    async def get(self, return_id: str):
        return self.records.get(str(return_id))

    async def add(self, record) -> None:
        self.records[str(record.id)] = record

    async def list_returns(self, seller_id: str | None = None) -> list:
        records = list(self.records.values())
        if seller_id is not None:
            records = [r for r in records if str(r.seller_id) == str(seller_id)]
        return sorted(records, key=lambda r: r.created_at)

    async def find_by_status(self, status: str, seller_id: str | None = None) -> list:
        return [r for r in await self.list_returns(seller_id) if r.status == status]

    async def find_by_order_number(self, order_number: str, seller_id: str | None = None) -> list:
        return [r for r in await self.list_returns(seller_id) if r.order_number == order_number]

    async def find_assigned_to(self, user_id: str) -> list:
        return [r for r in await self.list_returns() if r.assigned_to_id is not None and str(r.assigned_to_id) == str(user_id)]

    def reset(self):
        self.records.clear()
