"""Leave repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.db.models.leave import LeaveRow
from staffboard.repositories.base import BaseRepository


class LeaveRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, LeaveRow)

    async def get(self, leave_id: str) -> LeaveRow | None:
        return await self.get_by_id("leave_id", leave_id)

    async def list_by_ids(self, leave_ids) -> list[LeaveRow]:
        return await super().list_by_ids("leave_id", leave_ids)
