"""Task repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.db.models.task import TaskRow
from staffboard.repositories.base import BaseRepository


class TaskRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, TaskRow)

    async def get(self, task_id: str) -> TaskRow | None:
        return await self.get_by_id("task_id", task_id)

    async def list_by_ids(self, task_ids) -> list[TaskRow]:
        return await super().list_by_ids("task_id", task_ids)
