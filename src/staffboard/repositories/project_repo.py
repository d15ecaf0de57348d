"""Project repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.db.models.project import ProjectAssigneeRow, ProjectRow
from staffboard.repositories.base import BaseRepository


class ProjectRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ProjectRow)

    async def get(self, project_id: str) -> ProjectRow | None:
        return await self.get_by_id("project_id", project_id)

    async def list_by_ids(self, project_ids) -> list[ProjectRow]:
        return await super().list_by_ids("project_id", project_ids)

    async def add_assignees(self, project_id: str, manager_ids: list[str]) -> None:
        for manager_id in manager_ids:
            self.session.add(ProjectAssigneeRow(project_id=project_id, manager_id=manager_id))
        await self.session.flush()

    async def list_manager_ids(self, project: ProjectRow) -> list[str]:
        """Primary manager first, then additional assignees, without duplicates."""
        stmt = (
            select(ProjectAssigneeRow.manager_id)
            .where(ProjectAssigneeRow.project_id == project.project_id)
            .order_by(ProjectAssigneeRow.created_at, ProjectAssigneeRow.manager_id)
        )
        result = await self.session.execute(stmt)
        ordered = [project.manager_id, *result.scalars().all()]
        return list(dict.fromkeys(mid for mid in ordered if mid))
