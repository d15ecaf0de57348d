"""Directory repositories: directors, managers, employees."""

from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.db.models.people import DirectorRow, EmployeeRow, ManagerRow
from staffboard.repositories.base import BaseRepository


class DirectorRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, DirectorRow)

    async def get(self, director_id: str) -> DirectorRow | None:
        return await self.get_by_id("director_id", director_id)


class ManagerRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ManagerRow)

    async def get(self, manager_id: str) -> ManagerRow | None:
        return await self.get_by_id("manager_id", manager_id)

    async def list_by_ids(self, manager_ids) -> list[ManagerRow]:
        return await super().list_by_ids("manager_id", manager_ids)


class EmployeeRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, EmployeeRow)

    async def get(self, employee_id: str) -> EmployeeRow | None:
        return await self.get_by_id("employee_id", employee_id)

    async def get_by_email(self, email: str) -> EmployeeRow | None:
        return await self.get_by_id("email", email.lower())

    async def list_by_ids(self, employee_ids) -> list[EmployeeRow]:
        return await super().list_by_ids("employee_id", employee_ids)
