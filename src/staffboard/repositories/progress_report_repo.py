"""Progress report and daily progress repositories."""

from sqlalchemy.ext.asyncio import AsyncSession

from staffboard.db.models.progress_report import DailyProgressRow, ProgressReportRow
from staffboard.repositories.base import BaseRepository


class ProgressReportRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ProgressReportRow)

    async def get(self, report_id: str) -> ProgressReportRow | None:
        return await self.get_by_id("report_id", report_id)

    async def list_by_ids(self, report_ids) -> list[ProgressReportRow]:
        return await super().list_by_ids("report_id", report_ids)


class DailyProgressRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, DailyProgressRow)
