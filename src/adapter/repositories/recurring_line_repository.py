"""SQLAlchemy Recurring Line Repository Implementation"""

from collections import defaultdict
from typing import Dict, List
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.recurring_line_repository import RecurringLineRepository
from src.domain.recurring_line import RecurringLine


class SqlAlchemyRecurringLineRepository(RecurringLineRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_template_id(self, template_id: str) -> List[RecurringLine]:
        statement = (
            select(RecurringLine)
            .where(RecurringLine.template_id == template_id)
            .order_by(RecurringLine.line_number)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_by_template_ids(self, template_ids: List[str]) -> Dict[str, List[RecurringLine]]:
        if not template_ids:
            return {}

        statement = (
            select(RecurringLine)
            .where(RecurringLine.template_id.in_(template_ids))
            .order_by(RecurringLine.template_id, RecurringLine.line_number)
        )
        result = await self.session.execute(statement)

        lines_by_template = defaultdict(list)
        for line in result.scalars().all():
            lines_by_template[line.template_id].append(line)
        return dict(lines_by_template)

    async def create_many(self, lines: List[RecurringLine]) -> List[RecurringLine]:
        """
        Insert lines in one flush

        Args:
            lines: Lines to persist

        Returns:
            Persisted lines in input order
        """
        self.session.add_all(lines)
        await self.session.flush()
        for line in lines:
            await self.session.refresh(line)
        return lines

    async def delete_by_template_id(self, template_id: str) -> int:
        result = await self.session.execute(
            delete(RecurringLine).where(RecurringLine.template_id == template_id)
        )
        await self.session.flush()
        return result.rowcount
