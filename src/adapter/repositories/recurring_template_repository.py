"""SQLAlchemy Recurring Template Repository Implementation

Implements template persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import date, datetime
from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.recurring_template_repository import RecurringTemplateRepository
from src.domain.recurring_line import RecurringLine
from src.domain.recurring_template import RecurringTemplate


class SqlAlchemyRecurringTemplateRepository(RecurringTemplateRepository):
    """
    SQLAlchemy implementation of RecurringTemplateRepository

    The schedule advance is a single conditional UPDATE so that only one of
    several overlapping scheduler runs can move a template forward.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, template: RecurringTemplate) -> RecurringTemplate:
        self.session.add(template)
        await self.session.flush()
        await self.session.refresh(template)
        return template

    async def get_by_id(
        self, template_id: str, company_id: Optional[str] = None
    ) -> Optional[RecurringTemplate]:
        """
        Retrieve template by ID

        Args:
            template_id: Template ID
            company_id: Optional company scope

        Returns:
            RecurringTemplate if found, None otherwise
        """
        statement = select(RecurringTemplate).where(RecurringTemplate.id == template_id)
        # Always re-read the row; a cached instance may predate another session's commit
        statement = statement.execution_options(populate_existing=True)

        if company_id is not None:
            statement = statement.where(RecurringTemplate.company_id == company_id)

        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_by_company(self, company_id: str) -> List[RecurringTemplate]:
        statement = (
            select(RecurringTemplate)
            .where(RecurringTemplate.company_id == company_id)
            .order_by(RecurringTemplate.created_at.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, template: RecurringTemplate) -> RecurringTemplate:
        template.updated_at = datetime.utcnow()
        self.session.add(template)
        await self.session.flush()
        await self.session.refresh(template)
        return template

    async def delete(self, template_id: str) -> None:
        """
        Delete a template and its lines

        Lines are removed explicitly so stores without enforced foreign keys
        are left clean too.
        """
        await self.session.execute(
            delete(RecurringLine).where(RecurringLine.template_id == template_id)
        )
        await self.session.execute(
            delete(RecurringTemplate).where(RecurringTemplate.id == template_id)
        )
        await self.session.flush()

    async def get_due(self, today: date) -> List[RecurringTemplate]:
        """
        Retrieve active templates whose next_issue_date is today or earlier

        Args:
            today: Reference date

        Returns:
            Due templates, oldest next_issue_date first
        """
        statement = (
            select(RecurringTemplate)
            .where(RecurringTemplate.is_active == True)  # noqa: E712
            .where(RecurringTemplate.next_issue_date <= today)
            .order_by(RecurringTemplate.next_issue_date, RecurringTemplate.created_at)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def advance_schedule(
        self,
        template_id: str,
        expected_next_issue_date: date,
        next_issue_date: date,
        issued_at: datetime,
    ) -> bool:
        """
        Conditionally move next_issue_date forward

        Only an active template still at expected_next_issue_date is moved.

        Returns:
            True if exactly this call moved the schedule
        """
        statement = (
            update(RecurringTemplate)
            .where(RecurringTemplate.id == template_id)
            .where(RecurringTemplate.next_issue_date == expected_next_issue_date)
            .where(RecurringTemplate.is_active == True)  # noqa: E712
            .values(
                next_issue_date=next_issue_date,
                last_issued_at=issued_at,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(statement)
        return result.rowcount == 1
