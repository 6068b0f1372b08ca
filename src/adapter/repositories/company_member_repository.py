"""SQLAlchemy Company Member Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.company_member_repository import CompanyMemberRepository
from src.domain.company_member import CompanyMember


class SqlAlchemyCompanyMemberRepository(CompanyMemberRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_active_membership(self, user_id: str) -> Optional[CompanyMember]:
        statement = (
            select(CompanyMember)
            .where(CompanyMember.user_id == user_id)
            .where(CompanyMember.is_active == True)  # noqa: E712
            .order_by(CompanyMember.created_at)
            .limit(1)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()
