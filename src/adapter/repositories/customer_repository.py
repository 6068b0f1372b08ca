"""SQLAlchemy Customer Repository Implementation"""

from typing import Dict, List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.customer import Customer


class SqlAlchemyCustomerRepository(CustomerRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, customer_id: str, company_id: str) -> Optional[Customer]:
        statement = (
            select(Customer)
            .where(Customer.id == customer_id)
            .where(Customer.company_id == company_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_names(self, customer_ids: List[str]) -> Dict[str, str]:
        if not customer_ids:
            return {}

        statement = select(Customer.id, Customer.name).where(Customer.id.in_(customer_ids))
        result = await self.session.execute(statement)
        return {row.id: row.name for row in result.all()}
