"""SQLAlchemy Document Line Repository Implementation"""

from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.document_line_repository import DocumentLineRepository
from src.domain.document_line import DocumentLine


class SqlAlchemyDocumentLineRepository(DocumentLineRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_document_id(self, document_id: str) -> List[DocumentLine]:
        statement = (
            select(DocumentLine)
            .where(DocumentLine.document_id == document_id)
            .order_by(DocumentLine.line_number)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create_many(self, lines: List[DocumentLine]) -> List[DocumentLine]:
        self.session.add_all(lines)
        await self.session.flush()
        for line in lines:
            await self.session.refresh(line)
        return lines
