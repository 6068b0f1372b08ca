"""SQLAlchemy Document Repository Implementation"""

from typing import Optional
from sqlalchemy import delete
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.document_repository import DocumentRepository
from src.domain.document import Document
from src.domain.document_line import DocumentLine


class SqlAlchemyDocumentRepository(DocumentRepository):
    """
    SQLAlchemy implementation of DocumentRepository

    Only the draft-creation side of documents lives here; numbering and
    issuance belong to the documents subsystem.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: Document) -> Document:
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def get_by_id(self, document_id: str) -> Optional[Document]:
        statement = select(Document).where(Document.id == document_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def delete(self, document_id: str) -> None:
        """Delete a document together with its lines"""
        await self.session.execute(
            delete(DocumentLine).where(DocumentLine.document_id == document_id)
        )
        await self.session.execute(
            delete(Document).where(Document.id == document_id)
        )
        await self.session.flush()

    async def exists_for_template(self, template_id: str) -> bool:
        statement = (
            select(func.count())
            .select_from(Document)
            .where(Document.recurring_template_id == template_id)
        )
        result = await self.session.execute(statement)
        count = result.scalar_one()
        return count > 0
