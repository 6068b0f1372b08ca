"""Document Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.document import Document


class DocumentRepository(ABC):
    """Repository interface for Document persistence"""

    @abstractmethod
    async def create(self, document: Document) -> Document:
        """
        Create a new document

        Args:
            document: Document entity to persist

        Returns:
            Created Document
        """
        pass

    @abstractmethod
    async def get_by_id(self, document_id: str) -> Optional[Document]:
        """
        Retrieve document by ID

        Returns:
            Document if found, None otherwise
        """
        pass

    @abstractmethod
    async def delete(self, document_id: str) -> None:
        """
        Delete a document and its lines

        Args:
            document_id: Document ID
        """
        pass

    @abstractmethod
    async def exists_for_template(self, template_id: str) -> bool:
        """
        Check whether any document references a template

        Returns:
            True if at least one document was generated from template_id
        """
        pass
