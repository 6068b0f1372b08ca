"""Document Line Repository Interface"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.document_line import DocumentLine


class DocumentLineRepository(ABC):
    """Repository interface for DocumentLine persistence"""

    @abstractmethod
    async def get_by_document_id(self, document_id: str) -> List[DocumentLine]:
        """
        Retrieve all lines of a document ordered by line_number

        Args:
            document_id: Document ID

        Returns:
            List of DocumentLine
        """
        pass

    @abstractmethod
    async def create_many(self, lines: List[DocumentLine]) -> List[DocumentLine]:
        """
        Persist a batch of document lines

        Args:
            lines: Lines to insert

        Returns:
            Created lines
        """
        pass
