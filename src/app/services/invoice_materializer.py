"""Invoice Materializer

Turns a recurring template and its lines into a draft invoice document.
"""

import logging
from typing import List, Tuple
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.document_line_repository import DocumentLineRepository
from src.app.services.compensation import create_with_children
from src.app.services.unit_of_work import UnitOfWork
from src.domain.document import Document, DocumentStatus, DocumentType
from src.domain.document_line import DocumentLine
from src.domain.recurring_line import RecurringLine
from src.domain.recurring_template import RecurringTemplate

logger = logging.getLogger(__name__)


class InvoiceMaterializer:
    """
    Creates one draft invoice (document + lines) per call

    Business Rules:
    1. Document is a draft invoice for the template's company and customer
    2. payment_terms_days and notes are copied from the template
    3. recurring_template_id points back at the template
    4. Every template line is copied, keeping its line number
    5. If copying lines fails the document is removed again

    The template itself is never modified and nothing is committed on
    success; the caller commits together with its own schedule changes.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: DocumentRepository,
        document_line_repo: DocumentLineRepository,
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.document_line_repo = document_line_repo

    async def materialize(
        self, template: RecurringTemplate, lines: List[RecurringLine]
    ) -> Tuple[Document, List[DocumentLine]]:
        """
        Create the draft invoice for a template

        Args:
            template: Source template
            lines: The template's lines

        Returns:
            Tuple of (created document, created document lines)

        Raises:
            Exception: Whatever the store raised, after compensation
        """
        template_id = template.id

        async def create_document() -> Document:
            document = Document(
                company_id=template.company_id,
                customer_id=template.customer_id,
                document_type=DocumentType.INVOICE,
                status=DocumentStatus.DRAFT,
                payment_terms_days=template.payment_terms_days,
                notes=template.notes,
                recurring_template_id=template.id,
            )
            return await self.document_repo.create(document)

        async def copy_lines(document: Document) -> List[DocumentLine]:
            document_lines = [
                DocumentLine(
                    document_id=document.id,
                    company_id=template.company_id,
                    line_number=line.line_number,
                    description=line.description,
                    quantity=line.quantity,
                    unit=line.unit,
                    unit_price=line.unit_price,
                    tax_rate=line.tax_rate,
                    project_id=line.project_id,
                )
                for line in lines
            ]
            return await self.document_line_repo.create_many(document_lines)

        async def remove_document(document_id: str) -> None:
            logger.warning(
                f"Removing document {document_id} after failed line copy "
                f"for template {template_id}"
            )
            await self.document_repo.delete(document_id)

        document, document_lines = await create_with_children(
            self.uow, create_document, copy_lines, remove_document
        )

        logger.info(
            f"Materialized draft invoice {document.id} with {len(document_lines)} lines "
            f"from template {template_id}"
        )
        return document, document_lines
