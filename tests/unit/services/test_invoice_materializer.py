"""Unit tests for InvoiceMaterializer"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.invoice_materializer import InvoiceMaterializer
from src.domain.document import DocumentStatus, DocumentType


@pytest.fixture
def mock_document_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda document: document)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def mock_document_line_repo():
    repo = MagicMock()
    repo.create_many = AsyncMock(side_effect=lambda lines: lines)
    return repo


@pytest.fixture
def materializer(mock_uow, mock_document_repo, mock_document_line_repo):
    return InvoiceMaterializer(mock_uow, mock_document_repo, mock_document_line_repo)


@pytest.mark.asyncio
class TestInvoiceMaterializer:
    """Test document creation from a template"""

    async def test_creates_draft_invoice_with_copied_header(
        self, materializer, mock_uow, sample_template, sample_lines
    ):
        """
        Given: Template with payment terms and notes
        When: materialize is called
        Then: Draft invoice carries the template's header fields and back-reference
        """
        # Act
        document, _ = await materializer.materialize(sample_template, sample_lines)

        # Assert
        assert document.document_type == DocumentType.INVOICE
        assert document.status == DocumentStatus.DRAFT
        assert document.company_id == "company_1"
        assert document.customer_id == "customer_1"
        assert document.payment_terms_days == 30
        assert document.notes == "Thank you"
        assert document.recurring_template_id == "template_1"
        mock_uow.commit.assert_not_called()

    async def test_copies_every_line_with_its_number(
        self, materializer, sample_template, sample_lines
    ):
        """
        Given: Template with two lines
        When: materialize is called
        Then: Two document lines with the same numbers and values
        """
        # Act
        document, document_lines = await materializer.materialize(sample_template, sample_lines)

        # Assert
        assert len(document_lines) == 2
        assert all(line.document_id == document.id for line in document_lines)
        first, second = document_lines
        assert (first.line_number, first.quantity, first.unit_price) == (1, Decimal("10"), Decimal("100.00"))
        assert (second.line_number, second.project_id) == (2, "project_9")

    async def test_template_is_not_modified(self, materializer, sample_template, sample_lines):
        """
        Given: A due template
        When: materialize is called
        Then: Schedule fields are unchanged
        """
        # Arrange
        before = sample_template.model_dump()

        # Act
        await materializer.materialize(sample_template, sample_lines)

        # Assert
        assert sample_template.model_dump() == before

    async def test_line_failure_removes_document(
        self, materializer, mock_uow, mock_document_repo, mock_document_line_repo, sample_template, sample_lines
    ):
        """
        Given: Copying lines fails
        When: materialize is called
        Then: Document is deleted again and the error propagates
        """
        # Arrange
        mock_document_line_repo.create_many = AsyncMock(side_effect=Exception("line insert failed"))

        # Act & Assert
        with pytest.raises(Exception, match="line insert failed"):
            await materializer.materialize(sample_template, sample_lines)

        created = mock_document_repo.create.call_args[0][0]
        mock_document_repo.delete.assert_called_once_with(created.id)
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_called_once()

    async def test_failed_compensation_still_raises_original_error(
        self, materializer, mock_uow, mock_document_repo, mock_document_line_repo, sample_template, sample_lines
    ):
        """
        Given: Line copy fails and the compensating delete fails too
        When: materialize is called
        Then: The original line error is raised
        """
        # Arrange
        mock_document_line_repo.create_many = AsyncMock(side_effect=Exception("line insert failed"))
        mock_document_repo.delete = AsyncMock(side_effect=Exception("delete failed"))

        # Act & Assert
        with pytest.raises(Exception, match="line insert failed"):
            await materializer.materialize(sample_template, sample_lines)

        assert mock_uow.rollback.call_count == 2
