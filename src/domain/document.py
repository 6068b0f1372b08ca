"""Document Domain Entity

Invoices produced from recurring templates. Numbering, issuance and
delivery belong to the documents subsystem; this service only creates
drafts.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Integer, String, Text
from src.domain.base import BaseModel, generate_uuid


class DocumentType(str, Enum):
    """Document types"""
    INVOICE = "invoice"
    CREDIT_NOTE = "credit_note"


class DocumentStatus(str, Enum):
    """Document status types"""
    DRAFT = "draft"
    ISSUED = "issued"
    PAID = "paid"
    CANCELLED = "cancelled"


class Document(BaseModel, table=True):
    """
    Document - Invoice header

    Domain Rules:
    - Documents created from a template start as draft invoices
    - recurring_template_id points back at the originating template
    """

    __tablename__ = "documents"
    __table_args__ = (
        Index('ix_documents_company_id', 'company_id'),
        Index('ix_documents_recurring_template_id', 'recurring_template_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
    )

    company_id: str = Field(
        sa_column=Column(String(36), nullable=False),
    )

    customer_id: str = Field(
        sa_column=Column(String(36), nullable=False),
    )

    document_type: DocumentType = Field(
        default=DocumentType.INVOICE,
    )

    status: DocumentStatus = Field(
        default=DocumentStatus.DRAFT,
    )

    payment_terms_days: int = Field(
        default=14,
        sa_column=Column(Integer, nullable=False, default=14),
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    recurring_template_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(36), nullable=True),
        description="Template this document was generated from"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
    )
