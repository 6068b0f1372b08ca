"""Document Line Domain Entity"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid
from src.domain.recurring_line import TaxRate


class DocumentLine(BaseModel, table=True):
    """
    Document Line - Line item of a Document

    Domain Rules:
    - Lines copied from a template keep their line numbers
    """

    __tablename__ = "document_lines"
    __table_args__ = (
        Index('ix_document_lines_document_id', 'document_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
    )

    document_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("documents.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )

    company_id: str = Field(
        sa_column=Column(String(36), nullable=False),
    )

    line_number: int = Field(
        sa_column=Column(Integer, nullable=False),
    )

    description: str = Field(
        sa_column=Column(Text, nullable=False),
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(15, 4), nullable=False),
    )

    unit: str = Field(
        default="pcs",
        sa_column=Column(String(50), nullable=False, default="pcs"),
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(15, 2), nullable=False),
    )

    tax_rate: TaxRate = Field(
        default=TaxRate.STANDARD_20,
    )

    project_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(36), nullable=True),
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
    )
