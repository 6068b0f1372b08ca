"""Recurring Invoice Line Domain Entity

One billable line of a recurring invoice template.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid


class TaxRate(str, Enum):
    """Austrian VAT categories"""
    STANDARD_20 = "standard_20"
    REDUCED_10 = "reduced_10"
    ZERO = "zero"


class RecurringLine(BaseModel, table=True):
    """
    RecurringLine - Line item owned by a RecurringTemplate

    Domain Rules:
    - Lines are numbered 1..N in input order
    - quantity > 0, unit_price >= 0
    - The whole set is replaced whenever the template is edited
    """

    __tablename__ = "recurring_invoice_lines"
    __table_args__ = (
        Index('ix_recurring_lines_template_id', 'template_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
    )

    template_id: str = Field(
        sa_column=Column(
            String(36),
            ForeignKey("recurring_invoice_templates.id", ondelete="CASCADE"),
            nullable=False,
        ),
        description="Foreign key to RecurringTemplate"
    )

    company_id: str = Field(
        sa_column=Column(String(36), nullable=False),
    )

    line_number: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="1-based position within the template"
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
