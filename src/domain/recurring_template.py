"""Recurring Invoice Template Domain Entity

A recurring billing agreement between a company and one of its customers.
"""

from datetime import datetime, date
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, Integer, String, Text
from src.domain.base import BaseModel, generate_uuid


class RecurrenceFrequency(str, Enum):
    """How often a template issues an invoice"""
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @property
    def is_week_based(self) -> bool:
        return self in (RecurrenceFrequency.WEEKLY, RecurrenceFrequency.BIWEEKLY)

    @property
    def is_month_based(self) -> bool:
        return not self.is_week_based


class RecurringTemplate(BaseModel, table=True):
    """
    RecurringTemplate - Header of a recurring invoice

    Domain Rules:
    - day_of_month is only set for monthly, quarterly and yearly templates
    - day_of_week is only set for weekly and biweekly templates
    - next_issue_date is advanced after every issued invoice
    - Templates referenced by a document are deactivated, never deleted
    """

    __tablename__ = "recurring_invoice_templates"
    __table_args__ = (
        Index('ix_recurring_templates_company_id', 'company_id'),
        Index('ix_recurring_templates_customer_id', 'customer_id'),
        Index('ix_recurring_templates_due', 'is_active', 'next_issue_date'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
        description="Unique template identifier (UUID)"
    )

    company_id: str = Field(
        sa_column=Column(String(36), nullable=False),
        description="Owning company"
    )

    customer_id: str = Field(
        sa_column=Column(String(36), nullable=False),
        description="Customer billed by this template"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Display name"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    frequency: RecurrenceFrequency = Field(
        default=RecurrenceFrequency.MONTHLY,
        description="Recurrence frequency"
    )

    day_of_month: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
        description="Preferred day of month (month-based frequencies only)"
    )

    day_of_week: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
        description="Preferred day of week, 0=Sunday (week-based frequencies only)"
    )

    payment_terms_days: int = Field(
        default=14,
        sa_column=Column(Integer, nullable=False, default=14),
        description="Payment terms copied to each generated invoice"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    next_issue_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Date the next invoice is due to be issued"
    )

    is_active: bool = Field(
        default=True,
        description="Inactive templates are skipped by the scheduler"
    )

    last_issued_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp of the last generated invoice"
    )

    created_by: str = Field(
        sa_column=Column(String(36), nullable=False),
        description="User who created the template"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Template creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )
