"""Customer Domain Entity

Read-only here: customers are managed by the CRM part of the application.
"""

from datetime import datetime
from sqlmodel import Field, Column, Index
from sqlalchemy import String
from src.domain.base import BaseModel, generate_uuid


class Customer(BaseModel, table=True):
    __tablename__ = "customers"
    __table_args__ = (
        Index('ix_customers_company_id', 'company_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
    )

    company_id: str = Field(
        sa_column=Column(String(36), nullable=False),
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
    )
