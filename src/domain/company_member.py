"""Company Member Domain Entity

Links a user to the company they work for, with a role.
"""

from datetime import datetime
from enum import Enum
from sqlmodel import Field, Column, Index
from sqlalchemy import String
from src.domain.base import BaseModel, generate_uuid


class MemberRole(str, Enum):
    """Roles within a company"""
    SUPERADMIN = "superadmin"
    ACCOUNTANT = "accountant"
    EMPLOYEE = "employee"


class CompanyMember(BaseModel, table=True):
    """
    CompanyMember - User membership in a company

    Domain Rules:
    - A user has at most one active membership
    - Only superadmins manage recurring invoices and banking connections
    """

    __tablename__ = "company_members"
    __table_args__ = (
        Index('ix_company_members_user_id', 'user_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
    )

    company_id: str = Field(
        sa_column=Column(String(36), nullable=False),
    )

    user_id: str = Field(
        sa_column=Column(String(36), nullable=False),
    )

    role: MemberRole = Field(
        default=MemberRole.EMPLOYEE,
    )

    is_active: bool = Field(
        default=True,
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
    )
