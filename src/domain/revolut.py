"""Revolut Business Domain Entities

Connection (encrypted OAuth tokens), mirrored bank accounts and
transactions, and the per-run sync log.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, Integer, Numeric, String, Text, UniqueConstraint
from src.domain.base import BaseModel, generate_uuid


class ConnectionStatus(str, Enum):
    """Revolut connection lifecycle"""
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"
    ERROR = "error"
    DISCONNECTED = "disconnected"


class SyncStatus(str, Enum):
    """Status of a sync run"""
    PENDING = "pending"
    SYNCING = "syncing"
    COMPLETED = "completed"
    FAILED = "failed"


class RevolutConnection(BaseModel, table=True):
    """
    RevolutConnection - OAuth connection of a company to Revolut Business

    Domain Rules:
    - One connection per company; reconnecting replaces it
    - Tokens are stored encrypted, never in clear text
    - Only active connections are synced
    """

    __tablename__ = "revolut_connections"
    __table_args__ = (
        Index('ix_revolut_connections_company_id', 'company_id', unique=True),
        Index('ix_revolut_connections_status', 'status'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
    )

    company_id: str = Field(
        sa_column=Column(String(36), nullable=False),
    )

    access_token_encrypted: str = Field(
        sa_column=Column(Text, nullable=False),
    )

    refresh_token_encrypted: str = Field(
        sa_column=Column(Text, nullable=False),
    )

    token_type: str = Field(
        default="Bearer",
        sa_column=Column(String(50), nullable=False, default="Bearer"),
    )

    access_token_expires_at: datetime = Field(
        description="Expiry of the current access token"
    )

    refresh_token_expires_at: Optional[datetime] = Field(
        default=None,
    )

    status: ConnectionStatus = Field(
        default=ConnectionStatus.ACTIVE,
    )

    last_sync_at: Optional[datetime] = Field(default=None)

    last_sync_status: Optional[SyncStatus] = Field(default=None)

    last_sync_error: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    connected_at: datetime = Field(default_factory=datetime.utcnow)

    disconnected_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)


class RevolutAccount(BaseModel, table=True):
    """
    RevolutAccount - Bank account mirrored from Revolut

    Domain Rules:
    - (company_id, revolut_account_id) is unique; syncs upsert on it
    """

    __tablename__ = "revolut_accounts"
    __table_args__ = (
        UniqueConstraint('company_id', 'revolut_account_id', name='uq_revolut_accounts_company_account'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
    )

    company_id: str = Field(sa_column=Column(String(36), nullable=False))

    connection_id: str = Field(sa_column=Column(String(36), nullable=False))

    revolut_account_id: str = Field(sa_column=Column(String(100), nullable=False))

    name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    currency: str = Field(sa_column=Column(String(3), nullable=False))

    balance: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
    )

    state: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    balance_updated_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)


class RevolutTransaction(BaseModel, table=True):
    """
    RevolutTransaction - Bank transaction mirrored from Revolut

    Domain Rules:
    - (company_id, revolut_transaction_id) is unique; syncs upsert on it
    - amount is signed: negative for outgoing money
    """

    __tablename__ = "revolut_transactions"
    __table_args__ = (
        UniqueConstraint('company_id', 'revolut_transaction_id', name='uq_revolut_transactions_company_tx'),
        Index('ix_revolut_transactions_account_id', 'account_id'),
        Index('ix_revolut_transactions_date', 'transaction_date'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
    )

    company_id: str = Field(sa_column=Column(String(36), nullable=False))

    account_id: str = Field(
        sa_column=Column(String(36), nullable=False),
        description="Local RevolutAccount id"
    )

    revolut_transaction_id: str = Field(sa_column=Column(String(100), nullable=False))

    revolut_leg_id: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))

    type: str = Field(sa_column=Column(String(50), nullable=False))

    state: str = Field(sa_column=Column(String(50), nullable=False))

    amount: Decimal = Field(sa_column=Column(Numeric(18, 2), nullable=False))

    currency: str = Field(sa_column=Column(String(3), nullable=False))

    balance_after: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(18, 2), nullable=True))

    counterparty_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    counterparty_account_id: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))

    counterparty_account_type: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    reference: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    merchant_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    merchant_category_code: Optional[str] = Field(default=None, sa_column=Column(String(10), nullable=True))

    merchant_city: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))

    merchant_country: Optional[str] = Field(default=None, sa_column=Column(String(2), nullable=True))

    card_last_four: Optional[str] = Field(default=None, sa_column=Column(String(4), nullable=True))

    transaction_date: date = Field(sa_column=Column(Date, nullable=False))

    created_at_revolut: Optional[datetime] = Field(default=None)

    completed_at_revolut: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)


class RevolutSyncLog(BaseModel, table=True):
    """RevolutSyncLog - One row per sync run of a connection"""

    __tablename__ = "revolut_sync_log"
    __table_args__ = (
        Index('ix_revolut_sync_log_connection_id', 'connection_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
    )

    company_id: str = Field(sa_column=Column(String(36), nullable=False))

    connection_id: str = Field(sa_column=Column(String(36), nullable=False))

    sync_type: str = Field(default="full", sa_column=Column(String(50), nullable=False, default="full"))

    status: SyncStatus = Field(default=SyncStatus.SYNCING)

    records_fetched: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))

    records_created: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))

    error_message: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    started_at: datetime = Field(default_factory=datetime.utcnow)

    completed_at: Optional[datetime] = Field(default=None)

    duration_ms: Optional[int] = Field(default=None, sa_column=Column(Integer, nullable=True))
