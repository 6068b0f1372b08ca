"""Data Transfer Objects for Banking Use Cases

Pydantic models for the Revolut Business integration.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class AuthorizationStartDTO(BaseModel):
    """
    Result of starting the OAuth flow

    The caller must keep state and company_id (e.g. in short-lived cookies)
    to complete the flow on callback.
    """

    authorization_url: str
    state: str
    company_id: str


class CompleteAuthorizationCommandDTO(BaseModel):
    """Command DTO for the OAuth callback"""

    code: Optional[str] = None
    state: Optional[str] = None
    stored_state: Optional[str] = Field(
        default=None,
        description="State remembered when the flow was started"
    )
    company_id: Optional[str] = Field(
        default=None,
        description="Company remembered when the flow was started"
    )


class RevolutConnectionDTO(BaseModel):
    """Connection info without any token material"""

    id: str
    company_id: str
    status: str
    connected_at: datetime
    access_token_expires_at: Optional[datetime] = None
    last_sync_at: Optional[datetime] = None
    last_sync_status: Optional[str] = None
    last_sync_error: Optional[str] = None
    disconnected_at: Optional[datetime] = None


class RevolutAccountDTO(BaseModel):
    id: str
    revolut_account_id: str
    name: Optional[str] = None
    currency: str
    balance: Decimal
    state: Optional[str] = None
    balance_updated_at: Optional[datetime] = None


class RevolutStatusResponseDTO(BaseModel):
    """Connection status of the caller's company (connection is None when never connected)"""

    connected: bool
    connection: Optional[RevolutConnectionDTO] = None
    accounts: List[RevolutAccountDTO] = Field(default_factory=list)


class DisconnectResponseDTO(BaseModel):
    company_id: str
    data_deleted: bool


class ConnectionSyncResultDTO(BaseModel):
    """Outcome of syncing one connection"""

    connection_id: str
    company_id: str
    status: str = Field(
        ...,
        description="success or error"
    )
    accounts_synced: int = 0
    transactions_synced: int = 0
    error: Optional[str] = None


class RevolutSyncRunResultDTO(BaseModel):
    """Summary of a sync run over active connections"""

    success: bool = True
    processed: int = 0
    successful: int = 0
    failed: int = 0
    results: List[ConnectionSyncResultDTO] = Field(default_factory=list)


class RevolutTransactionDTO(BaseModel):
    id: str
    account_id: str
    revolut_transaction_id: str
    type: str
    state: str
    amount: Decimal
    currency: str
    balance_after: Optional[Decimal] = None
    counterparty_name: Optional[str] = None
    reference: Optional[str] = None
    description: Optional[str] = None
    merchant_name: Optional[str] = None
    card_last_four: Optional[str] = None
    transaction_date: date
    completed_at_revolut: Optional[datetime] = None


class ListRevolutTransactionsResponseDTO(BaseModel):
    transactions: List[RevolutTransactionDTO]
    total: int
    limit: int
    offset: int


def to_connection_dto(connection) -> RevolutConnectionDTO:
    return RevolutConnectionDTO(
        id=connection.id,
        company_id=connection.company_id,
        status=getattr(connection.status, "value", connection.status),
        connected_at=connection.connected_at,
        access_token_expires_at=connection.access_token_expires_at,
        last_sync_at=connection.last_sync_at,
        last_sync_status=getattr(connection.last_sync_status, "value", connection.last_sync_status),
        last_sync_error=connection.last_sync_error,
        disconnected_at=connection.disconnected_at,
    )
