"""Banking Client Interface

Contract for the Revolut Business API as consumed by the sync and OAuth
use cases, plus the payload models it returns.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class BankingApiError(Exception):
    """Raised when the banking API answers with a non-success status"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class OAuthTokens(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "Bearer"
    expires_in: int = 2400


class BankAccount(BaseModel):
    id: str
    name: Optional[str] = None
    balance: Decimal = Decimal("0")
    currency: str
    state: Optional[str] = None


class Counterparty(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    account_id: Optional[str] = None
    account_type: Optional[str] = None


class Merchant(BaseModel):
    name: Optional[str] = None
    city: Optional[str] = None
    category_code: Optional[str] = None
    country: Optional[str] = None


class Card(BaseModel):
    card_number: Optional[str] = None


class TransactionLeg(BaseModel):
    leg_id: str
    account_id: str
    counterparty: Optional[Counterparty] = None
    amount: Decimal
    currency: str
    description: Optional[str] = None
    balance: Optional[Decimal] = None


class BankTransaction(BaseModel):
    id: str
    type: str
    state: str
    created_at: datetime
    completed_at: Optional[datetime] = None
    reference: Optional[str] = None
    legs: List[TransactionLeg] = Field(default_factory=list)
    merchant: Optional[Merchant] = None
    card: Optional[Card] = None


class BankingClient(ABC):
    """
    Banking API client

    OAuth calls are made with the application's credentials; data calls
    use the access token the client was created with.
    """

    @abstractmethod
    def build_authorization_url(self, state: str) -> str:
        """Build the consent URL the user is redirected to"""
        pass

    @abstractmethod
    async def exchange_code(self, code: str) -> OAuthTokens:
        """Exchange an authorization code for tokens"""
        pass

    @abstractmethod
    async def refresh_access_token(self, refresh_token: str) -> OAuthTokens:
        """Obtain a new access token from a refresh token"""
        pass

    @abstractmethod
    async def get_accounts(self, access_token: str) -> List[BankAccount]:
        """List the business accounts"""
        pass

    @abstractmethod
    async def get_transactions(
        self, access_token: str, from_date: datetime, count: int = 1000
    ) -> List[BankTransaction]:
        """List transactions created since from_date"""
        pass
