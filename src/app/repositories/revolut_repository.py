"""Revolut Repository Interfaces

Persistence contracts for connections, mirrored accounts/transactions and
sync logs.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from src.domain.revolut import (
    RevolutConnection,
    RevolutAccount,
    RevolutTransaction,
    RevolutSyncLog,
)


class RevolutConnectionRepository(ABC):

    @abstractmethod
    async def get_by_id(self, connection_id: str) -> Optional[RevolutConnection]:
        pass

    @abstractmethod
    async def get_by_company_id(self, company_id: str) -> Optional[RevolutConnection]:
        """Retrieve the connection of a company, if any"""
        pass

    @abstractmethod
    async def get_active(self, company_id: Optional[str] = None) -> List[RevolutConnection]:
        """
        Retrieve active connections

        Args:
            company_id: Optional filter on a single company

        Returns:
            List of connections with status=active
        """
        pass

    @abstractmethod
    async def create(self, connection: RevolutConnection) -> RevolutConnection:
        pass

    @abstractmethod
    async def update(self, connection: RevolutConnection) -> RevolutConnection:
        pass

    @abstractmethod
    async def delete_by_company_id(self, company_id: str) -> None:
        """Remove the connection of a company (used when reconnecting)"""
        pass


class RevolutAccountRepository(ABC):

    @abstractmethod
    async def upsert(self, account: RevolutAccount) -> RevolutAccount:
        """
        Insert or update an account keyed by (company_id, revolut_account_id)

        Returns:
            The stored account
        """
        pass

    @abstractmethod
    async def get_id_map(self, company_id: str) -> Dict[str, str]:
        """
        Map Revolut account ids to local account ids for a company
        """
        pass

    @abstractmethod
    async def list_by_company(self, company_id: str) -> List[RevolutAccount]:
        """Mirrored accounts of a company, ordered by currency then name"""
        pass

    @abstractmethod
    async def delete_by_company_id(self, company_id: str) -> int:
        """Remove all mirrored accounts of a company; returns the count"""
        pass


class RevolutTransactionRepository(ABC):

    @abstractmethod
    async def upsert(self, transaction: RevolutTransaction) -> RevolutTransaction:
        """
        Insert or update a transaction keyed by (company_id, revolut_transaction_id)

        Returns:
            The stored transaction
        """
        pass

    @abstractmethod
    async def list_by_company(
        self, company_id: str, limit: int = 50, offset: int = 0
    ) -> List[RevolutTransaction]:
        """
        Retrieve a company's transactions, newest transaction_date first

        Args:
            company_id: Company identifier
            limit: Maximum number of rows
            offset: Offset for pagination
        """
        pass

    @abstractmethod
    async def count_by_company(self, company_id: str) -> int:
        pass

    @abstractmethod
    async def delete_by_company_id(self, company_id: str) -> int:
        """Remove all mirrored transactions of a company; returns the count"""
        pass


class RevolutSyncLogRepository(ABC):

    @abstractmethod
    async def get_by_id(self, log_id: str) -> Optional[RevolutSyncLog]:
        pass

    @abstractmethod
    async def create(self, log: RevolutSyncLog) -> RevolutSyncLog:
        pass

    @abstractmethod
    async def update(self, log: RevolutSyncLog) -> RevolutSyncLog:
        pass
