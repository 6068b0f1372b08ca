"""SQLAlchemy Revolut Repository Implementations

Upserts select the existing row by its natural key and update it in place,
which keeps them portable across PostgreSQL and SQLite.
"""

from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy import delete
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.revolut_repository import (
    RevolutConnectionRepository,
    RevolutAccountRepository,
    RevolutTransactionRepository,
    RevolutSyncLogRepository,
)
from src.domain.revolut import (
    ConnectionStatus,
    RevolutConnection,
    RevolutAccount,
    RevolutTransaction,
    RevolutSyncLog,
)

ACCOUNT_SYNC_FIELDS = ("connection_id", "name", "currency", "balance", "state", "balance_updated_at")

TRANSACTION_SYNC_FIELDS = (
    "account_id",
    "revolut_leg_id",
    "type",
    "state",
    "amount",
    "currency",
    "balance_after",
    "counterparty_name",
    "counterparty_account_id",
    "counterparty_account_type",
    "reference",
    "description",
    "merchant_name",
    "merchant_category_code",
    "merchant_city",
    "merchant_country",
    "card_last_four",
    "transaction_date",
    "created_at_revolut",
    "completed_at_revolut",
)


class SqlAlchemyRevolutConnectionRepository(RevolutConnectionRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, connection_id: str) -> Optional[RevolutConnection]:
        statement = select(RevolutConnection).where(RevolutConnection.id == connection_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_company_id(self, company_id: str) -> Optional[RevolutConnection]:
        statement = select(RevolutConnection).where(RevolutConnection.company_id == company_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_active(self, company_id: Optional[str] = None) -> List[RevolutConnection]:
        statement = select(RevolutConnection).where(RevolutConnection.status == ConnectionStatus.ACTIVE)

        if company_id:
            statement = statement.where(RevolutConnection.company_id == company_id)

        statement = statement.order_by(RevolutConnection.connected_at)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create(self, connection: RevolutConnection) -> RevolutConnection:
        self.session.add(connection)
        await self.session.flush()
        await self.session.refresh(connection)
        return connection

    async def update(self, connection: RevolutConnection) -> RevolutConnection:
        connection.updated_at = datetime.utcnow()
        self.session.add(connection)
        await self.session.flush()
        await self.session.refresh(connection)
        return connection

    async def delete_by_company_id(self, company_id: str) -> None:
        await self.session.execute(
            delete(RevolutConnection).where(RevolutConnection.company_id == company_id)
        )
        await self.session.flush()


class SqlAlchemyRevolutAccountRepository(RevolutAccountRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert(self, account: RevolutAccount) -> RevolutAccount:
        """
        Insert or update by (company_id, revolut_account_id)

        Args:
            account: Account built from the API payload

        Returns:
            The stored row (existing rows keep their local id)
        """
        statement = (
            select(RevolutAccount)
            .where(RevolutAccount.company_id == account.company_id)
            .where(RevolutAccount.revolut_account_id == account.revolut_account_id)
        )
        result = await self.session.execute(statement)
        existing = result.scalar_one_or_none()

        if existing:
            for field in ACCOUNT_SYNC_FIELDS:
                setattr(existing, field, getattr(account, field))
            existing.updated_at = datetime.utcnow()
            account = existing

        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def get_id_map(self, company_id: str) -> Dict[str, str]:
        statement = (
            select(RevolutAccount.revolut_account_id, RevolutAccount.id)
            .where(RevolutAccount.company_id == company_id)
        )
        result = await self.session.execute(statement)
        return {row.revolut_account_id: row.id for row in result.all()}

    async def list_by_company(self, company_id: str) -> List[RevolutAccount]:
        statement = (
            select(RevolutAccount)
            .where(RevolutAccount.company_id == company_id)
            .order_by(RevolutAccount.currency, RevolutAccount.name)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def delete_by_company_id(self, company_id: str) -> int:
        result = await self.session.execute(
            delete(RevolutAccount).where(RevolutAccount.company_id == company_id)
        )
        await self.session.flush()
        return result.rowcount


class SqlAlchemyRevolutTransactionRepository(RevolutTransactionRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert(self, transaction: RevolutTransaction) -> RevolutTransaction:
        """Insert or update by (company_id, revolut_transaction_id)"""
        statement = (
            select(RevolutTransaction)
            .where(RevolutTransaction.company_id == transaction.company_id)
            .where(RevolutTransaction.revolut_transaction_id == transaction.revolut_transaction_id)
        )
        result = await self.session.execute(statement)
        existing = result.scalar_one_or_none()

        if existing:
            for field in TRANSACTION_SYNC_FIELDS:
                setattr(existing, field, getattr(transaction, field))
            existing.updated_at = datetime.utcnow()
            transaction = existing

        self.session.add(transaction)
        await self.session.flush()
        await self.session.refresh(transaction)
        return transaction

    async def list_by_company(
        self, company_id: str, limit: int = 50, offset: int = 0
    ) -> List[RevolutTransaction]:
        statement = (
            select(RevolutTransaction)
            .where(RevolutTransaction.company_id == company_id)
            .order_by(RevolutTransaction.transaction_date.desc(), RevolutTransaction.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_by_company(self, company_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(RevolutTransaction)
            .where(RevolutTransaction.company_id == company_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def delete_by_company_id(self, company_id: str) -> int:
        result = await self.session.execute(
            delete(RevolutTransaction).where(RevolutTransaction.company_id == company_id)
        )
        await self.session.flush()
        return result.rowcount


class SqlAlchemyRevolutSyncLogRepository(RevolutSyncLogRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, log_id: str) -> Optional[RevolutSyncLog]:
        statement = select(RevolutSyncLog).where(RevolutSyncLog.id == log_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def create(self, log: RevolutSyncLog) -> RevolutSyncLog:
        self.session.add(log)
        await self.session.flush()
        await self.session.refresh(log)
        return log

    async def update(self, log: RevolutSyncLog) -> RevolutSyncLog:
        self.session.add(log)
        await self.session.flush()
        await self.session.refresh(log)
        return log
