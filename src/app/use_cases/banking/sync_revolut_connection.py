"""SyncRevolutConnection Use Case

Mirrors the accounts and recent transactions of one Revolut connection.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, Optional
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, not_found, persistence_error
from src.app.repositories.revolut_repository import (
    RevolutAccountRepository,
    RevolutConnectionRepository,
    RevolutSyncLogRepository,
    RevolutTransactionRepository,
)
from src.app.services.banking_client import BankingClient, BankTransaction
from src.app.services.token_cipher import TokenCipher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.revolut import (
    ConnectionStatus,
    RevolutAccount,
    RevolutConnection,
    RevolutSyncLog,
    RevolutTransaction,
    SyncStatus,
)
from .dtos import ConnectionSyncResultDTO

logger = logging.getLogger(__name__)

TOKEN_EXPIRY_MARGIN = timedelta(minutes=5)


class AccessTokenExpiredError(Exception):
    """The access token is (nearly) expired and could not be refreshed"""
    pass


class SyncRevolutConnection:
    """
    Use Case: Sync one connection (service level, no caller)

    Business Rules:
    1. Every run is recorded in the sync log (syncing -> completed/failed)
    2. An access token expiring within 5 minutes is refreshed first; if that
       fails the connection is marked expired
    3. Accounts are upserted on (company, revolut_account_id)
    4. Transactions of the last sync_days are upserted on
       (company, revolut_transaction_id); the first leg decides the account,
       transactions on unknown accounts are skipped
    5. The connection's last_sync_* fields reflect the outcome

    Flow:
    1. Open sync log (committed on its own)
    2. Obtain access token
    3. Upsert accounts, build account map
    4. Upsert transactions
    5. Close sync log, stamp connection, commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        connection_repo: RevolutConnectionRepository,
        account_repo: RevolutAccountRepository,
        transaction_repo: RevolutTransactionRepository,
        sync_log_repo: RevolutSyncLogRepository,
        banking_client: BankingClient,
        cipher: TokenCipher,
        sync_days: int = 30,
    ):
        self.uow = uow
        self.connection_repo = connection_repo
        self.account_repo = account_repo
        self.transaction_repo = transaction_repo
        self.sync_log_repo = sync_log_repo
        self.banking_client = banking_client
        self.cipher = cipher
        self.sync_days = sync_days

    async def execute(self, connection_id: str, now: Optional[datetime] = None) -> Result[ConnectionSyncResultDTO]:
        """
        Execute the sync

        Args:
            connection_id: Connection to sync
            now: Reference time (defaults to datetime.utcnow())

        Returns:
            Result[ConnectionSyncResultDTO]: Sync counts, or BANKING_ERROR with
            the failure message
        """
        now = now or datetime.utcnow()

        try:
            connection = await self.connection_repo.get_by_id(connection_id)
            if not connection:
                return Return.err(not_found(f"Revolut connection {connection_id} not found"))

            company_id = connection.company_id
            sync_log = await self.sync_log_repo.create(
                RevolutSyncLog(
                    company_id=company_id,
                    connection_id=connection_id,
                    sync_type="full",
                    status=SyncStatus.SYNCING,
                    started_at=now,
                )
            )
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            return Return.err(persistence_error("Failed to open Revolut sync log", e))

        sync_log_id = sync_log.id

        try:
            access_token = await self._get_access_token(connection, now)

            # Accounts
            accounts = await self.banking_client.get_accounts(access_token)
            for account in accounts:
                await self.account_repo.upsert(
                    RevolutAccount(
                        company_id=company_id,
                        connection_id=connection_id,
                        revolut_account_id=account.id,
                        name=account.name,
                        currency=account.currency,
                        balance=account.balance,
                        state=account.state,
                        balance_updated_at=now,
                    )
                )

            account_map = await self.account_repo.get_id_map(company_id)

            # Transactions
            transactions = await self.banking_client.get_transactions(
                access_token, now - timedelta(days=self.sync_days)
            )
            transactions_synced = 0
            for transaction in transactions:
                record = self._to_record(transaction, company_id, account_map)
                if record is None:
                    continue
                await self.transaction_repo.upsert(record)
                transactions_synced += 1

            finished_at = datetime.utcnow()
            sync_log.status = SyncStatus.COMPLETED
            sync_log.records_fetched = len(accounts) + len(transactions)
            sync_log.records_created = len(accounts) + transactions_synced
            sync_log.completed_at = finished_at
            sync_log.duration_ms = int((finished_at - now).total_seconds() * 1000)
            await self.sync_log_repo.update(sync_log)

            connection.last_sync_at = finished_at
            connection.last_sync_status = SyncStatus.COMPLETED
            connection.last_sync_error = None
            await self.connection_repo.update(connection)

            await self.uow.commit()

            logger.info(
                f"Synced Revolut connection {connection_id}: {len(accounts)} accounts, "
                f"{transactions_synced} transactions"
            )

            return Return.ok(
                ConnectionSyncResultDTO(
                    connection_id=connection_id,
                    company_id=company_id,
                    status="success",
                    accounts_synced=len(accounts),
                    transactions_synced=transactions_synced,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            message = str(e) or e.__class__.__name__
            logger.error(f"Revolut sync failed for connection {connection_id}: {message}")
            await self._record_failure(connection_id, sync_log_id, message, isinstance(e, AccessTokenExpiredError))
            return Return.err(
                Error(code=ErrorCode.BANKING_ERROR, message="Revolut sync failed", reason=message)
            )

    async def _get_access_token(self, connection: RevolutConnection, now: datetime) -> str:
        """Decrypt the access token, refreshing it first when it is about to expire"""
        if connection.access_token_expires_at - now >= TOKEN_EXPIRY_MARGIN:
            return self.cipher.decrypt(connection.access_token_encrypted)

        if not connection.refresh_token_encrypted:
            raise AccessTokenExpiredError("Access token expired")

        try:
            refresh_token = self.cipher.decrypt(connection.refresh_token_encrypted)
            tokens = await self.banking_client.refresh_access_token(refresh_token)
        except Exception as e:
            raise AccessTokenExpiredError(f"Access token expired and refresh failed: {e}") from e

        connection.access_token_encrypted = self.cipher.encrypt(tokens.access_token)
        if tokens.refresh_token:
            connection.refresh_token_encrypted = self.cipher.encrypt(tokens.refresh_token)
        connection.access_token_expires_at = now + timedelta(seconds=tokens.expires_in)
        connection.updated_at = now
        await self.connection_repo.update(connection)

        logger.info(f"Refreshed Revolut access token for connection {connection.id}")
        return tokens.access_token

    def _to_record(
        self, transaction: BankTransaction, company_id: str, account_map: Dict[str, str]
    ) -> Optional[RevolutTransaction]:
        if not transaction.legs:
            return None

        leg = transaction.legs[0]
        account_id = account_map.get(leg.account_id)
        if not account_id:
            return None

        counterparty = leg.counterparty
        merchant = transaction.merchant
        card_number = transaction.card.card_number if transaction.card else None

        return RevolutTransaction(
            company_id=company_id,
            account_id=account_id,
            revolut_transaction_id=transaction.id,
            revolut_leg_id=leg.leg_id,
            type=transaction.type,
            state=transaction.state,
            amount=leg.amount,
            currency=leg.currency,
            balance_after=leg.balance,
            counterparty_name=counterparty.name if counterparty else None,
            counterparty_account_id=counterparty.account_id if counterparty else None,
            counterparty_account_type=counterparty.account_type if counterparty else None,
            reference=transaction.reference,
            description=leg.description,
            merchant_name=merchant.name if merchant else None,
            merchant_category_code=merchant.category_code if merchant else None,
            merchant_city=merchant.city if merchant else None,
            merchant_country=merchant.country if merchant else None,
            card_last_four=card_number[-4:] if card_number else None,
            transaction_date=transaction.created_at.date(),
            created_at_revolut=transaction.created_at,
            completed_at_revolut=transaction.completed_at,
        )

    async def _record_failure(
        self, connection_id: str, sync_log_id: str, message: str, token_expired: bool
    ) -> None:
        # Entities are reloaded because the rollback expired them
        try:
            sync_log = await self.sync_log_repo.get_by_id(sync_log_id)
            if sync_log:
                sync_log.status = SyncStatus.FAILED
                sync_log.error_message = message
                sync_log.completed_at = datetime.utcnow()
                await self.sync_log_repo.update(sync_log)

            connection = await self.connection_repo.get_by_id(connection_id)
            if connection:
                connection.last_sync_status = SyncStatus.FAILED
                connection.last_sync_error = message
                if token_expired:
                    connection.status = ConnectionStatus.EXPIRED
                await self.connection_repo.update(connection)

            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to record sync failure for connection {connection_id}: {e}")
