"""Revolut Sync Background Worker

Mirrors accounts and recent transactions of all active Revolut connections.
Recommended schedule: every 6 hours.
"""

import asyncio
import logging
import time
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.revolut_repository import (
    SqlAlchemyRevolutAccountRepository,
    SqlAlchemyRevolutConnectionRepository,
    SqlAlchemyRevolutSyncLogRepository,
    SqlAlchemyRevolutTransactionRepository,
)
from src.adapter.services.revolut_client import RevolutClient
from src.adapter.services.token_cipher import AesCbcTokenCipher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.banking_client import BankingClient
from src.app.services.token_cipher import TokenCipher
from src.app.use_cases.banking import (
    RevolutSyncRunResultDTO,
    SyncRevolutConnection,
    SyncRevolutTransactions,
)

logger = logging.getLogger(__name__)


class RevolutSyncWorker:
    """
    Background worker for Revolut Business sync

    Usage:
        worker = RevolutSyncWorker()
        result = await worker.run_once()

        # Only one company
        result = await worker.run_once(company_id="...")
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        banking_client: Optional[BankingClient] = None,
        cipher: Optional[TokenCipher] = None,
        sync_days: Optional[int] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            banking_client: Client to use (defaults to RevolutClient from config)
            cipher: Token cipher (defaults to AES with REVOLUT_ENCRYPTION_KEY)
            sync_days: Transaction window in days (defaults to REVOLUT_SYNC_DAYS)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.banking_client = banking_client or RevolutClient(
            client_id=ApplicationConfig.REVOLUT_CLIENT_ID,
            redirect_uri=ApplicationConfig.REVOLUT_REDIRECT_URI,
            sandbox=ApplicationConfig.REVOLUT_SANDBOX,
        )
        self.cipher = cipher
        self.sync_days = sync_days or ApplicationConfig.REVOLUT_SYNC_DAYS

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("RevolutSyncWorker initialized")

    def _get_cipher(self) -> TokenCipher:
        if self.cipher is None:
            self.cipher = AesCbcTokenCipher(ApplicationConfig.REVOLUT_ENCRYPTION_KEY)
        return self.cipher

    async def run_once(self, company_id: Optional[str] = None) -> RevolutSyncRunResultDTO:
        """
        Sync every active connection once

        Args:
            company_id: Restrict to one company

        Returns:
            RevolutSyncRunResultDTO with per-connection outcomes
        """
        start_time = time.time()
        cipher = self._get_cipher()

        async with self.async_session_factory() as session:
            connection_repo = SqlAlchemyRevolutConnectionRepository(session)
            sync_connection = SyncRevolutConnection(
                SqlAlchemyUnitOfWork(session),
                connection_repo,
                SqlAlchemyRevolutAccountRepository(session),
                SqlAlchemyRevolutTransactionRepository(session),
                SqlAlchemyRevolutSyncLogRepository(session),
                self.banking_client,
                cipher,
                sync_days=self.sync_days,
            )
            use_case = SyncRevolutTransactions(connection_repo, sync_connection)
            result = await use_case.execute(company_id)

        if result.is_err():
            logger.error(f"Revolut sync run failed: {result.error.message} ({result.error.reason})")
            return RevolutSyncRunResultDTO(success=False)

        execution_time_ms = int((time.time() - start_time) * 1000)
        summary = result.value
        logger.info(
            f"Revolut sync complete: {summary.successful}/{summary.processed} connections, "
            f"{execution_time_ms}ms"
        )
        return summary

    async def run_forever(self, interval_seconds: Optional[int] = None):
        """
        Sync continuously

        Args:
            interval_seconds: Seconds between runs (default: REVOLUT_SYNC_INTERVAL_SECONDS)
        """
        interval_seconds = interval_seconds or ApplicationConfig.REVOLUT_SYNC_INTERVAL_SECONDS
        logger.info(f"Starting continuous Revolut sync with {interval_seconds}s interval")

        while True:
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Revolut sync cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("RevolutSyncWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        python -m src.worker.revolut_sync
        python -m src.worker.revolut_sync --company-id <uuid>
        python -m src.worker.revolut_sync --continuous
    """
    import argparse

    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Revolut Sync Worker")
    parser.add_argument("--company-id", help="Only sync this company")
    parser.add_argument("--continuous", action="store_true", help="Run continuously")
    args = parser.parse_args()

    if not ApplicationConfig.REVOLUT_SYNC_ENABLED:
        logger.info("Revolut sync is disabled (REVOLUT_SYNC_ENABLED=false)")
        return

    worker = RevolutSyncWorker()

    try:
        if args.continuous:
            await worker.run_forever()
        else:
            result = await worker.run_once(company_id=args.company_id)
            print("Revolut sync complete:")
            print(f"  Processed: {result.processed}")
            print(f"  Successful: {result.successful}")
            print(f"  Failed: {result.failed}")
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
