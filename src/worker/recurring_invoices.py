"""Recurring Invoice Background Worker

Issues draft invoices for all due recurring templates.
Can be run as a standalone script (e.g. from a daily cron) or continuously.
"""

import asyncio
import logging
import time
from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.document_line_repository import SqlAlchemyDocumentLineRepository
from src.adapter.repositories.document_repository import SqlAlchemyDocumentRepository
from src.adapter.repositories.recurring_line_repository import SqlAlchemyRecurringLineRepository
from src.adapter.repositories.recurring_template_repository import SqlAlchemyRecurringTemplateRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.invoice_materializer import InvoiceMaterializer
from src.app.use_cases.recurring import ProcessRecurringInvoices, RecurringRunResultDTO

logger = logging.getLogger(__name__)


class RecurringInvoiceWorker:
    """
    Background worker for recurring invoices

    Features:
    - Selects active templates with next_issue_date <= today
    - Creates one draft invoice per due template and advances its schedule
    - One failing template never stops the run
    - Safe to run concurrently: a template advanced by another run is skipped

    Usage:
        worker = RecurringInvoiceWorker()
        result = await worker.run_once()

        # Run continuously (daily by default)
        await worker.run_forever()
    """

    def __init__(self, db_uri: Optional[str] = None):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("RecurringInvoiceWorker initialized")

    async def run_once(self, today: Optional[date] = None) -> RecurringRunResultDTO:
        """
        Run one sweep over the due templates

        Args:
            today: Reference date (defaults to date.today())

        Returns:
            RecurringRunResultDTO with per-template outcomes
        """
        start_time = time.time()

        async with self.async_session_factory() as session:
            uow = SqlAlchemyUnitOfWork(session)
            materializer = InvoiceMaterializer(
                uow,
                SqlAlchemyDocumentRepository(session),
                SqlAlchemyDocumentLineRepository(session),
            )
            use_case = ProcessRecurringInvoices(
                uow,
                SqlAlchemyRecurringTemplateRepository(session),
                SqlAlchemyRecurringLineRepository(session),
                materializer,
            )
            result = await use_case.execute(today)

        if result.is_err():
            logger.error(f"Recurring invoice run failed: {result.error.message} ({result.error.reason})")
            return RecurringRunResultDTO()

        execution_time_ms = int((time.time() - start_time) * 1000)
        summary = result.value
        logger.info(
            f"Recurring invoice run complete: {summary.successful}/{summary.processed} created, "
            f"{summary.failed} failed, {summary.skipped} skipped, {execution_time_ms}ms"
        )
        return summary

    async def run_forever(self, interval_seconds: Optional[int] = None):
        """
        Run sweeps continuously

        Args:
            interval_seconds: Seconds between runs (default: RECURRING_INTERVAL_SECONDS)
        """
        interval_seconds = interval_seconds or ApplicationConfig.RECURRING_INTERVAL_SECONDS
        logger.info(f"Starting continuous recurring invoice worker with {interval_seconds}s interval")

        while True:
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Recurring invoice cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("RecurringInvoiceWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once for today
        python -m src.worker.recurring_invoices

        # Run as of a given date
        python -m src.worker.recurring_invoices --date 2025-02-28

        # Run continuously
        python -m src.worker.recurring_invoices --continuous
    """
    import argparse

    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Recurring Invoice Worker")
    parser.add_argument("--date", type=date.fromisoformat, help="Reference date (YYYY-MM-DD)")
    parser.add_argument("--continuous", action="store_true", help="Run continuously")
    args = parser.parse_args()

    if not ApplicationConfig.RECURRING_INVOICES_ENABLED:
        logger.info("Recurring invoices are disabled (RECURRING_INVOICES_ENABLED=false)")
        return

    worker = RecurringInvoiceWorker()

    try:
        if args.continuous:
            await worker.run_forever()
        else:
            result = await worker.run_once(today=args.date)
            print("Recurring invoice run complete:")
            print(f"  Processed: {result.processed}")
            print(f"  Successful: {result.successful}")
            print(f"  Failed: {result.failed}")
            print(f"  Skipped: {result.skipped}")
            for item in result.results:
                if item.status != "created":
                    print(f"  - {item.template_id}: {item.status} {item.error or ''}")
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
