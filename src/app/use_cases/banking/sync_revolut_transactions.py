"""SyncRevolutTransactions Use Case

Batch sync over all active Revolut connections.
"""

import logging
from typing import Optional
from libs.result import Result, Return
from src.app.errors import persistence_error
from src.app.repositories.revolut_repository import RevolutConnectionRepository
from .dtos import ConnectionSyncResultDTO, RevolutSyncRunResultDTO
from .sync_revolut_connection import SyncRevolutConnection

logger = logging.getLogger(__name__)


class SyncRevolutTransactions:
    """
    Use Case: Sync every active connection, one after another

    A failing connection is recorded and the run continues.
    """

    def __init__(
        self,
        connection_repo: RevolutConnectionRepository,
        sync_connection: SyncRevolutConnection,
    ):
        self.connection_repo = connection_repo
        self.sync_connection = sync_connection

    async def execute(self, company_id: Optional[str] = None) -> Result[RevolutSyncRunResultDTO]:
        """
        Args:
            company_id: Restrict the run to one company

        Returns:
            Result[RevolutSyncRunResultDTO]: Per-connection outcomes
        """
        try:
            connections = await self.connection_repo.get_active(company_id)
        except Exception as e:
            logger.error(f"Failed to fetch active Revolut connections: {e}")
            return Return.err(persistence_error("Failed to fetch Revolut connections", e))

        targets = [(connection.id, connection.company_id) for connection in connections]
        logger.info(f"Syncing {len(targets)} Revolut connections")

        summary = RevolutSyncRunResultDTO()

        for connection_id, connection_company_id in targets:
            result = await self.sync_connection.execute(connection_id)

            if result.is_ok():
                item = result.value
                summary.successful += 1
            else:
                item = ConnectionSyncResultDTO(
                    connection_id=connection_id,
                    company_id=connection_company_id,
                    status="error",
                    error=result.error.reason or result.error.message,
                )
                summary.failed += 1

            summary.processed += 1
            summary.results.append(item)

        logger.info(
            f"Revolut sync finished: processed={summary.processed}, "
            f"successful={summary.successful}, failed={summary.failed}"
        )
        return Return.ok(summary)
