"""DisconnectRevolut Use Case"""

import logging
from datetime import datetime
from libs.result import Result, Return
from src.app.errors import not_found, persistence_error
from src.app.repositories.revolut_repository import (
    RevolutAccountRepository,
    RevolutConnectionRepository,
    RevolutTransactionRepository,
)
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import AuthContext, require_superadmin
from src.domain.revolut import ConnectionStatus
from .dtos import DisconnectResponseDTO

logger = logging.getLogger(__name__)


class DisconnectRevolut:
    """
    Use Case: Disconnect the caller's company from Revolut

    Business Rules:
    1. Only superadmins may disconnect
    2. By default the connection is revoked and its tokens wiped; mirrored
       accounts and transactions are kept for history
    3. With delete_data the connection and all mirrored data are removed
    """

    def __init__(
        self,
        uow: UnitOfWork,
        connection_repo: RevolutConnectionRepository,
        account_repo: RevolutAccountRepository,
        transaction_repo: RevolutTransactionRepository,
    ):
        self.uow = uow
        self.connection_repo = connection_repo
        self.account_repo = account_repo
        self.transaction_repo = transaction_repo

    async def execute(self, context: AuthContext, delete_data: bool = False) -> Result[DisconnectResponseDTO]:
        error = require_superadmin(context)
        if error:
            return Return.err(error)

        try:
            connection = await self.connection_repo.get_by_company_id(context.company_id)
            if not connection:
                return Return.err(not_found("No Revolut connection found"))

            if delete_data:
                await self.transaction_repo.delete_by_company_id(context.company_id)
                await self.account_repo.delete_by_company_id(context.company_id)
                await self.connection_repo.delete_by_company_id(context.company_id)
            else:
                connection.status = ConnectionStatus.REVOKED
                connection.disconnected_at = datetime.utcnow()
                connection.access_token_encrypted = ""
                connection.refresh_token_encrypted = ""
                await self.connection_repo.update(connection)

            await self.uow.commit()

            logger.info(
                f"Revolut disconnected for company {context.company_id} (data deleted: {delete_data})"
            )
            return Return.ok(DisconnectResponseDTO(company_id=context.company_id, data_deleted=delete_data))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(persistence_error("Failed to disconnect Revolut", e))
