"""GetRevolutStatus Use Case"""

from libs.result import Result, Return
from src.app.errors import persistence_error
from src.app.repositories.revolut_repository import (
    RevolutAccountRepository,
    RevolutConnectionRepository,
)
from src.app.use_cases.access import AuthContext
from src.domain.revolut import ConnectionStatus
from .dtos import RevolutAccountDTO, RevolutStatusResponseDTO, to_connection_dto


class GetRevolutStatus:
    """
    Use Case: Connection status of the caller's company (any member may read it)

    Mirrored accounts with their last synced balances are included.
    """

    def __init__(
        self,
        connection_repo: RevolutConnectionRepository,
        account_repo: RevolutAccountRepository,
    ):
        self.connection_repo = connection_repo
        self.account_repo = account_repo

    async def execute(self, context: AuthContext) -> Result[RevolutStatusResponseDTO]:
        try:
            connection = await self.connection_repo.get_by_company_id(context.company_id)
            if not connection:
                return Return.ok(RevolutStatusResponseDTO(connected=False))

            accounts = await self.account_repo.list_by_company(context.company_id)
        except Exception as e:
            return Return.err(persistence_error("Failed to look up Revolut connection", e))

        return Return.ok(
            RevolutStatusResponseDTO(
                connected=connection.status == ConnectionStatus.ACTIVE,
                connection=to_connection_dto(connection),
                accounts=[
                    RevolutAccountDTO(
                        id=account.id,
                        revolut_account_id=account.revolut_account_id,
                        name=account.name,
                        currency=account.currency,
                        balance=account.balance,
                        state=account.state,
                        balance_updated_at=account.balance_updated_at,
                    )
                    for account in accounts
                ],
            )
        )
