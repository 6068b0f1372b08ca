"""StartRevolutAuthorization Use Case

First leg of the Revolut Business OAuth flow.
"""

import logging
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, persistence_error
from src.app.repositories.revolut_repository import RevolutConnectionRepository
from src.app.services.banking_client import BankingClient
from src.app.use_cases.access import AuthContext, require_superadmin
from src.domain.revolut import ConnectionStatus
from .dtos import AuthorizationStartDTO

logger = logging.getLogger(__name__)


class StartRevolutAuthorization:
    """
    Use Case: Build the Revolut consent URL for the caller's company

    Business Rules:
    1. The integration must be configured (client id present)
    2. Only superadmins may connect a bank
    3. A company with an active connection cannot connect again
    """

    def __init__(
        self,
        connection_repo: RevolutConnectionRepository,
        banking_client: BankingClient,
        client_id: str,
    ):
        self.connection_repo = connection_repo
        self.banking_client = banking_client
        self.client_id = client_id

    async def execute(self, context: AuthContext, state: str) -> Result[AuthorizationStartDTO]:
        """
        Args:
            context: Verified caller
            state: Fresh random OAuth state

        Returns:
            Result[AuthorizationStartDTO]: Consent URL and the state to remember
        """
        if not self.client_id:
            return Return.err(
                Error(
                    code=ErrorCode.NOT_CONFIGURED,
                    message="Revolut integration is not configured",
                    reason="REVOLUT_CLIENT_ID is empty",
                )
            )

        error = require_superadmin(context)
        if error:
            return Return.err(error)

        try:
            existing = await self.connection_repo.get_by_company_id(context.company_id)
        except Exception as e:
            return Return.err(persistence_error("Failed to look up Revolut connection", e))

        if existing and existing.status == ConnectionStatus.ACTIVE:
            return Return.err(
                Error(
                    code=ErrorCode.ALREADY_CONNECTED,
                    message="Revolut is already connected",
                    reason="Disconnect first to connect again",
                )
            )

        logger.info(f"Starting Revolut authorization for company {context.company_id}")

        return Return.ok(
            AuthorizationStartDTO(
                authorization_url=self.banking_client.build_authorization_url(state),
                state=state,
                company_id=context.company_id,
            )
        )
