"""CompleteRevolutAuthorization Use Case

OAuth callback: exchange the code and store the encrypted tokens.
"""

import logging
from datetime import datetime, timedelta
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, persistence_error, validation_error
from src.app.repositories.revolut_repository import RevolutConnectionRepository
from src.app.services.banking_client import BankingApiError, BankingClient
from src.app.services.token_cipher import TokenCipher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.revolut import ConnectionStatus, RevolutConnection
from .dtos import CompleteAuthorizationCommandDTO, RevolutConnectionDTO, to_connection_dto

logger = logging.getLogger(__name__)

REFRESH_TOKEN_LIFETIME = timedelta(days=90)


class CompleteRevolutAuthorization:
    """
    Use Case: Finish the OAuth flow and (re)create the company's connection

    Business Rules:
    1. code and state are required
    2. state must equal the state remembered at start
    3. The remembered company id must still be present
    4. Tokens are encrypted before they are stored
    5. Any previous connection of the company is replaced
    6. Refresh tokens are assumed valid for 90 days

    Flow:
    1. Validate callback parameters
    2. Exchange code for tokens
    3. Delete existing connection, insert new one
    4. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        connection_repo: RevolutConnectionRepository,
        banking_client: BankingClient,
        cipher: TokenCipher,
    ):
        self.uow = uow
        self.connection_repo = connection_repo
        self.banking_client = banking_client
        self.cipher = cipher

    async def execute(self, command: CompleteAuthorizationCommandDTO) -> Result[RevolutConnectionDTO]:
        if not command.code or not command.state:
            return Return.err(
                validation_error("Invalid OAuth callback", reason="code and state are required")
            )

        if not command.stored_state or command.stored_state != command.state:
            logger.warning("Revolut OAuth state mismatch")
            return Return.err(
                Error(
                    code=ErrorCode.STATE_MISMATCH,
                    message="OAuth state mismatch",
                    reason="The callback state does not match the started flow",
                )
            )

        if not command.company_id:
            return Return.err(
                Error(
                    code=ErrorCode.STATE_MISMATCH,
                    message="OAuth session expired",
                    reason="Company of the started flow is unknown",
                )
            )

        try:
            tokens = await self.banking_client.exchange_code(command.code)
        except BankingApiError as e:
            logger.error(f"Revolut code exchange failed for company {command.company_id}: {e}")
            return Return.err(
                Error(code=ErrorCode.BANKING_ERROR, message="Failed to exchange authorization code", reason=str(e))
            )

        try:
            now = datetime.utcnow()
            connection = RevolutConnection(
                company_id=command.company_id,
                access_token_encrypted=self.cipher.encrypt(tokens.access_token),
                refresh_token_encrypted=self.cipher.encrypt(tokens.refresh_token) if tokens.refresh_token else "",
                token_type=tokens.token_type or "Bearer",
                access_token_expires_at=now + timedelta(seconds=tokens.expires_in),
                refresh_token_expires_at=now + REFRESH_TOKEN_LIFETIME,
                status=ConnectionStatus.ACTIVE,
                connected_at=now,
            )

            await self.connection_repo.delete_by_company_id(command.company_id)
            connection = await self.connection_repo.create(connection)

            await self.uow.commit()

            logger.info(f"Revolut connected for company {command.company_id}")
            return Return.ok(to_connection_dto(connection))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to store Revolut connection for company {command.company_id}: {e}")
            return Return.err(persistence_error("Failed to store Revolut connection", e))
