"""Request-scoped dependencies shared by the routers"""

import secrets
from typing import Optional
from fastapi import Depends, Header
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.repositories.company_member_repository import SqlAlchemyCompanyMemberRepository
from src.adapter.services.revolut_client import RevolutClient
from src.adapter.services.token_cipher import AesCbcTokenCipher
from src.api.error import ClientError
from src.app.errors import ErrorCode
from src.app.services.banking_client import BankingClient
from src.app.services.token_cipher import TokenCipher
from src.app.use_cases.access import AuthContext, AuthorizeMember
from src.depends import get_session


async def get_auth_context(
    x_user_id: Optional[str] = Header(default=None),
    session: AsyncSession = Depends(get_session),
) -> AuthContext:
    """
    Resolve the caller from the X-User-Id header set by the gateway

    Raises:
        ClientError: 401 without a user, 403 without an active membership
    """
    use_case = AuthorizeMember(SqlAlchemyCompanyMemberRepository(session))
    result = await use_case.execute(x_user_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


async def verify_cron_secret(authorization: Optional[str] = Header(default=None)) -> None:
    """
    Guard for job endpoints: require "Authorization: Bearer <CRON_SECRET>"

    An empty CRON_SECRET disables the endpoints.
    """
    expected = ApplicationConfig.CRON_SECRET
    scheme, _, token = (authorization or "").partition(" ")

    if not expected or scheme.lower() != "bearer" or not secrets.compare_digest(token, expected):
        raise ClientError(
            Error(
                code=ErrorCode.UNAUTHORIZED,
                message="Invalid or missing job credentials",
                reason="Bearer token does not match CRON_SECRET",
            )
        )


def get_banking_client() -> BankingClient:
    return RevolutClient(
        client_id=ApplicationConfig.REVOLUT_CLIENT_ID,
        redirect_uri=ApplicationConfig.REVOLUT_REDIRECT_URI,
        sandbox=ApplicationConfig.REVOLUT_SANDBOX,
    )


def get_token_cipher() -> TokenCipher:
    if not ApplicationConfig.REVOLUT_ENCRYPTION_KEY:
        raise ClientError(
            Error(
                code=ErrorCode.NOT_CONFIGURED,
                message="Revolut integration is not configured",
                reason="REVOLUT_ENCRYPTION_KEY is empty",
            )
        )
    return AesCbcTokenCipher(ApplicationConfig.REVOLUT_ENCRYPTION_KEY)
