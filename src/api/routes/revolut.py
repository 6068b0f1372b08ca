"""Revolut Business API Routes

OAuth connect/disconnect, connection status, mirrored transactions and the
sync job entry point.
"""

import logging
from typing import Optional
from urllib.parse import urlencode
from fastapi import APIRouter, Body, Cookie, Depends, Query, status
from fastapi.responses import RedirectResponse
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.dependencies import (
    get_auth_context,
    get_banking_client,
    get_token_cipher,
    verify_cron_secret,
)
from src.api.error import ClientError
from src.api.schemas.revolut_request import DisconnectRequestSchema, SyncRequestSchema
from src.app.errors import ErrorCode
from src.app.services.banking_client import BankingClient
from src.app.services.token_cipher import TokenCipher
from src.app.use_cases.access import AuthContext
from src.app.use_cases.banking import (
    StartRevolutAuthorization,
    CompleteRevolutAuthorization,
    DisconnectRevolut,
    GetRevolutStatus,
    ListRevolutTransactions,
    SyncRevolutConnection,
    SyncRevolutTransactions,
    CompleteAuthorizationCommandDTO,
    DisconnectResponseDTO,
    RevolutStatusResponseDTO,
    ListRevolutTransactionsResponseDTO,
    RevolutSyncRunResultDTO,
)
from src.adapter.repositories import (
    SqlAlchemyRevolutAccountRepository,
    SqlAlchemyRevolutConnectionRepository,
    SqlAlchemyRevolutSyncLogRepository,
    SqlAlchemyRevolutTransactionRepository,
)
from src.adapter.services.token_cipher import generate_oauth_state
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/revolut", tags=["Revolut"])

STATE_COOKIE = "revolut_oauth_state"
COMPANY_COOKIE = "revolut_oauth_company"
OAUTH_COOKIE_MAX_AGE = 600

CALLBACK_ERRORS = {
    ErrorCode.VALIDATION_ERROR: "invalid_callback",
    ErrorCode.STATE_MISMATCH: "state_mismatch",
    ErrorCode.BANKING_ERROR: "callback_failed",
    ErrorCode.PERSISTENCE_ERROR: "storage_failed",
}


def _settings_redirect(**params: str) -> RedirectResponse:
    query = urlencode({"tab": "integrations", **params})
    return RedirectResponse(
        f"{ApplicationConfig.APP_URL}/settings?{query}",
        status_code=status.HTTP_302_FOUND,
    )


@router.get("/auth", status_code=status.HTTP_302_FOUND)
async def start_authorization(
    context: AuthContext = Depends(get_auth_context),
    session: AsyncSession = Depends(get_session),
    banking_client: BankingClient = Depends(get_banking_client),
):
    """
    Redirect the superadmin to the Revolut consent page.

    The OAuth state and company are kept in short-lived HTTP-only cookies
    for the callback. An already connected company is sent back to the
    settings page with `error=already_connected`.
    """
    use_case = StartRevolutAuthorization(
        SqlAlchemyRevolutConnectionRepository(session),
        banking_client,
        ApplicationConfig.REVOLUT_CLIENT_ID,
    )
    result = await use_case.execute(context, generate_oauth_state())

    if result.is_err():
        if result.error.code == ErrorCode.ALREADY_CONNECTED:
            return _settings_redirect(error="already_connected")
        raise ClientError(result.error)

    response = RedirectResponse(result.value.authorization_url, status_code=status.HTTP_302_FOUND)
    cookie_options = dict(
        max_age=OAUTH_COOKIE_MAX_AGE,
        httponly=True,
        secure=not ApplicationConfig.REVOLUT_SANDBOX,
        samesite="lax",
        path="/",
    )
    response.set_cookie(STATE_COOKIE, result.value.state, **cookie_options)
    response.set_cookie(COMPANY_COOKIE, result.value.company_id, **cookie_options)
    return response


@router.get("/callback", status_code=status.HTTP_302_FOUND)
async def complete_authorization(
    code: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None),
    error: Optional[str] = Query(default=None),
    error_description: Optional[str] = Query(default=None),
    revolut_oauth_state: Optional[str] = Cookie(default=None),
    revolut_oauth_company: Optional[str] = Cookie(default=None),
    session: AsyncSession = Depends(get_session),
    banking_client: BankingClient = Depends(get_banking_client),
    cipher: TokenCipher = Depends(get_token_cipher),
):
    """
    OAuth redirect target: store the connection and return to settings.

    Always answers with a redirect to `/settings?tab=integrations`, carrying
    `success=revolut_connected` or an `error` code.
    """
    if error:
        logger.error(f"Revolut OAuth error: {error} {error_description or ''}")
        response = _settings_redirect(error="oauth_denied", message=error_description or error)
    else:
        use_case = CompleteRevolutAuthorization(
            SqlAlchemyUnitOfWork(session),
            SqlAlchemyRevolutConnectionRepository(session),
            banking_client,
            cipher,
        )
        result = await use_case.execute(
            CompleteAuthorizationCommandDTO(
                code=code,
                state=state,
                stored_state=revolut_oauth_state,
                company_id=revolut_oauth_company,
            )
        )

        if result.is_ok():
            response = _settings_redirect(success="revolut_connected")
        elif result.error.code == ErrorCode.STATE_MISMATCH and revolut_oauth_state == state:
            response = _settings_redirect(error="session_expired")
        else:
            response = _settings_redirect(error=CALLBACK_ERRORS.get(result.error.code, "callback_failed"))

    response.delete_cookie(STATE_COOKIE, path="/")
    response.delete_cookie(COMPANY_COOKIE, path="/")
    return response


@router.post("/disconnect", response_model=DisconnectResponseDTO)
async def disconnect(
    request: Optional[DisconnectRequestSchema] = Body(default=None),
    context: AuthContext = Depends(get_auth_context),
    session: AsyncSession = Depends(get_session),
):
    """
    Disconnect Revolut.

    By default tokens are wiped and the connection is marked revoked; with
    `delete_data=true` mirrored accounts and transactions are removed too.
    """
    use_case = DisconnectRevolut(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyRevolutConnectionRepository(session),
        SqlAlchemyRevolutAccountRepository(session),
        SqlAlchemyRevolutTransactionRepository(session),
    )
    result = await use_case.execute(context, delete_data=bool(request and request.delete_data))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/status", response_model=RevolutStatusResponseDTO)
async def connection_status(
    context: AuthContext = Depends(get_auth_context),
    session: AsyncSession = Depends(get_session),
):
    """Connection status and mirrored accounts of the caller's company."""
    use_case = GetRevolutStatus(
        SqlAlchemyRevolutConnectionRepository(session),
        SqlAlchemyRevolutAccountRepository(session),
    )
    result = await use_case.execute(context)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/transactions", response_model=ListRevolutTransactionsResponseDTO)
async def list_transactions(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    context: AuthContext = Depends(get_auth_context),
    session: AsyncSession = Depends(get_session),
):
    """Mirrored bank transactions, newest first (superadmins and accountants)."""
    use_case = ListRevolutTransactions(SqlAlchemyRevolutTransactionRepository(session))
    result = await use_case.execute(context, limit=limit, offset=offset)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/sync",
    response_model=RevolutSyncRunResultDTO,
    dependencies=[Depends(verify_cron_secret)],
)
async def sync_connections(
    request: Optional[SyncRequestSchema] = Body(default=None),
    session: AsyncSession = Depends(get_session),
    banking_client: BankingClient = Depends(get_banking_client),
    cipher: TokenCipher = Depends(get_token_cipher),
):
    """
    Sync accounts and recent transactions of every active connection (cron
    entry point). Requires `Authorization: Bearer <CRON_SECRET>`.
    """
    connection_repo = SqlAlchemyRevolutConnectionRepository(session)

    sync_connection = SyncRevolutConnection(
        SqlAlchemyUnitOfWork(session),
        connection_repo,
        SqlAlchemyRevolutAccountRepository(session),
        SqlAlchemyRevolutTransactionRepository(session),
        SqlAlchemyRevolutSyncLogRepository(session),
        banking_client,
        cipher,
        sync_days=ApplicationConfig.REVOLUT_SYNC_DAYS,
    )
    use_case = SyncRevolutTransactions(connection_repo, sync_connection)
    result = await use_case.execute(request.company_id if request else None)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
