"""Revolut Business API Client

httpx implementation of BankingClient.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode
import httpx
from pydantic import TypeAdapter
from src.app.services.banking_client import (
    BankAccount,
    BankingApiError,
    BankingClient,
    BankTransaction,
    OAuthTokens,
)

logger = logging.getLogger(__name__)

SANDBOX_BASE_URL = "https://sandbox-b2b.revolut.com/api/1.0"
PRODUCTION_BASE_URL = "https://b2b.revolut.com/api/1.0"
SANDBOX_AUTH_URL = "https://sandbox-business.revolut.com/app-confirm"
PRODUCTION_AUTH_URL = "https://business.revolut.com/app-confirm"

OAUTH_SCOPE = "accounts:read transactions:read payments:write"
CLIENT_ASSERTION_TYPE = "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"


class RevolutClient(BankingClient):
    """
    Revolut Business API client

    A new httpx.AsyncClient is opened per call. Pass transport to route
    requests elsewhere (e.g. httpx.MockTransport in tests).

    The client assertion sent to the token endpoint is the client id, which
    the sandbox accepts; production requires a signed JWT.
    """

    def __init__(
        self,
        client_id: str,
        redirect_uri: str,
        sandbox: bool = True,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.redirect_uri = redirect_uri
        self.sandbox = sandbox
        self.timeout = timeout
        self.transport = transport

    @property
    def base_url(self) -> str:
        return SANDBOX_BASE_URL if self.sandbox else PRODUCTION_BASE_URL

    @property
    def auth_url(self) -> str:
        return SANDBOX_AUTH_URL if self.sandbox else PRODUCTION_AUTH_URL

    def build_authorization_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": OAUTH_SCOPE,
            "state": state,
        }
        return f"{self.auth_url}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> OAuthTokens:
        return await self._token_request(
            {"grant_type": "authorization_code", "code": code}
        )

    async def refresh_access_token(self, refresh_token: str) -> OAuthTokens:
        return await self._token_request(
            {"grant_type": "refresh_token", "refresh_token": refresh_token}
        )

    async def get_accounts(self, access_token: str) -> List[BankAccount]:
        payload = await self._request("GET", "/accounts", access_token)
        return TypeAdapter(List[BankAccount]).validate_python(payload)

    async def get_transactions(
        self, access_token: str, from_date: datetime, count: int = 1000
    ) -> List[BankTransaction]:
        params = {"from": from_date.isoformat(), "count": str(count)}
        payload = await self._request("GET", "/transactions", access_token, params=params)
        return TypeAdapter(List[BankTransaction]).validate_python(payload)

    async def _token_request(self, data: Dict[str, str]) -> OAuthTokens:
        form = {
            **data,
            "client_id": self.client_id,
            "client_assertion_type": CLIENT_ASSERTION_TYPE,
            "client_assertion": self.client_id,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(f"{self.base_url}/auth/token", data=form)
        except httpx.HTTPError as e:
            raise BankingApiError(f"Token request failed: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Revolut token request failed ({response.status_code}): {response.text}")
            raise BankingApiError(
                f"Token request failed: {response.text}", status_code=response.status_code
            )

        return OAuthTokens.model_validate(response.json())

    async def _request(
        self,
        method: str,
        path: str,
        access_token: str,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(
                    method, f"{self.base_url}{path}", headers=headers, params=params
                )
        except httpx.HTTPError as e:
            raise BankingApiError(f"Revolut API request {method} {path} failed: {e}") from e

        if response.status_code >= 400:
            raise BankingApiError(
                f"Revolut API error {response.status_code} on {method} {path}: {response.text}",
                status_code=response.status_code,
            )

        return response.json()
