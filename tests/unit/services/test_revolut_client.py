"""Unit tests for RevolutClient using httpx.MockTransport"""

import json
import pytest
from datetime import datetime
from decimal import Decimal
from urllib.parse import parse_qs, urlparse

import httpx

from src.adapter.services.revolut_client import (
    PRODUCTION_BASE_URL,
    SANDBOX_AUTH_URL,
    SANDBOX_BASE_URL,
    RevolutClient,
)
from src.app.services.banking_client import BankingApiError


def make_client(handler, sandbox=True):
    return RevolutClient(
        client_id="client_123",
        redirect_uri="http://localhost:3000/api/revolut/callback",
        sandbox=sandbox,
        transport=httpx.MockTransport(handler),
    )


class TestAuthorizationUrl:
    """Test consent URL construction"""

    def test_sandbox_url_contains_oauth_parameters(self):
        """Test all OAuth parameters are present and encoded"""
        client = make_client(lambda request: httpx.Response(200))

        url = client.build_authorization_url("state_abc")

        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        assert url.startswith(SANDBOX_AUTH_URL)
        assert params["client_id"] == ["client_123"]
        assert params["redirect_uri"] == ["http://localhost:3000/api/revolut/callback"]
        assert params["response_type"] == ["code"]
        assert params["state"] == ["state_abc"]
        assert "accounts:read" in params["scope"][0]

    def test_production_base_url(self):
        """Test sandbox flag selects the API host"""
        client = make_client(lambda request: httpx.Response(200), sandbox=False)

        assert client.base_url == PRODUCTION_BASE_URL


@pytest.mark.asyncio
class TestTokenRequests:
    """Test token endpoint calls"""

    async def test_exchange_code_posts_form(self):
        """
        Given: Token endpoint answers with tokens
        When: exchange_code is called
        Then: Form contains grant type, code and client assertion
        """
        # Arrange
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["form"] = parse_qs(request.content.decode())
            return httpx.Response(
                200,
                json={"access_token": "access_1", "refresh_token": "refresh_1", "token_type": "bearer", "expires_in": 2399},
            )

        client = make_client(handler)

        # Act
        tokens = await client.exchange_code("code_xyz")

        # Assert
        assert captured["url"] == f"{SANDBOX_BASE_URL}/auth/token"
        assert captured["form"]["grant_type"] == ["authorization_code"]
        assert captured["form"]["code"] == ["code_xyz"]
        assert captured["form"]["client_id"] == ["client_123"]
        assert tokens.access_token == "access_1"
        assert tokens.refresh_token == "refresh_1"
        assert tokens.expires_in == 2399

    async def test_refresh_without_new_refresh_token(self):
        """
        Given: Refresh answers with an access token only
        When: refresh_access_token is called
        Then: refresh_token is None
        """
        # Arrange
        client = make_client(lambda request: httpx.Response(200, json={"access_token": "access_2", "expires_in": 2400}))

        # Act
        tokens = await client.refresh_access_token("refresh_1")

        # Assert
        assert tokens.access_token == "access_2"
        assert tokens.refresh_token is None

    async def test_token_error_raises_banking_error(self):
        """
        Given: Token endpoint rejects the code
        When: exchange_code is called
        Then: BankingApiError with the status code
        """
        # Arrange
        client = make_client(lambda request: httpx.Response(400, json={"error": "invalid_grant"}))

        # Act & Assert
        with pytest.raises(BankingApiError) as exc_info:
            await client.exchange_code("bad")

        assert exc_info.value.status_code == 400
        assert "invalid_grant" in str(exc_info.value)

    async def test_network_error_raises_banking_error(self):
        """
        Given: Connection fails
        When: exchange_code is called
        Then: BankingApiError without status code
        """
        # Arrange
        def handler(request):
            raise httpx.ConnectError("connection refused")

        client = make_client(handler)

        # Act & Assert
        with pytest.raises(BankingApiError) as exc_info:
            await client.exchange_code("code")

        assert exc_info.value.status_code is None


@pytest.mark.asyncio
class TestDataRequests:
    """Test account and transaction calls"""

    async def test_get_accounts_sends_bearer_token(self):
        """
        Given: Accounts endpoint returns two accounts
        When: get_accounts is called
        Then: Accounts parsed, bearer header sent
        """
        # Arrange
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["Authorization"] == "Bearer access_1"
            assert request.url.path.endswith("/accounts")
            return httpx.Response(
                200,
                json=[
                    {"id": "acc_eur", "name": "Main", "balance": 1200.5, "currency": "EUR", "state": "active"},
                    {"id": "acc_usd", "name": "USD", "balance": 0, "currency": "USD", "state": "active"},
                ],
            )

        client = make_client(handler)

        # Act
        accounts = await client.get_accounts("access_1")

        # Assert
        assert [account.id for account in accounts] == ["acc_eur", "acc_usd"]
        assert accounts[0].balance == Decimal("1200.5")

    async def test_get_transactions_passes_from_and_count(self):
        """
        Given: Transactions endpoint returns one card payment
        When: get_transactions is called
        Then: from/count query sent, legs and card parsed
        """
        # Arrange
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["params"] = dict(request.url.params)
            return httpx.Response(
                200,
                content=json.dumps([
                    {
                        "id": "tx_1",
                        "type": "card_payment",
                        "state": "completed",
                        "created_at": "2025-03-01T10:00:00Z",
                        "completed_at": "2025-03-01T10:00:05Z",
                        "legs": [
                            {"leg_id": "leg_1", "account_id": "acc_eur", "amount": -12.5, "currency": "EUR", "description": "Coffee"}
                        ],
                        "merchant": {"name": "Cafe", "city": "Vienna", "category_code": "5814", "country": "AT"},
                        "card": {"card_number": "459678******1234"},
                    }
                ]),
            )

        client = make_client(handler)

        # Act
        transactions = await client.get_transactions("access_1", datetime(2025, 2, 1), count=500)

        # Assert
        assert captured["params"] == {"from": "2025-02-01T00:00:00", "count": "500"}
        transaction = transactions[0]
        assert transaction.legs[0].amount == Decimal("-12.5")
        assert transaction.merchant.name == "Cafe"
        assert transaction.card.card_number.endswith("1234")

    async def test_api_error_raises_banking_error(self):
        """
        Given: Token is rejected
        When: get_accounts is called
        Then: BankingApiError with 401
        """
        # Arrange
        client = make_client(lambda request: httpx.Response(401, text="unauthorized"))

        # Act & Assert
        with pytest.raises(BankingApiError) as exc_info:
            await client.get_accounts("expired")

        assert exc_info.value.status_code == 401
