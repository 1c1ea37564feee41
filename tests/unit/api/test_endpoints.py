"""Unit tests for the HTTP quote service."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from amm_engine.api.endpoints import get_engine
from amm_engine.api.main import app
from tests.helpers import ALICE, LP_USD_YEN, NTD, USD, YEN, make_engine, seed_pool


@pytest.fixture
def engine():
    """Isolated engine so tests never touch the process-wide default."""
    return make_engine(ALICE, tokens=(NTD, USD, YEN))


@pytest.fixture
def client(engine):
    """Create a test client bound to the isolated engine."""
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(engine):
    """USD/YEN Standard pool with reserves (1,000,000, 2,000,000)."""
    return seed_pool(engine, ALICE)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestPools:
    """Tests for pool creation and state."""

    def test_create_pool(self, client):
        response = client.post(
            "/pools",
            json={"tokenA": USD, "tokenB": YEN, "lpMint": LP_USD_YEN, "poolType": 2},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["variant"] == "Concentrated"
        assert data["feeRate"] == 500
        assert data["reserveA"] == 0
        assert data["lpSupply"] == 0
        assert data["spotPrice"] is None

    def test_create_unknown_type(self, client):
        response = client.post(
            "/pools",
            json={"tokenA": USD, "tokenB": YEN, "lpMint": LP_USD_YEN, "poolType": 3},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_pool_type"

    def test_create_duplicate(self, client, seeded):
        response = client.post(
            "/pools",
            json={"tokenA": USD, "tokenB": YEN, "lpMint": "LP_AGAIN", "poolType": 0},
        )
        assert response.status_code == 409
        assert response.json()["error"] == "pool_already_exists"

    def test_create_same_tokens(self, client):
        response = client.post(
            "/pools",
            json={"tokenA": USD, "tokenB": USD, "lpMint": LP_USD_YEN, "poolType": 0},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_token_mint"

    def test_create_invalid_body(self, client):
        response = client.post("/pools", json={"tokenA": USD})
        assert response.status_code == 422

    def test_get_pool(self, client, seeded):
        response = client.get(f"/pools/{USD}/{YEN}")
        assert response.status_code == 200
        data = response.json()
        assert data["reserveA"] == 1_000_000
        assert data["reserveB"] == 2_000_000
        assert data["lpSupply"] == 1_000_000
        assert data["authority"] == seeded.authority
        assert Decimal(data["spotPrice"]) == 2

    def test_get_missing_pool(self, client):
        response = client.get(f"/pools/{USD}/{YEN}")
        assert response.status_code == 404
        assert response.json()["error"] == "pool_not_found"

    def test_list_pools(self, client, seeded):
        response = client.get("/pools")
        assert response.status_code == 200
        pools = response.json()["pools"]
        assert [(p["tokenA"], p["tokenB"]) for p in pools] == [(USD, YEN)]


class TestQuotes:
    """Tests for read-only quotes."""

    def test_swap_quote(self, client, seeded, engine):
        response = client.post(
            f"/pools/{USD}/{YEN}/quote/swap",
            json={"amountIn": "10000", "slippagePercent": "0.5"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["feeAmount"] == 30
        assert data["netAmountIn"] == 9_970
        assert data["amountOut"] == 19_743
        assert data["minimumAmountOut"] == 19_644
        assert data["direction"] == "a_to_b"
        assert Decimal("0.98") < Decimal(data["priceImpact"]) < Decimal("0.99")
        # Quotes never move balances
        assert engine.pool_state(USD, YEN).snapshot.reserve_a == 1_000_000

    def test_swap_quote_slippage(self, client, seeded):
        response = client.post(
            f"/pools/{USD}/{YEN}/quote/swap",
            json={"amountIn": 10_000, "minimumAmountOut": 20_000},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "slippage_exceeded"

    def test_swap_quote_zero_amount(self, client, seeded):
        response = client.post(f"/pools/{USD}/{YEN}/quote/swap", json={"amountIn": 0})
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_amount"

    def test_swap_quote_empty_pool(self, client, engine):
        engine.create_pool(USD, YEN, LP_USD_YEN, 0)
        response = client.post(f"/pools/{USD}/{YEN}/quote/swap", json={"amountIn": 10})
        assert response.status_code == 400
        assert response.json()["error"] == "insufficient_liquidity"

    def test_deposit_quote(self, client, seeded):
        response = client.post(
            f"/pools/{USD}/{YEN}/quote/deposit",
            json={"amountA": 10_000, "amountB": 20_000},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["shares"] == 10_000
        assert data["bootstrap"] is False
        # 10,000 / 1,010,000
        assert Decimal("0.99") < Decimal(data["shareOfPool"]) < Decimal("1")

    def test_bootstrap_deposit_quote(self, client, engine):
        engine.create_pool(USD, YEN, LP_USD_YEN, 1)
        response = client.post(
            f"/pools/{USD}/{YEN}/quote/deposit",
            json={"amountA": 5, "amountB": 7},
        )
        data = response.json()
        assert data["shares"] == 1_000_000
        assert data["bootstrap"] is True
        assert Decimal(data["shareOfPool"]) == 100

    def test_withdraw_quote(self, client, seeded):
        response = client.post(
            f"/pools/{USD}/{YEN}/quote/withdraw",
            json={"shares": 250_000},
        )
        assert response.status_code == 200
        data = response.json()
        assert (data["amountA"], data["amountB"]) == (250_000, 500_000)
        assert Decimal(data["shareOfPool"]) == 25

    def test_withdraw_quote_held_shares(self, client, seeded):
        response = client.post(
            f"/pools/{USD}/{YEN}/quote/withdraw",
            json={"shares": 250_000, "heldShares": 1},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "insufficient_lp_balance"

    def test_quote_missing_pool(self, client):
        response = client.post(f"/pools/{USD}/{YEN}/quote/withdraw", json={"shares": 1})
        assert response.status_code == 404


class TestRequestLimits:
    """Tests for the request size limit."""

    def test_oversized_body_rejected(self, client):
        body = b"x" * (1024 * 1024 + 1)
        response = client.post(
            "/pools",
            content=body,
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 413

    @pytest.mark.parametrize("value", ["abc", "-1", "1e6"])
    def test_malformed_content_length_rejected(self, client, value):
        response = client.get("/health", headers={"content-length": value})
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid Content-Length"
