"""HTTP-level tests through the ASGI app with the database and services mocked."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.am_common.database import get_db_session
from src.am_common.errors import BidTooLowError
from src.am_gateway.auth.dependencies import CurrentUser, get_current_user
from src.am_settlement.application.schemas import EndAuctionsResponse, ProcessWinnersResponse
from src.main import app

AUCTION_ID = "5b0c1a36-2f5d-4a8e-9d7e-0c7f3e1b2a10"
CRON = {"Authorization": "Bearer test-cron-secret"}


@pytest.fixture
def db() -> AsyncMock:
    session = AsyncMock()
    session.execute.return_value = MagicMock()
    return session


@pytest.fixture(autouse=True)
def _overrides(db):
    async def _fake_db():
        yield db

    app.dependency_overrides[get_db_session] = _fake_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def as_user():
    app.dependency_overrides[get_current_user] = lambda: CurrentUser(id="u-1", email="u1@example.com")


async def test_health(client) -> None:
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


class TestSettlementAuth:
    async def test_missing_secret(self, client) -> None:
        resp = await client.post("/api/v1/settlement/end-auctions")
        assert resp.status_code == 401
        assert resp.json()["code"] == 1002

    async def test_wrong_secret(self, client) -> None:
        resp = await client.post(
            "/api/v1/settlement/process-winners", headers={"Authorization": "Bearer nope"}
        )
        assert resp.status_code == 401

    async def test_user_token_is_not_the_cron_secret(self, client, as_user) -> None:
        resp = await client.post(
            "/api/v1/settlement/end-auctions", headers={"Authorization": "Bearer some.jwt.token"}
        )
        assert resp.status_code == 401

    async def test_end_auctions(self, client) -> None:
        service = AsyncMock()
        service.end_auctions.return_value = EndAuctionsResponse(published=[], processed=0, results=[])
        with patch("src.am_settlement.api.router._service", service):
            resp = await client.post("/api/v1/settlement/end-auctions", headers=CRON)
        assert resp.status_code == 200
        body = resp.json()
        assert body["code"] == 0
        assert body["data"]["processed"] == 0

    async def test_process_winners(self, client) -> None:
        service = AsyncMock()
        service.process_winners.return_value = ProcessWinnersResponse(processed=0, results=[])
        with patch("src.am_settlement.api.router._service", service):
            resp = await client.post("/api/v1/settlement/process-winners", headers=CRON)
        assert resp.status_code == 200
        service.process_winners.assert_awaited_once()


class TestUserEndpoints:
    async def test_auctions_require_token(self, client) -> None:
        resp = await client.get("/api/v1/auctions")
        assert resp.status_code == 401

    async def test_malformed_auction_id(self, client, as_user) -> None:
        resp = await client.get("/api/v1/auctions/not-a-uuid")
        assert resp.status_code == 422

    async def test_bid_error_uses_envelope(self, client, as_user) -> None:
        bids = AsyncMock()
        bids.place_bid.side_effect = BidTooLowError(2100)
        with patch("src.am_bidding.api.router._bids", bids):
            resp = await client.post(
                f"/api/v1/auctions/{AUCTION_ID}/bids", json={"bid_amount_cents": 2000}
            )
        assert resp.status_code == 422
        body = resp.json()
        assert body["code"] == 3001
        assert body["data"] is None
        assert bids.place_bid.call_args.args[1:] == ("u-1", AUCTION_ID, 2000)

    async def test_non_positive_bid_rejected_by_validation(self, client, as_user) -> None:
        resp = await client.post(
            f"/api/v1/auctions/{AUCTION_ID}/bids", json={"bid_amount_cents": 0}
        )
        assert resp.status_code == 422

    async def test_bid_registers_caller_before_writing(self, client, as_user, db) -> None:
        bids = AsyncMock()
        bids.place_bid.side_effect = BidTooLowError(2100)
        with patch("src.am_bidding.api.router._bids", bids):
            await client.post(
                f"/api/v1/auctions/{AUCTION_ID}/bids", json={"bid_amount_cents": 2000}
            )
        sql, params = db.execute.await_args_list[0].args
        assert "INSERT INTO users" in str(sql)
        assert params == {"user_id": "u-1", "email": "u1@example.com"}
        db.commit.assert_awaited()

    async def test_reads_do_not_register_caller(self, client, as_user, db) -> None:
        watchlist = AsyncMock()
        watchlist.list_entries.return_value = []
        with patch("src.am_bidding.api.router._watchlist", watchlist):
            resp = await client.get("/api/v1/watchlist")
        assert resp.status_code == 200
        db.execute.assert_not_awaited()


class TestWebhook:
    async def test_missing_signature(self, client) -> None:
        resp = await client.post("/api/v1/payments/webhook", content=b"{}")
        assert resp.status_code == 400
        assert resp.json()["code"] == 4004
