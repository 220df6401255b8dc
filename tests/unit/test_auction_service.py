"""Unit tests for AuctionApplicationService."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from src.am_auction.application.schemas import CreateAuctionRequest
from src.am_auction.application.service import AuctionApplicationService
from src.am_auction.domain.models import Auction, AuctionItem, NewAuction
from src.am_common.errors import (
    AuctionNotFoundError,
    InvalidAuctionError,
    InvalidStatusTransitionError,
    NotAuctionOwnerError,
)

SELLER = "11111111-1111-1111-1111-111111111111"


def _auction(status: str = "draft", created_by: str = SELLER) -> Auction:
    now = datetime.now(UTC)
    return Auction(
        id="a-1",
        title="Brass lamp",
        description=None,
        category="home",
        status=status,
        starting_price=1000,
        current_bid=None,
        start_date=now,
        end_date=now + timedelta(days=3),
        created_by=created_by,
        winner_id=None,
        created_at=now,
        updated_at=now,
    )


def _persisted(db, new: NewAuction) -> Auction:
    a = _auction(status=new.status)
    a.items = [
        AuctionItem(f"i-{i.position}", a.id, i.title, i.description, i.starting_price, i.position)
        for i in new.items
    ]
    return a


@pytest.fixture
def repo() -> AsyncMock:
    mock = AsyncMock()
    mock.create_auction.side_effect = _persisted
    mock.get_auction_by_id.return_value = _auction()
    return mock


class TestCreateAuction:
    async def test_default_start_is_now_and_items_positioned(self, repo) -> None:
        db = AsyncMock()
        req = CreateAuctionRequest(
            title="Brass lamp",
            starting_price_cents=1000,
            end_date=datetime.now(UTC) + timedelta(days=1),
            items=[
                {"title": "Shade", "starting_price_cents": 300},
                {"title": "Base", "starting_price_cents": 700},
            ],
        )
        result = await AuctionApplicationService(repo=repo).create_auction(db, SELLER, req)

        new: NewAuction = repo.create_auction.call_args.args[1]
        assert new.status == "draft"
        assert new.created_by == SELLER
        assert new.start_date is not None
        assert [i.position for i in new.items] == [0, 1]
        assert [i.title for i in result.items] == ["Shade", "Base"]
        db.commit.assert_awaited_once()

    async def test_naive_dates_treated_as_utc(self, repo) -> None:
        req = CreateAuctionRequest(
            title="Clock",
            starting_price_cents=500,
            start_date=datetime(2030, 1, 1, 12, 0),
            end_date=datetime(2030, 1, 2, 12, 0),
        )
        await AuctionApplicationService(repo=repo).create_auction(AsyncMock(), SELLER, req)
        new: NewAuction = repo.create_auction.call_args.args[1]
        assert new.start_date.tzinfo is not None
        assert new.end_date.tzinfo is not None

    async def test_end_before_start_rejected(self, repo) -> None:
        req = CreateAuctionRequest(
            title="Clock",
            starting_price_cents=500,
            start_date=datetime(2030, 1, 2, tzinfo=UTC),
            end_date=datetime(2030, 1, 1, tzinfo=UTC),
        )
        with pytest.raises(InvalidAuctionError):
            await AuctionApplicationService(repo=repo).create_auction(AsyncMock(), SELLER, req)
        repo.create_auction.assert_not_awaited()

    async def test_cannot_create_already_ended(self, repo) -> None:
        req = CreateAuctionRequest(
            title="Clock",
            status="ended",
            starting_price_cents=500,
            end_date=datetime.now(UTC) + timedelta(days=1),
        )
        with pytest.raises(InvalidAuctionError):
            await AuctionApplicationService(repo=repo).create_auction(AsyncMock(), SELLER, req)

    async def test_repository_failure_rolls_back(self, repo) -> None:
        repo.create_auction.side_effect = RuntimeError("db down")
        db = AsyncMock()
        req = CreateAuctionRequest(
            title="Clock", starting_price_cents=500, end_date=datetime.now(UTC) + timedelta(days=1)
        )
        with pytest.raises(RuntimeError):
            await AuctionApplicationService(repo=repo).create_auction(db, SELLER, req)
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()


class TestReads:
    async def test_get_loads_items(self, repo) -> None:
        repo.list_items.return_value = [AuctionItem("i-0", "a-1", "Shade", None, 300, 0)]
        result = await AuctionApplicationService(repo=repo).get_auction(AsyncMock(), "a-1")
        assert result.items[0].title == "Shade"
        assert result.starting_price_display == "$10.00"

    async def test_get_unknown(self, repo) -> None:
        repo.get_auction_by_id.return_value = None
        with pytest.raises(AuctionNotFoundError):
            await AuctionApplicationService(repo=repo).get_auction(AsyncMock(), "nope")

    async def test_list_passes_filters(self, repo) -> None:
        repo.list_browseable.return_value = [_auction(status="active")]
        db = AsyncMock()
        result = await AuctionApplicationService(repo=repo).list_auctions(db, "home", 10)
        repo.list_browseable.assert_awaited_once_with(db, "home", 10)
        assert result.items[0].status == "active"


class TestUpdateStatus:
    async def test_owner_publishes_draft(self, repo) -> None:
        repo.update_status.return_value = _auction(status="upcoming")
        db = AsyncMock()
        result = await AuctionApplicationService(repo=repo).update_status(
            db, SELLER, "a-1", "upcoming"
        )
        assert result.status == "upcoming"
        db.commit.assert_awaited_once()

    async def test_non_owner_forbidden(self, repo) -> None:
        with pytest.raises(NotAuctionOwnerError):
            await AuctionApplicationService(repo=repo).update_status(
                AsyncMock(), "someone-else", "a-1", "upcoming"
            )

    async def test_cannot_leave_active(self, repo) -> None:
        repo.get_auction_by_id.return_value = _auction(status="active")
        with pytest.raises(InvalidStatusTransitionError):
            await AuctionApplicationService(repo=repo).update_status(
                AsyncMock(), SELLER, "a-1", "cancelled"
            )

    async def test_seller_cannot_end_auction(self, repo) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            await AuctionApplicationService(repo=repo).update_status(
                AsyncMock(), SELLER, "a-1", "ended"
            )

    async def test_concurrent_status_change_detected(self, repo) -> None:
        repo.update_status.return_value = None
        db = AsyncMock()
        with pytest.raises(InvalidStatusTransitionError):
            await AuctionApplicationService(repo=repo).update_status(
                db, SELLER, "a-1", "active"
            )
        db.rollback.assert_awaited_once()
