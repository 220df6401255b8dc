"""Unit tests for select_winning_bid."""

from datetime import UTC, datetime, timedelta

from src.am_settlement.domain.models import BidCandidate
from src.am_settlement.domain.winner import select_winning_bid

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _bid(bid_id: int, user: str, amount: int, minutes: int = 0) -> BidCandidate:
    return BidCandidate(
        id=bid_id, user_id=user, bid_amount=amount, created_at=T0 + timedelta(minutes=minutes)
    )


def test_no_bids_no_winner() -> None:
    assert select_winning_bid([]) is None


def test_single_bid_wins() -> None:
    assert select_winning_bid([_bid(1, "u1", 1000)]).user_id == "u1"


def test_highest_amount_wins() -> None:
    bids = [_bid(1, "u1", 1000), _bid(2, "u2", 2500, 1), _bid(3, "u3", 1800, 2)]
    winner = select_winning_bid(bids)
    assert winner.user_id == "u2"
    assert winner.bid_amount == 2500


def test_tie_goes_to_earliest_bid() -> None:
    bids = [_bid(7, "late", 3000, minutes=5), _bid(9, "early", 3000, minutes=1)]
    assert select_winning_bid(bids).user_id == "early"


def test_tie_at_same_instant_goes_to_lowest_id() -> None:
    bids = [_bid(12, "second", 3000, minutes=2), _bid(11, "first", 3000, minutes=2)]
    assert select_winning_bid(bids).id == 11


def test_order_of_input_irrelevant() -> None:
    bids = [_bid(1, "u1", 500), _bid(2, "u2", 900, 1), _bid(3, "u3", 700, 2)]
    assert select_winning_bid(bids).user_id == select_winning_bid(bids[::-1]).user_id == "u2"
