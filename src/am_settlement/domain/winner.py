"""Winner selection — pure function, no I/O."""

from src.am_settlement.domain.models import BidCandidate


def _rank(bid: BidCandidate) -> tuple[int, float, int]:
    # Highest amount first, then earliest placement, then lowest id.
    return (-bid.bid_amount, bid.created_at.timestamp(), bid.id)


def select_winning_bid(bids: list[BidCandidate]) -> BidCandidate | None:
    """Return the winning bid, or None when nobody bid.

    Callers pass only bids placed at or before the auction's end_date.
    """
    if not bids:
        return None
    return min(bids, key=_rank)
