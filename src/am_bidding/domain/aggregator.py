"""My-bids classification — pure functions, no I/O."""

from src.am_bidding.domain.models import MyBid, MyBidRow, MyBidsSummary


def leading_threshold(current_bid: int | None, starting_price: int) -> int:
    """Amount a bid must reach to be the leading one.

    An unset current_bid falls back to the starting price.
    """
    return max(current_bid or 0, starting_price)


def classify_my_bids(rows: list[MyBidRow]) -> MyBidsSummary:
    """Split a user's bids into active and outbid, one entry per auction.

    Only the user's highest bid per auction is kept. A bid equal to the
    threshold counts as active. Both groups are sorted by end_date ascending.
    """
    best: dict[str, MyBidRow] = {}
    for row in rows:
        kept = best.get(row.auction_id)
        if kept is None or row.bid_amount > kept.bid_amount:
            best[row.auction_id] = row

    active: list[MyBid] = []
    outbid: list[MyBid] = []
    for row in best.values():
        entry = MyBid(
            auction_id=row.auction_id,
            title=row.title,
            my_bid=row.bid_amount,
            current_bid=row.current_bid,
            starting_price=row.starting_price,
            end_date=row.end_date,
            status=row.status,
        )
        if row.bid_amount >= leading_threshold(row.current_bid, row.starting_price):
            active.append(entry)
        else:
            outbid.append(entry)

    active.sort(key=lambda b: b.end_date)
    outbid.sort(key=lambda b: b.end_date)
    return MyBidsSummary(active=active, outbid=outbid)


def minimum_next_bid(current_bid: int | None, starting_price: int, increment: int) -> int:
    """Smallest acceptable bid: (current bid, or starting price) + increment."""
    base = current_bid if current_bid else starting_price
    return base + increment
