"""Unit tests for SettlementRepository SQL parameters."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

from src.am_settlement.infrastructure.persistence import SettlementRepository

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _row(**fields: object) -> MagicMock:
    row = MagicMock()
    for key, value in fields.items():
        setattr(row, key, value)
    return row


class TestSettlementRepository:
    async def test_mark_ended_passes_winner_and_amount(self) -> None:
        db = AsyncMock()
        await SettlementRepository().mark_ended(db, "a-1", "u-1", 2500)

        params = db.execute.call_args.args[1]
        assert params == {"auction_id": "a-1", "winner_id": "u-1", "winning_bid": 2500}

    async def test_mark_ended_without_winner_passes_nulls(self) -> None:
        db = AsyncMock()
        await SettlementRepository().mark_ended(db, "a-1", None, None)

        params = db.execute.call_args.args[1]
        assert params["winner_id"] is None
        assert params["winning_bid"] is None

    async def test_mark_ended_sql_guards_on_active_status(self) -> None:
        db = AsyncMock()
        await SettlementRepository().mark_ended(db, "a-1", None, None)

        sql = str(db.execute.call_args.args[0])
        assert "status = 'active'" in sql

    async def test_lock_uses_skip_locked(self) -> None:
        db = AsyncMock()
        result = MagicMock()
        result.fetchone.return_value = None
        db.execute.return_value = result

        assert await SettlementRepository().lock_active_auction(db, "a-1") is None
        assert "FOR UPDATE SKIP LOCKED" in str(db.execute.call_args.args[0])

    async def test_list_bids_until_maps_rows(self) -> None:
        db = AsyncMock()
        result = MagicMock()
        result.fetchall.return_value = [
            _row(id=5, user_id="u-1", bid_amount=900, created_at=NOW),
        ]
        db.execute.return_value = result

        bids = await SettlementRepository().list_bids_until(db, "a-1", NOW)

        assert bids[0].id == 5
        assert bids[0].bid_amount == 900
        assert db.execute.call_args.args[1] == {"auction_id": "a-1", "end_date": NOW}

    async def test_charge_candidates_exclude_paid_auctions(self) -> None:
        db = AsyncMock()
        result = MagicMock()
        result.fetchall.return_value = [
            _row(id="a-1", title="Vase", winner_id="u-1", current_bid=2500),
        ]
        db.execute.return_value = result

        candidates = await SettlementRepository().list_charge_candidates(db)

        sql = str(db.execute.call_args.args[0])
        assert "NOT EXISTS" in sql
        assert "winner_id IS NOT NULL" in sql
        assert candidates[0].winner_id == "u-1"
        assert candidates[0].winning_bid == 2500

    async def test_lock_charge_candidate_rechecks_under_lock(self) -> None:
        db = AsyncMock()
        result = MagicMock()
        result.fetchone.return_value = _row(id="a-1")
        db.execute.return_value = result

        assert await SettlementRepository().lock_charge_candidate(db, "a-1") is True

        sql = str(db.execute.call_args.args[0])
        assert "SKIP LOCKED" in sql
        assert "NOT EXISTS" in sql
        assert "winner_id IS NOT NULL" in sql
        assert db.execute.call_args.args[1] == {"auction_id": "a-1"}

    async def test_lock_charge_candidate_already_paid(self) -> None:
        db = AsyncMock()
        result = MagicMock()
        result.fetchone.return_value = None
        db.execute.return_value = result

        assert await SettlementRepository().lock_charge_candidate(db, "a-1") is False

    async def test_publish_activates_upcoming_not_draft(self) -> None:
        db = AsyncMock()
        result = MagicMock()
        result.fetchall.return_value = [_row(id="a-1")]
        db.execute.return_value = result

        assert await SettlementRepository().publish_due_auctions(db, NOW) == ["a-1"]

        sql = str(db.execute.call_args.args[0])
        assert "status = 'upcoming'" in sql
        assert "draft" not in sql
        assert db.execute.call_args.args[1] == {"now": NOW}
