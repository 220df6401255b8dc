"""005: create watchlist table

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE watchlist (
            id                  BIGSERIAL       PRIMARY KEY,
            user_id             UUID            NOT NULL REFERENCES users (id) ON DELETE CASCADE,
            auction_id          UUID            NOT NULL REFERENCES auctions (id) ON DELETE CASCADE,
            auction_item_id     UUID            REFERENCES auction_items (id) ON DELETE CASCADE,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    # One auction-level entry and one entry per lot, per user.
    op.execute("""
        CREATE UNIQUE INDEX uq_watchlist_user_auction
            ON watchlist (user_id, auction_id)
            WHERE auction_item_id IS NULL;
    """)
    op.execute("""
        CREATE UNIQUE INDEX uq_watchlist_user_item
            ON watchlist (user_id, auction_item_id)
            WHERE auction_item_id IS NOT NULL;
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS watchlist CASCADE;")
