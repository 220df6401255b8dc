"""004: create bids table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE bids (
            id              BIGSERIAL       PRIMARY KEY,
            auction_id      UUID            NOT NULL REFERENCES auctions (id) ON DELETE CASCADE,
            user_id         UUID            NOT NULL REFERENCES users (id),
            bid_amount      BIGINT          NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_bids_amount_gt_0 CHECK (bid_amount > 0)
        );
    """)
    op.execute("CREATE INDEX idx_bids_auction_amount ON bids (auction_id, bid_amount DESC, created_at);")
    op.execute("CREATE INDEX idx_bids_user ON bids (user_id, created_at DESC);")
    op.execute("""
        CREATE TRIGGER trg_bids_append_only
            BEFORE UPDATE ON bids
            FOR EACH ROW EXECUTE FUNCTION fn_reject_history_update();
    """)
    op.execute("COMMENT ON TABLE bids IS 'Append-only bid history';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS bids CASCADE;")
