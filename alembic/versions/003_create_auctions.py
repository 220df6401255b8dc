"""003: create auctions and auction_items tables

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE auctions (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            title           VARCHAR(200)    NOT NULL,
            description     TEXT,
            category        VARCHAR(64),
            status          VARCHAR(20)     NOT NULL DEFAULT 'draft',
            starting_price  BIGINT          NOT NULL,
            current_bid     BIGINT,
            start_date      TIMESTAMPTZ,
            end_date        TIMESTAMPTZ     NOT NULL,
            created_by      UUID            NOT NULL REFERENCES users (id),
            winner_id       UUID            REFERENCES users (id),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_auctions_status CHECK (
                status IN ('draft', 'upcoming', 'active', 'ended', 'cancelled')
            ),
            CONSTRAINT ck_auctions_starting_price_gt_0 CHECK (starting_price > 0),
            CONSTRAINT ck_auctions_current_bid_gt_0 CHECK (current_bid IS NULL OR current_bid > 0),
            CONSTRAINT ck_auctions_dates CHECK (start_date IS NULL OR end_date > start_date),
            CONSTRAINT ck_auctions_winner_only_when_ended CHECK (
                winner_id IS NULL OR status = 'ended'
            )
        );
    """)
    op.execute("CREATE INDEX idx_auctions_status_end_date ON auctions (status, end_date);")
    op.execute("CREATE INDEX idx_auctions_status_start_date ON auctions (status, start_date);")
    op.execute("CREATE INDEX idx_auctions_winner ON auctions (winner_id) WHERE winner_id IS NOT NULL;")
    op.execute("""
        CREATE TRIGGER trg_auctions_updated_at
            BEFORE UPDATE ON auctions
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("""
        CREATE TABLE auction_items (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            auction_id      UUID            NOT NULL REFERENCES auctions (id) ON DELETE CASCADE,
            title           VARCHAR(200)    NOT NULL,
            description     TEXT,
            starting_price  BIGINT          NOT NULL,
            position        INT             NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_auction_items_starting_price_gt_0 CHECK (starting_price > 0)
        );
    """)
    op.execute("CREATE INDEX idx_auction_items_auction ON auction_items (auction_id, position);")
    op.execute("COMMENT ON TABLE auction_items IS 'Catalog lots shown within an auction; bids and settlement are per auction';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS auction_items CASCADE;")
    op.execute("DROP TABLE IF EXISTS auctions CASCADE;")
