"""006: create payments table

Revision ID: 006
Revises: 005
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE payments (
            id                  BIGSERIAL       PRIMARY KEY,
            user_id             UUID            NOT NULL REFERENCES users (id),
            auction_id          UUID            NOT NULL REFERENCES auctions (id),
            amount_cents        BIGINT          NOT NULL,
            currency            VARCHAR(3)      NOT NULL DEFAULT 'usd',
            payment_intent_id   VARCHAR(255),
            status              VARCHAR(40)     NOT NULL,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_payments_auction UNIQUE (auction_id),
            CONSTRAINT uq_payments_intent UNIQUE (payment_intent_id),
            CONSTRAINT ck_payments_amount_gt_0 CHECK (amount_cents > 0)
        );
    """)
    op.execute("CREATE INDEX idx_payments_user ON payments (user_id);")
    op.execute("""
        CREATE TRIGGER trg_payments_updated_at
            BEFORE UPDATE ON payments
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE payments IS 'Winner charges; status mirrors the processor verbatim';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS payments CASCADE;")
