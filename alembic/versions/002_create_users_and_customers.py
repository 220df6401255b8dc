"""002: create users and customers tables

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Profile rows mirror identity-provider accounts; id is the token's sub.
    op.execute("""
        CREATE TABLE users (
            id              UUID            PRIMARY KEY,
            email           VARCHAR(255),
            full_name       VARCHAR(255),
            avatar_url      TEXT,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_users_updated_at
            BEFORE UPDATE ON users
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("""
        CREATE TABLE customers (
            user_id             UUID            PRIMARY KEY REFERENCES users (id) ON DELETE CASCADE,
            stripe_customer_id  VARCHAR(255),
            payment_method_id   VARCHAR(255),
            card_brand          VARCHAR(32),
            card_last4          VARCHAR(4),
            card_exp_month      SMALLINT,
            card_exp_year       SMALLINT,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_customers_stripe_customer_id UNIQUE (stripe_customer_id)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_customers_updated_at
            BEFORE UPDATE ON customers
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE customers IS 'Payment processor customer and default card summary per user';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS customers CASCADE;")
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
