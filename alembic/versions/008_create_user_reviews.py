"""008: create user_reviews table

Revision ID: 008
Revises: 007
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "008"
down_revision: Union[str, None] = "007"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE user_reviews (
            id              BIGSERIAL       PRIMARY KEY,
            user_id         UUID            NOT NULL REFERENCES users (id) ON DELETE CASCADE,
            reviewer_id     UUID            NOT NULL REFERENCES users (id) ON DELETE CASCADE,
            rating          SMALLINT        NOT NULL,
            comment         TEXT,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_user_reviews_pair UNIQUE (user_id, reviewer_id),
            CONSTRAINT ck_user_reviews_rating CHECK (rating BETWEEN 1 AND 5),
            CONSTRAINT ck_user_reviews_not_self CHECK (user_id <> reviewer_id)
        );
    """)
    op.execute("CREATE INDEX idx_user_reviews_user ON user_reviews (user_id, created_at DESC);")
    op.execute("""
        CREATE TRIGGER trg_user_reviews_updated_at
            BEFORE UPDATE ON user_reviews
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS user_reviews CASCADE;")
