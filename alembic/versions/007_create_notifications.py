"""007: create notifications table

Revision ID: 007
Revises: 006
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "007"
down_revision: Union[str, None] = "006"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE notifications (
            id              BIGSERIAL       PRIMARY KEY,
            user_id         UUID            NOT NULL REFERENCES users (id) ON DELETE CASCADE,
            type            VARCHAR(40)     NOT NULL,
            title           VARCHAR(255)    NOT NULL,
            message         TEXT            NOT NULL,
            auction_id      UUID            REFERENCES auctions (id) ON DELETE SET NULL,
            from_user_id    UUID            REFERENCES users (id) ON DELETE SET NULL,
            read            BOOLEAN         NOT NULL DEFAULT FALSE,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_notifications_type CHECK (
                type IN ('auction_won', 'payment_failed', 'payment_action_required',
                         'connection_accepted', 'connection_rejected')
            )
        );
    """)
    op.execute("CREATE INDEX idx_notifications_user_created ON notifications (user_id, created_at DESC);")
    op.execute("CREATE INDEX idx_notifications_unread ON notifications (user_id) WHERE read = FALSE;")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS notifications CASCADE;")
