"""001: extensions and shared trigger functions

Revision ID: 001
Revises: 
Create Date: 2026-10-19

gen_random_uuid() (auction and item ids) comes from pgcrypto. The two
trigger functions are attached per table by later revisions.
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# (name, body) pairs, created in order and dropped in reverse.
_TRIGGER_FUNCTIONS = [
    (
        "fn_update_timestamp",
        """
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        """,
    ),
    (
        # Bid history is evidence for winner selection; rows are never edited.
        "fn_reject_history_update",
        """
        BEGIN
            RAISE EXCEPTION '% rows are append-only', TG_TABLE_NAME
                USING ERRCODE = 'restrict_violation';
        END;
        """,
    ),
]


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto;")
    for name, body in _TRIGGER_FUNCTIONS:
        op.execute(
            f"CREATE OR REPLACE FUNCTION {name}() RETURNS TRIGGER AS $$"
            f"{body}$$ LANGUAGE plpgsql;"
        )


def downgrade() -> None:
    for name, _ in reversed(_TRIGGER_FUNCTIONS):
        op.execute(f"DROP FUNCTION IF EXISTS {name}();")
