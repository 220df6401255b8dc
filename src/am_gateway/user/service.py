"""User mirror: keeps a ``users`` row for every identity that writes.

Identities live with the token issuer; rows here exist only so that
auctions, bids, watchlist entries, customers and reviews can reference
them. The caller commits.
"""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

# Idempotent: an existing row, including one created concurrently, is left as is.
_ENSURE_USER_SQL = text("""
    INSERT INTO users (id, email)
    VALUES (CAST(:user_id AS UUID), :email)
    ON CONFLICT (id) DO NOTHING
    RETURNING id
""")


class UserService:
    """Stateless service. Instantiate once, reuse across requests."""

    async def ensure_user(self, db: AsyncSession, user_id: str, email: str | None) -> bool:
        """Insert the caller's profile row if missing. True when a row was created."""
        result = await db.execute(_ENSURE_USER_SQL, {"user_id": user_id, "email": email})
        created = result.fetchone() is not None
        if created:
            logger.info("Registered user %s on first write", user_id)
        return created
