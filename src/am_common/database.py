"""Process-wide async engine and request-scoped sessions.

One connection pool per process, created at import. Handlers never share a
session: each request acquires its own through ``get_db_session`` and the
context manager returns the connection to the pool on exit, error paths
included.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import settings

engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=10,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yields an AsyncSession, auto-closes after request."""
    async with async_session_factory() as session:
        yield session


_UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the driver reports SQLSTATE 23505 (unique_violation)."""
    orig = exc.orig
    return getattr(orig, "sqlstate", None) == _UNIQUE_VIOLATION or getattr(
        orig, "pgcode", None
    ) == _UNIQUE_VIOLATION
