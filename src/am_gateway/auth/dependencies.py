"""FastAPI auth dependencies.

Usage in any protected router:
    from src.am_gateway.auth.dependencies import get_current_user

    @router.get("/protected")
    async def protected(user: Annotated[CurrentUser, Depends(get_current_user)]):
        ...

Endpoints that write rows owned by the caller depend on
``get_registered_user`` so the caller's ``users`` row exists first.

Settlement endpoints are called by the scheduler, not by users, and are
guarded by ``require_cron_secret`` instead.
"""

import hmac
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.am_common.database import get_db_session
from src.am_common.errors import CronUnauthorizedError, InvalidTokenError
from src.am_gateway.auth.jwt_handler import decode_access_token
from src.am_gateway.user.service import UserService

_bearer_scheme = HTTPBearer(auto_error=False)
_user_service = UserService()

# Reusable 401 exception with WWW-Authenticate header (OAuth2 standard)
_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


@dataclass(frozen=True)
class CurrentUser:
    id: str
    email: str | None = None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> CurrentUser:
    """Validate the bearer access token and return the caller's identity.

    Raises HTTP 401 if the token is missing, invalid, or expired.
    """
    if credentials is None:
        raise _CREDENTIALS_EXCEPTION
    try:
        payload = decode_access_token(credentials.credentials)
    except InvalidTokenError:
        raise _CREDENTIALS_EXCEPTION from None
    return CurrentUser(id=str(payload["sub"]), email=payload.get("email"))


async def get_registered_user(
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> CurrentUser:
    """Like ``get_current_user``, but also mirrors the caller into ``users``.

    The row is committed before the endpoint runs, so foreign keys to
    ``users`` hold on the caller's first write.
    """
    await _user_service.ensure_user(db, current_user.id, current_user.email)
    await db.commit()
    return current_user


async def require_cron_secret(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> None:
    """Allow only callers presenting ``Bearer <CRON_SECRET>``."""
    if credentials is None or not hmac.compare_digest(
        credentials.credentials.encode("utf-8"),
        settings.CRON_SECRET.encode("utf-8"),
    ):
        raise CronUnauthorizedError()
