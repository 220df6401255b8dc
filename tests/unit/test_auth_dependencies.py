"""Unit tests for bearer-token and cron-secret dependencies."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from config.settings import settings
from src.am_common.errors import CronUnauthorizedError, InvalidTokenError
from src.am_gateway.auth.dependencies import (
    CurrentUser,
    get_current_user,
    get_registered_user,
    require_cron_secret,
)


def _creds(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUser:
    async def test_missing_credentials_is_401(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(credentials=None)
        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    async def test_invalid_token_is_401(self) -> None:
        with patch(
            "src.am_gateway.auth.dependencies.decode_access_token",
            side_effect=InvalidTokenError(),
        ):
            with pytest.raises(HTTPException) as exc_info:
                await get_current_user(credentials=_creds("bad"))
        assert exc_info.value.status_code == 401

    async def test_valid_token_returns_user(self) -> None:
        with patch(
            "src.am_gateway.auth.dependencies.decode_access_token",
            return_value={"sub": "user-1", "email": "u@example.com"},
        ):
            user = await get_current_user(credentials=_creds("good"))
        assert user == CurrentUser(id="user-1", email="u@example.com")

    async def test_email_optional(self) -> None:
        with patch(
            "src.am_gateway.auth.dependencies.decode_access_token",
            return_value={"sub": "user-2"},
        ):
            user = await get_current_user(credentials=_creds("good"))
        assert user.email is None


class TestGetRegisteredUser:
    async def test_mirrors_caller_and_commits(self) -> None:
        db = AsyncMock()
        user = CurrentUser(id="user-1", email="u@example.com")
        with patch("src.am_gateway.auth.dependencies._user_service") as service:
            service.ensure_user = AsyncMock(return_value=True)
            result = await get_registered_user(current_user=user, db=db)
        assert result is user
        service.ensure_user.assert_awaited_once_with(db, "user-1", "u@example.com")
        db.commit.assert_awaited_once()

    async def test_existing_user_still_returned(self) -> None:
        db = AsyncMock()
        user = CurrentUser(id="user-2")
        with patch("src.am_gateway.auth.dependencies._user_service") as service:
            service.ensure_user = AsyncMock(return_value=False)
            assert await get_registered_user(current_user=user, db=db) is user

class TestRequireCronSecret:
    async def test_missing_header_rejected(self) -> None:
        with pytest.raises(CronUnauthorizedError):
            await require_cron_secret(credentials=None)

    async def test_wrong_secret_rejected(self) -> None:
        with pytest.raises(CronUnauthorizedError):
            await require_cron_secret(credentials=_creds("nope"))

    async def test_correct_secret_passes(self) -> None:
        assert await require_cron_secret(credentials=_creds(settings.CRON_SECRET)) is None
