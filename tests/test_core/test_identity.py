"""Tests for bearer-token identity resolution and the admin key gate."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException

from linen.core.authorization import (
    expected_admin_key,
    extract_bearer_token,
    require_admin_key,
    resolve_user_id,
)
from linen.core.config import Settings
from linen.domain.errors import NotAuthenticated
from linen.infrastructure.repositories import SqlAlchemyUserRepository
from linen.models import UserSession


@pytest.fixture
def settings():
    return Settings(admin_api_secret="s3cret")


class TestExtractBearerToken:
    def test_returns_token(self):
        assert extract_bearer_token("Bearer abc123") == "abc123"

    def test_scheme_is_case_insensitive(self):
        assert extract_bearer_token("bearer abc123") == "abc123"

    @pytest.mark.parametrize("header", [None, "", "Basic dXNlcjpwYXNz", "Bearer   "])
    def test_rejects_missing_or_wrong_scheme(self, header):
        with pytest.raises(NotAuthenticated):
            extract_bearer_token(header)


class TestResolveUserId:
    async def test_guest_token_provisions_guest_row(self, db_session, settings):
        users = SqlAlchemyUserRepository(db_session)

        user_id = await resolve_user_id("Bearer guest-token-xyz", users, settings)

        assert user_id == "guest-user"
        guest = await users.get_by_id("guest-user")
        assert guest is not None
        assert guest.email == "guest@linen.app"

    async def test_guest_provisioning_is_idempotent(self, db_session, settings):
        users = SqlAlchemyUserRepository(db_session)

        await resolve_user_id("Bearer guest-token-1", users, settings)
        await resolve_user_id("Bearer guest-token-2", users, settings)

        assert await users.get_by_id("guest-user") is not None

    async def test_valid_session_resolves_owner(self, db_session, users, settings):
        db_session.add(
            UserSession(
                token="tok-live",
                user_id="user-1",
                expires_at=datetime.now(timezone.utc) + timedelta(days=1),
            )
        )
        await db_session.commit()

        user_id = await resolve_user_id(
            "Bearer tok-live", SqlAlchemyUserRepository(db_session), settings
        )
        assert user_id == "user-1"

    async def test_expired_session_is_rejected(self, db_session, users, settings):
        db_session.add(
            UserSession(
                token="tok-old",
                user_id="user-1",
                expires_at=datetime.now(timezone.utc) - timedelta(minutes=1),
            )
        )
        await db_session.commit()

        with pytest.raises(NotAuthenticated):
            await resolve_user_id(
                "Bearer tok-old", SqlAlchemyUserRepository(db_session), settings
            )

    async def test_unknown_token_is_rejected(self, db_session, settings):
        with pytest.raises(NotAuthenticated):
            await resolve_user_id(
                "Bearer nope", SqlAlchemyUserRepository(db_session), settings
            )


class TestAdminKey:
    async def test_missing_key(self):
        with pytest.raises(HTTPException) as exc:
            await require_admin_key(None)
        assert exc.value.status_code == 401

    async def test_wrong_key(self):
        with pytest.raises(HTTPException) as exc:
            await require_admin_key("not-the-key")
        assert exc.value.detail == "Invalid API key"

    async def test_derived_key_is_accepted(self):
        # ADMIN_API_SECRET is set in conftest
        assert await require_admin_key(expected_admin_key("test-admin-secret")) is True
