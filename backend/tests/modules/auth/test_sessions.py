"""Tests for the session manager: login, refresh, logout."""

import asyncio
import logging

import pytest

from modules.auth.exceptions import InvalidCredentialsError, InvalidRefreshTokenError
from modules.credentials.exceptions import UserNotFoundError
from modules.credentials.repository import InMemoryCredentialStore
from modules.tokens.exceptions import (
    TokenExpiredError,
    TokenKindMismatchError,
    TokenMalformedError,
)

from conftest import TEST_EMAIL, TEST_PASSWORD


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_returns_profile_and_tokens(self, sessions, verified_user, codec, store):
        user = await verified_user()
        result = await sessions.login(TEST_EMAIL, TEST_PASSWORD)

        assert result.user.id == user.id
        assert result.tokens.expires_in == 900
        assert codec.verify_access(result.tokens.access_token).subject_id == user.id
        assert await store.has_refresh_token(user.id, result.tokens.refresh_token)

    @pytest.mark.asyncio
    async def test_login_email_is_case_insensitive(self, sessions, verified_user):
        await verified_user()
        result = await sessions.login("  BOB@Example.com", TEST_PASSWORD)
        assert result.user.email == TEST_EMAIL

    @pytest.mark.asyncio
    async def test_unverified_user_can_log_in(self, sessions, credentials):
        await credentials.register(TEST_EMAIL, TEST_PASSWORD, "Bob", "Builder")
        result = await sessions.login(TEST_EMAIL, TEST_PASSWORD)
        assert result.user.is_email_verified is False

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_are_indistinguishable(
        self, sessions, verified_user
    ):
        await verified_user()

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            await sessions.login(TEST_EMAIL, "Wrong123!")
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            await sessions.login("nobody@example.com", TEST_PASSWORD)

        assert wrong_password.value.code == unknown_email.value.code
        assert wrong_password.value.message == unknown_email.value.message

    @pytest.mark.asyncio
    async def test_unknown_email_still_runs_a_hash_comparison(self, sessions, hasher):
        with pytest.raises(InvalidCredentialsError):
            await sessions.login("nobody@example.com", TEST_PASSWORD)
        assert hasher._dummy_hash is not None

    @pytest.mark.asyncio
    async def test_each_login_adds_a_session(self, sessions, verified_user, store):
        user = await verified_user()
        for _ in range(3):
            await sessions.login(TEST_EMAIL, TEST_PASSWORD)
        assert len((await store.find_by_id(user.id)).refresh_tokens) == 3


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_rotates_token(self, sessions, verified_user, store):
        user = await verified_user()
        login = await sessions.login(TEST_EMAIL, TEST_PASSWORD)

        pair = await sessions.refresh(login.tokens.refresh_token)

        assert pair.refresh_token != login.tokens.refresh_token
        assert not await store.has_refresh_token(user.id, login.tokens.refresh_token)
        assert await store.has_refresh_token(user.id, pair.refresh_token)

    @pytest.mark.asyncio
    async def test_refresh_token_is_single_use(self, sessions, verified_user):
        await verified_user()
        login = await sessions.login(TEST_EMAIL, TEST_PASSWORD)
        await sessions.refresh(login.tokens.refresh_token)

        with pytest.raises(InvalidRefreshTokenError):
            await sessions.refresh(login.tokens.refresh_token)

    @pytest.mark.asyncio
    async def test_access_token_cannot_refresh(self, sessions, verified_user):
        await verified_user()
        login = await sessions.login(TEST_EMAIL, TEST_PASSWORD)
        with pytest.raises(TokenKindMismatchError):
            await sessions.refresh(login.tokens.access_token)

    @pytest.mark.asyncio
    async def test_expired_refresh_token(self, sessions, verified_user, clock):
        await verified_user()
        login = await sessions.login(TEST_EMAIL, TEST_PASSWORD)
        clock.advance(days=7)
        with pytest.raises(TokenExpiredError):
            await sessions.refresh(login.tokens.refresh_token)

    @pytest.mark.asyncio
    async def test_garbage_refresh_token(self, sessions):
        with pytest.raises(TokenMalformedError):
            await sessions.refresh("garbage")

    @pytest.mark.asyncio
    async def test_refresh_for_deleted_user(self, sessions, codec):
        token = codec.issue_refresh_token("ghost", "ghost@example.com")
        with pytest.raises(UserNotFoundError):
            await sessions.refresh(token)


class TestLogout:
    @pytest.mark.asyncio
    async def test_logout_revokes_only_that_session(self, sessions, verified_user):
        user = await verified_user()
        first = await sessions.login(TEST_EMAIL, TEST_PASSWORD)
        second = await sessions.login(TEST_EMAIL, TEST_PASSWORD)

        await sessions.logout(user.id, first.tokens.refresh_token)

        with pytest.raises(InvalidRefreshTokenError):
            await sessions.refresh(first.tokens.refresh_token)
        await sessions.refresh(second.tokens.refresh_token)

    @pytest.mark.asyncio
    async def test_logout_with_inactive_token_is_a_no_op(self, sessions, verified_user):
        user = await verified_user()
        await sessions.logout(user.id, "not-a-session")

    @pytest.mark.asyncio
    async def test_logout_unknown_user(self, sessions):
        with pytest.raises(UserNotFoundError):
            await sessions.logout("missing", "token")

    @pytest.mark.asyncio
    async def test_logout_all_revokes_every_session(self, sessions, verified_user, store):
        user = await verified_user()
        logins = [await sessions.login(TEST_EMAIL, TEST_PASSWORD) for _ in range(3)]

        await sessions.logout_all(user.id)

        assert (await store.find_by_id(user.id)).refresh_tokens == ()
        for login in logins:
            with pytest.raises(InvalidRefreshTokenError):
                await sessions.refresh(login.tokens.refresh_token)

    @pytest.mark.asyncio
    async def test_access_token_survives_logout_until_expiry(self, sessions, verified_user, clock):
        user = await verified_user()
        login = await sessions.login(TEST_EMAIL, TEST_PASSWORD)
        await sessions.logout_all(user.id)

        assert (await sessions.authenticate(login.tokens.access_token)).id == user.id
        clock.advance(minutes=15)
        with pytest.raises(TokenExpiredError):
            await sessions.authenticate(login.tokens.access_token)

    @pytest.mark.asyncio
    async def test_logout_all_unknown_user(self, sessions):
        with pytest.raises(UserNotFoundError):
            await sessions.logout_all("missing")


class TestProfileAndAuthenticate:
    @pytest.mark.asyncio
    async def test_get_profile(self, sessions, verified_user):
        user = await verified_user()
        profile = await sessions.get_profile(user.id)
        assert profile.email == TEST_EMAIL
        assert profile.is_email_verified is True

    @pytest.mark.asyncio
    async def test_get_profile_unknown_user(self, sessions):
        with pytest.raises(UserNotFoundError):
            await sessions.get_profile("missing")

    @pytest.mark.asyncio
    async def test_authenticate_rejects_refresh_token(self, sessions, verified_user):
        await verified_user()
        login = await sessions.login(TEST_EMAIL, TEST_PASSWORD)
        with pytest.raises(TokenKindMismatchError):
            await sessions.authenticate(login.tokens.refresh_token)


class YieldingCredentialStore(InMemoryCredentialStore):
    """Store that yields to the event loop after answering has_refresh_token."""

    async def has_refresh_token(self, user_id: str, token: str) -> bool:
        active = await super().has_refresh_token(user_id, token)
        await asyncio.sleep(0)
        return active


class TestConcurrentRefresh:
    @pytest.fixture
    def store(self, clock):
        return YieldingCredentialStore(clock=clock)

    @pytest.mark.asyncio
    async def test_one_winner_when_both_pass_the_active_check(
        self, sessions, verified_user, store, caplog
    ):
        user = await verified_user()
        login = await sessions.login(TEST_EMAIL, TEST_PASSWORD)

        with caplog.at_level(logging.WARNING, logger="modules.auth.sessions"):
            results = await asyncio.gather(
                sessions.refresh(login.tokens.refresh_token),
                sessions.refresh(login.tokens.refresh_token),
                return_exceptions=True,
            )

        failures = [r for r in results if isinstance(r, Exception)]
        winners = [r for r in results if not isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], InvalidRefreshTokenError)
        assert "Lost refresh rotation race" in caplog.text

        record = await store.find_by_id(user.id)
        assert record.refresh_tokens == (winners[0].refresh_token,)
