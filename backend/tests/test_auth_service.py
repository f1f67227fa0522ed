"""Tests for registration, login and bearer-token validation."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidCredentialsError,
    PersistenceError,
    ValidationError,
)
from app.models.user import User
from app.services.auth_service import AuthService
from app.stores.user_store import user_store

from conftest import TEST_SECRET


class TestRegister:
    async def test_register_then_login(self, db_session, auth_service) -> None:
        user = await auth_service.register(db_session, "Asha", "asha@example.com", "s3cret!")
        assert user.id is not None
        assert user.password_hash != "s3cret!"

        result = await auth_service.login(db_session, "asha@example.com", "s3cret!")
        assert result.user.id == user.id
        assert auth_service.authenticate(result.token) == user.id

    @pytest.mark.parametrize(
        "name,email,password",
        [
            ("", "a@example.com", "pw"),
            ("Asha", None, "pw"),
            ("Asha", "a@example.com", ""),
        ],
    )
    async def test_register_requires_all_fields(
        self, db_session, auth_service, name, email, password
    ) -> None:
        with pytest.raises(ValidationError):
            await auth_service.register(db_session, name, email, password)

    async def test_duplicate_email_is_rejected(self, db_session, auth_service) -> None:
        first = await auth_service.register(db_session, "Asha", "asha@example.com", "first-pw")

        with pytest.raises(ConflictError) as exc_info:
            await auth_service.register(db_session, "Impostor", "asha@example.com", "second-pw")
        assert exc_info.value.message == "Email already exists!"

        stored = await user_store.get_by_email(db_session, "asha@example.com")
        assert stored.id == first.id
        assert stored.name == "Asha"
        assert auth_service.pwd_context.verify("first-pw", stored.password_hash)

    async def test_unique_constraint_maps_to_conflict(self, db_session) -> None:
        # Two inserts that both skipped the existence check
        await user_store.create(db_session, "One", "race@example.com", "hash-1")
        with pytest.raises(ConflictError):
            await user_store.create(db_session, "Two", "race@example.com", "hash-2")

    async def test_refresh_failure_after_insert_is_a_persistence_error(
        self, db_session, auth_service, monkeypatch
    ) -> None:
        async def failing_refresh(self, instance, *args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection reset"))

        monkeypatch.setattr(AsyncSession, "refresh", failing_refresh)
        with pytest.raises(PersistenceError):
            await auth_service.register(db_session, "Asha", "asha@example.com", "pw")

    async def test_password_uses_configured_bcrypt_rounds(self, db_session) -> None:
        service = AuthService(secret_key=TEST_SECRET, bcrypt_rounds=5)
        user = await service.register(db_session, "Ravi", "ravi@example.com", "pw")
        assert user.password_hash.startswith("$2b$05$")


class TestLogin:
    async def test_wrong_password_and_unknown_email_look_the_same(
        self, db_session, auth_service
    ) -> None:
        await auth_service.register(db_session, "Asha", "asha@example.com", "right")

        with pytest.raises(InvalidCredentialsError) as wrong_pw:
            await auth_service.login(db_session, "asha@example.com", "wrong")
        with pytest.raises(InvalidCredentialsError) as unknown:
            await auth_service.login(db_session, "nobody@example.com", "right")

        assert wrong_pw.value.message == unknown.value.message == "Invalid email or password!"
        assert wrong_pw.value.status_code == 400

    async def test_login_requires_both_fields(self, db_session, auth_service) -> None:
        with pytest.raises(ValidationError):
            await auth_service.login(db_session, "asha@example.com", None)


class TestAuthenticate:
    def test_round_trip(self, auth_service) -> None:
        user_id = uuid.uuid4()
        token = auth_service.create_access_token(user_id)
        assert auth_service.authenticate(token) == user_id

    def test_token_expires_after_one_hour(self, auth_service) -> None:
        issued = datetime.now(timezone.utc) - timedelta(minutes=61)
        token = auth_service.create_access_token(uuid.uuid4(), now=issued)
        with pytest.raises(AuthorizationError):
            auth_service.authenticate(token)

    def test_token_still_valid_inside_window(self, auth_service) -> None:
        user_id = uuid.uuid4()
        issued = datetime.now(timezone.utc) - timedelta(minutes=59)
        token = auth_service.create_access_token(user_id, now=issued)
        assert auth_service.authenticate(token) == user_id

    def test_tampered_signature_is_rejected(self, auth_service) -> None:
        token = auth_service.create_access_token(uuid.uuid4())
        header, payload, signature = token.split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
        with pytest.raises(AuthorizationError):
            auth_service.authenticate(".".join([header, payload, flipped]))

    def test_token_from_another_secret_is_rejected(self, auth_service) -> None:
        other = AuthService(secret_key="some-other-secret", bcrypt_rounds=4)
        with pytest.raises(AuthorizationError):
            auth_service.authenticate(other.create_access_token(uuid.uuid4()))

    def test_token_without_user_id_is_rejected(self, auth_service) -> None:
        exp = datetime.now(timezone.utc) + timedelta(minutes=5)
        token = jwt.encode({"exp": exp}, TEST_SECRET, algorithm="HS256")
        with pytest.raises(AuthorizationError):
            auth_service.authenticate(token)

    def test_garbage_token_is_rejected(self, auth_service) -> None:
        with pytest.raises(AuthorizationError):
            auth_service.authenticate("not-a-jwt")

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token_is_an_authentication_error(self, auth_service, token) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            auth_service.authenticate(token)
        assert not isinstance(exc_info.value, InvalidCredentialsError)
        assert exc_info.value.status_code == 401


def test_user_model_has_no_plaintext_password_column() -> None:
    assert "password" not in User.__table__.columns
    assert "password_hash" in User.__table__.columns
