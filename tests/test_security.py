"""
Tests for core/security.py and the authorization dependencies.

Tests:
- Password hashing
- Token creation and decoding
- Identity extraction from tokens
- The require_* guards over RequestContext
"""
from datetime import timedelta

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from jobly.api.deps import (
    RequestContext,
    authenticate,
    identity_from_token,
    require_admin,
    require_logged_in,
    require_self_or_admin,
)
from jobly.core.config import settings
from jobly.core.exceptions import UnauthorizedException
from jobly.core.security import (
    create_access_token,
    create_user_token,
    decode_token,
    hash_password,
    verify_password,
)
from jobly.schemas.auth import Identity


ANONYMOUS = RequestContext()
USER_U1 = RequestContext(identity=Identity(username="u1", is_admin=False))
ADMIN = RequestContext(identity=Identity(username="a1", is_admin=True))


def bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestPasswords:
    def test_hash_is_not_plain_text(self):
        hashed = hash_password("password1")

        assert hashed != "password1"
        assert hashed.startswith("$2")

    def test_verify(self):
        hashed = hash_password("password1")

        assert verify_password("password1", hashed) is True
        assert verify_password("wrong", hashed) is False


class TestTokens:
    def test_user_token_claims(self):
        payload = decode_token(create_user_token("u1", True))

        assert payload["sub"] == "u1"
        assert payload["username"] == "u1"
        assert payload["isAdmin"] is True
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_other_token_type(self):
        token = jwt.encode(
            {"sub": "u1", "type": "refresh"}, settings.secret_key, algorithm=settings.algorithm
        )

        assert decode_token(token) is None

    def test_garbage_token(self):
        assert decode_token("not-a-token") is None

    def test_expired_token(self):
        token = create_access_token({"sub": "u1"}, expires_delta=timedelta(seconds=-10))

        assert decode_token(token) is None


class TestIdentityFromToken:
    def test_valid_token(self):
        identity = identity_from_token(create_user_token("u1", False))

        assert identity == Identity(username="u1", is_admin=False)

    def test_admin_claim(self):
        assert identity_from_token(create_user_token("a1", True)).is_admin is True

    def test_wrong_type_rejected(self):
        payload = {"sub": "u1", "username": "u1", "type": "refresh"}
        token = jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)

        assert identity_from_token(token) is None

    def test_missing_username_rejected(self):
        assert identity_from_token(create_access_token({"isAdmin": True})) is None

    def test_invalid_signature_rejected(self):
        payload = {"sub": "a1", "username": "a1", "isAdmin": True, "type": "access"}
        token = jwt.encode(payload, "some-other-key", algorithm=settings.algorithm)

        assert identity_from_token(token) is None


class TestAuthenticate:
    async def test_no_header_is_anonymous(self):
        context = await authenticate(None)

        assert context.is_authenticated is False
        assert context.is_admin is False

    async def test_valid_token(self):
        context = await authenticate(bearer(create_user_token("u1", False)))

        assert context.identity.username == "u1"
        assert context.is_admin is False

    async def test_invalid_token_is_anonymous_not_error(self):
        context = await authenticate(bearer("nope"))

        assert context == RequestContext()


class TestRequireLoggedIn:
    async def test_anonymous(self):
        with pytest.raises(UnauthorizedException):
            await require_logged_in(ANONYMOUS)

    async def test_user(self):
        assert (await require_logged_in(USER_U1)).username == "u1"


class TestRequireAdmin:
    async def test_anonymous(self):
        with pytest.raises(UnauthorizedException):
            await require_admin(ANONYMOUS)

    async def test_non_admin(self):
        with pytest.raises(UnauthorizedException) as exc_info:
            await require_admin(USER_U1)

        assert exc_info.value.status_code == 401

    async def test_admin(self):
        assert (await require_admin(ADMIN)).is_admin is True


class TestRequireSelfOrAdmin:
    async def test_self(self):
        assert (await require_self_or_admin("u1", USER_U1)).username == "u1"

    async def test_admin_for_anyone(self):
        assert (await require_self_or_admin("u2", ADMIN)).username == "a1"

    async def test_other_user(self):
        with pytest.raises(UnauthorizedException):
            await require_self_or_admin("u2", USER_U1)

    async def test_anonymous(self):
        with pytest.raises(UnauthorizedException):
            await require_self_or_admin("u1", ANONYMOUS)
