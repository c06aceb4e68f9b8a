"""
Password hashing and bearer tokens.

Tokens are HS256 JWTs signed with ``SECRET_KEY``. A user token carries
``sub``/``username`` and ``isAdmin``; every token we issue is marked
``type: access`` and expires after ``ACCESS_TOKEN_EXPIRE_MINUTES``.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from jobly.core.config import settings

ACCESS_TOKEN_TYPE = "access"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    claims: Mapping[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign ``claims`` as an access token.

    Args:
        claims: Payload to carry; ``type`` and ``exp`` are set here
        expires_delta: Lifetime, defaults to the configured expiry
    """
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        **claims,
        "type": ACCESS_TOKEN_TYPE,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def create_user_token(username: str, is_admin: bool) -> str:
    """Token for a logged-in user; what the auth dependencies read back."""
    return create_access_token(
        {"sub": username, "username": username, "isAdmin": bool(is_admin)}
    )


def decode_token(token: str) -> Optional[dict[str, Any]]:
    """
    Claims of a valid access token.

    Returns None when the signature or expiry does not check out, or the
    token is not an access token.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    if payload.get("type") != ACCESS_TOKEN_TYPE:
        return None
    return payload
