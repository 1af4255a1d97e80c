from __future__ import annotations

import time
from dataclasses import dataclass

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from jobtracker.config import settings
from jobtracker.errors import AuthError


security = HTTPBearer(auto_error=False)
BCRYPT_MAX_PASSWORD_BYTES = 72
TOKEN_TTL_SECONDS = settings.token_ttl_days * 24 * 60 * 60


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    username: str


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash or over-long candidate
        return False


def create_access_token(user_id: int, username: str, ttl_seconds: int | None = None) -> str:
    issued_at = int(time.time())
    ttl = TOKEN_TTL_SECONDS if ttl_seconds is None else ttl_seconds
    claims = {
        "userId": user_id,
        "username": username,
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenClaims | None:
    """Return the identity carried by a valid token, or None if the token is unusable.

    Expiry and signature are both checked by ``jwt.decode``.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

    user_id = payload.get("userId")
    username = payload.get("username")
    if isinstance(user_id, bool) or not isinstance(user_id, int) or not isinstance(username, str):
        return None
    return TokenClaims(user_id=user_id, username=username)


def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TokenClaims:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthError("Access token required")

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise AuthError("Invalid or expired token", status_code=403)
    return claims
