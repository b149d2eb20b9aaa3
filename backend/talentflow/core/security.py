"""
Credential helpers for the demo sign-in.

Passwords are kept as bcrypt hashes; a successful login returns a signed
JWT that the front end treats as an opaque session token.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from talentflow.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """True when ``plain_password`` hashes to ``hashed_password``."""
    return pwd_context.verify(plain_password, hashed_password)


def create_login_token(email: str, role: Optional[str] = None, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a token for a user who just logged in.

    Claims: ``sub`` (email), ``role`` and ``exp``. Lifetime defaults to
    ACCESS_TOKEN_EXPIRE_MINUTES.
    """
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims = {"sub": email, "iat": issued_at, "exp": issued_at + lifetime}
    if role:
        claims["role"] = role

    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
