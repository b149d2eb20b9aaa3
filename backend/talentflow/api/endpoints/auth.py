"""
Authentication API endpoints.

Demo sign-in for the back office: checks an email/password pair against the
users table and hands back the profile with a JWT token.
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from talentflow.core.config import settings
from talentflow.core.security import create_login_token, verify_password
from talentflow.db import store
from talentflow.db.session import get_db
from talentflow.models import User
from talentflow.services.network import NetworkSimulator, get_network

logger = logging.getLogger("auth")

router = APIRouter()


# ============== Pydantic Schemas ==============


class LoginRequest(BaseModel):
    """Schema for a login attempt."""

    email: str
    password: str


class UserProfile(BaseModel):
    """Schema for the signed-in user (without password)."""

    id: int
    email: str
    name: Optional[str] = None
    role: Optional[str] = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    success: bool = True
    user: UserProfile
    token: str


# ============== Helper Functions ==============


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get a user by email address."""
    return store.find_first(db, User, email=email)


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Return the user when the password matches, otherwise None."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


# ============== API Endpoints ==============


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    network: NetworkSimulator = Depends(get_network),
):
    """
    Sign in with email and password.

    Returns 401 for an unknown email or wrong password.
    """
    try:
        await network.pause(settings.LOGIN_DELAY_MS)

        user = authenticate_user(db, credentials.email, credentials.password)
        if not user:
            return JSONResponse(
                status_code=401,
                content={"success": False, "message": "Invalid email or password"},
            )

        token = create_login_token(user.email, role=user.role)
        return LoginResponse(user=UserProfile.model_validate(user), token=token)
    except Exception:
        logger.exception("Login failed")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Authentication service unavailable"},
        )
