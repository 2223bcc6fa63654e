# schoolride/routes/auth.py
"""Authentication endpoints: login, token generation and registration."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
from schoolride.auth import (
    create_access_token,
    authenticate_user,
)
from schoolride.database import get_session
from schoolride.models import User
from schoolride.crud import get_settings, create_user, count_users, get_user_by_email
from schoolride.acl import ROLE_ADMIN
from schoolride.schemas.user import UserCreate, UserResponse, UserLogin

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "code": "auth_invalid_credentials",
            "message": "Invalid email or password",
        },
    )


@router.post("/token")
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_session),
):
    """OAuth2 password flow used by interactive docs and external clients."""

    user = await authenticate_user(db, form_data.username, form_data.password)
    if not user:
        logger.warning("Failed OAuth login for %s", form_data.username)
        raise _invalid_credentials()
    logger.info("User %s logged in via OAuth form", user.email)
    access_token = create_access_token(data={"sub": user.email})
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/login")
async def login(user_in: UserLogin, db: AsyncSession = Depends(get_session)):
    """JSON-based login used by the frontend."""

    user = await authenticate_user(
        db=db, email=user_in.email, password=user_in.password
    )
    if not user:
        logger.warning("Failed login for %s", user_in.email)
        raise _invalid_credentials()
    logger.info("User %s logged in", user.email)
    access_token = create_access_token(data={"sub": user.email})
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/needs-admin")
async def needs_admin(db: AsyncSession = Depends(get_session)):
    """Return ``True`` if no users exist and an admin must be created."""

    return {"needs_admin": await count_users(db) == 0}


@router.post("/register", response_model=UserResponse)
async def register(user_in: UserCreate, db: AsyncSession = Depends(get_session)):
    """Register a parent or driver account, or create the initial admin."""

    is_first_user = await count_users(db) == 0

    if not is_first_user:
        settings = await get_settings(db)
        if settings.public_registration_disabled:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Registration disabled",
            )

    if await get_user_by_email(db, user_in.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "code": "auth_email_registered",
                "message": "Email is already registered.",
            },
        )

    new_user = User(
        name=user_in.name,
        email=user_in.email,
        phone=user_in.phone,
        password_hash=user_in.password,
        role=ROLE_ADMIN if is_first_user else user_in.role,
    )
    new_user = await create_user(db, new_user)
    logger.info(
        "User %s registered as %s",
        new_user.email,
        "initial admin" if is_first_user else new_user.role,
    )
    return new_user
