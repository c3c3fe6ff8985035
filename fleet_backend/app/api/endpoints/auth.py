"""
Authentication API endpoints.

Provides register, login and profile endpoints for the back-office clients.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import insert, or_, select, update

from fleet_backend.app.core.dependencies import get_current_user
from fleet_backend.app.core.exceptions import (
    AuthenticationError,
    DuplicateResourceError,
    NoFieldsToUpdateError,
    ResourceNotFoundError,
)
from fleet_backend.app.core.jwt import create_access_token
from fleet_backend.app.core.security import get_password_hash, verify_password
from fleet_backend.app.db.session import Database, get_database
from fleet_backend.app.models.user import User
from fleet_backend.app.schemas.auth import LoginData, ProfileUpdate, UserLogin, UserRegister, UserResponse
from fleet_backend.app.schemas.common import ApiResponse, ok

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


async def _load_user(db: Database, user_id: int) -> dict:
    user = await db.fetch_one(select(User.__table__).where(User.id == user_id))
    if user is None:
        raise ResourceNotFoundError("User", user_id)
    return user


@router.post("/register", response_model=ApiResponse[LoginData], status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: Database = Depends(get_database)
):
    """
    Register a new back-office user and return a token for it.

    Username and email must both be unused.
    """
    existing_user = await db.fetch_one(
        select(User.username, User.email).where(
            or_(User.username == user_data.username, User.email == user_data.email)
        )
    )
    if existing_user:
        if existing_user["username"] == user_data.username:
            raise DuplicateResourceError("Username already registered")
        raise DuplicateResourceError("Email already registered")

    result = await db.execute(
        insert(User).values(
            email=user_data.email,
            username=user_data.username,
            hashed_password=get_password_hash(user_data.password),
            full_name=user_data.full_name,
            role=user_data.role,
            is_active=True,
        )
    )
    user = await _load_user(db, result.inserted_id)
    logger.info("Registered user %s", user["username"])

    return ok({"user": user, "token": create_access_token(user)}, "User registered successfully")


@router.post("/login", response_model=ApiResponse[LoginData])
async def login(
    credentials: UserLogin,
    db: Database = Depends(get_database)
):
    """
    Login user and return JWT token.

    Accepts username or email for login.
    """
    user = await db.fetch_one(
        select(User.__table__).where(
            or_(User.username == credentials.username, User.email == credentials.username)
        )
    )

    if not user or not verify_password(credentials.password, user["hashed_password"]):
        logger.warning("Failed login for %s", credentials.username)
        raise AuthenticationError("Invalid credentials")

    if not user["is_active"]:
        logger.warning("Login attempt on deactivated account %s", user["username"])
        raise AuthenticationError("Account is deactivated")

    return ok({"user": user, "token": create_access_token(user)}, "Login successful")


@router.get("/profile", response_model=ApiResponse[UserResponse])
async def get_profile(
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_database)
):
    """Get the authenticated user's profile."""
    return ok(await _load_user(db, current_user["user_id"]), "Profile retrieved successfully")


@router.put("/profile", response_model=ApiResponse[UserResponse])
async def update_profile(
    profile_data: ProfileUpdate,
    current_user: dict = Depends(get_current_user),
    db: Database = Depends(get_database)
):
    """
    Update email, full name or password.

    Changing the password requires the current password.
    """
    user = await _load_user(db, current_user["user_id"])
    changes = profile_data.model_dump(exclude_unset=True, exclude={"current_password", "new_password"})
    changes = {key: value for key, value in changes.items() if value is not None}

    if profile_data.new_password:
        if not profile_data.current_password or not verify_password(
            profile_data.current_password, user["hashed_password"]
        ):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Current password is incorrect"
            )
        changes["hashed_password"] = get_password_hash(profile_data.new_password)

    if not changes:
        raise NoFieldsToUpdateError("Profile")

    if "email" in changes and changes["email"] != user["email"]:
        taken = await db.fetch_one(select(User.id).where(User.email == changes["email"]))
        if taken:
            raise DuplicateResourceError("Email already registered")

    await db.execute(update(User).where(User.id == user["id"]).values(**changes))
    return ok(await _load_user(db, user["id"]), "Profile updated successfully")
