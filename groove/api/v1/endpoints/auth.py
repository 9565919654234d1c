"""
Authentication endpoints
"""

from typing import Any
from uuid import UUID
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from groove.core.database import get_session, db_manager
from groove.core.exceptions import AuthenticationError, ConflictError
from groove.core.redis import get_redis
from groove.core.security import (
    get_password_hash,
    verify_password,
    get_current_user,
    decode_token,
    issue_tokens,
    oauth2_scheme,
    security_manager
)
from groove.models.artist import Artist
from groove.models.musician import Musician
from groove.models.user import User, UserRole
from groove.models.venue import Venue
from groove.schemas.response import MessageResponse
from groove.schemas.user import UserCreate, UserResponse, Token, TokenRefresh
from groove.services.profile_completeness_service import ProfileCompletenessService

logger = logging.getLogger(__name__)
router = APIRouter()


async def _create_profile(db: AsyncSession, user: User, user_data: UserCreate):
    """Profile row sharing the account's id"""
    if user.role == UserRole.ARTIST:
        referred_by = None
        if user_data.referral_code:
            if await db.get(Artist, user_data.referral_code):
                referred_by = user_data.referral_code
            else:
                logger.warning(f"Unknown referral code {user_data.referral_code} used by {user.email}")
        profile = Artist(
            id=user.id,
            name=user.full_name,
            email=user.email,
            phone=user.phone,
            city=user_data.city,
            booked_dates=[],
            referred_by=referred_by
        )
        check = ProfileCompletenessService.check_artist
    elif user.role == UserRole.VENUE:
        profile = Venue(id=user.id, name=user.full_name, email=user.email, city=user_data.city)
        check = ProfileCompletenessService.check_venue
    else:
        profile = Musician(id=user.id, name=user.full_name, email=user.email, phone=user.phone, city=user_data.city)
        check = ProfileCompletenessService.check_musician

    ProfileCompletenessService.refresh(profile, check)
    db.add(profile)


@router.post("/register", response_model=Token, status_code=201)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Register an artist, venue or musician account with its profile
    """
    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalar_one_or_none():
        raise ConflictError("Email already registered")

    async with db_manager.transaction(db):
        user = User(
            email=user_data.email,
            full_name=user_data.full_name,
            phone=user_data.phone,
            password_hash=get_password_hash(user_data.password),
            role=UserRole(user_data.role),
            is_active=True
        )
        db.add(user)
        await db.flush()
        await _create_profile(db, user, user_data)

    logger.info(f"Registered {user.role.value} account {user.id}")
    return {**issue_tokens(user), "user": UserResponse.model_validate(user)}


@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    OAuth2 compatible token login
    """
    result = await db.execute(select(User).where(User.email == form_data.username))
    user = result.scalar_one_or_none()

    if not user or not verify_password(form_data.password, user.password_hash):
        raise AuthenticationError("Incorrect email or password")

    if not user.is_active:
        raise AuthenticationError("User account is inactive")

    return {**issue_tokens(user), "user": UserResponse.model_validate(user)}


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise AuthenticationError("Invalid refresh token")


@router.post("/refresh", response_model=Token)
async def refresh_token(
    token_data: TokenRefresh,
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Refresh access token using refresh token
    """
    payload = decode_token(token_data.refresh_token)
    security_manager.verify_token_type(payload, "refresh")

    user_id = payload.get("sub")
    user = None
    if user_id:
        result = await db.execute(select(User).where(User.id == _parse_uuid(user_id)))
        user = result.scalar_one_or_none()

    if not user or not user.is_active:
        raise AuthenticationError("User not found or inactive")

    return {**issue_tokens(user), "user": UserResponse.model_validate(user)}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
) -> Any:
    return current_user


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: User = Depends(get_current_user),
    token: str = Depends(oauth2_scheme),
    redis_client=Depends(get_redis)
) -> Any:
    """
    Logout user and blacklist token
    """
    await security_manager.blacklist_token(redis_client, token)
    return {"message": "Successfully logged out"}
