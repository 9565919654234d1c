"""
Security utilities for authentication and authorization
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from uuid import UUID, uuid4
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import redis.asyncio as redis
import logging

from groove.config import settings
from groove.core.database import get_session
from groove.core.redis import get_redis
from groove.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError
from groove.models.user import User, UserRole
from groove.models.artist import Artist
from groove.models.venue import Venue
from groove.models.musician import Musician

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# OAuth2 schemes; the optional one lets anonymous visitors through
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login",
    auto_error=False
)

BLACKLIST_PREFIX = "blacklist:"


class SecurityManager:
    """
    Security manager for authentication and authorization
    """

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def hash_password(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def _encode(data: Dict[str, Any], token_type: str, expires_delta: timedelta) -> str:
        to_encode = data.copy()
        now = datetime.now(timezone.utc)
        to_encode.update({
            "exp": now + expires_delta,
            "iat": now,
            "type": token_type,
            "jti": uuid4().hex,
        })
        return jwt.encode(
            to_encode,
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM
        )

    @staticmethod
    def create_access_token(
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create a JWT access token
        """
        return SecurityManager._encode(
            data,
            "access",
            expires_delta or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
        )

    @staticmethod
    def create_refresh_token(
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create a JWT refresh token
        """
        return SecurityManager._encode(
            data,
            "refresh",
            expires_delta or timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS)
        )

    @staticmethod
    def decode_token(token: str) -> Dict[str, Any]:
        """
        Decode and verify a JWT token
        """
        try:
            return jwt.decode(
                token,
                settings.JWT_SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM]
            )
        except JWTError as e:
            logger.warning(f"JWT decode error: {e}")
            raise AuthenticationError("Could not validate credentials")

    @staticmethod
    def verify_token_type(payload: Dict[str, Any], expected_type: str):
        if payload.get("type") != expected_type:
            raise AuthenticationError(f"Invalid token type. Expected {expected_type}")

    @staticmethod
    async def is_token_blacklisted(client: redis.Redis, payload: Dict[str, Any]) -> bool:
        jti = payload.get("jti")
        if not jti:
            return False
        try:
            return await client.exists(f"{BLACKLIST_PREFIX}{jti}") > 0
        except Exception as e:
            logger.error(f"Error checking token blacklist: {e}")
            return False  # Fail open for availability

    @staticmethod
    async def blacklist_token(client: redis.Redis, token: str):
        """
        Add token to blacklist until it expires
        """
        payload = SecurityManager.decode_token(token)
        jti = payload.get("jti")
        if not jti:
            return
        expires_at = datetime.fromtimestamp(payload.get("exp", 0), tz=timezone.utc)
        ttl = max(1, int((expires_at - datetime.now(timezone.utc)).total_seconds()))
        await client.setex(f"{BLACKLIST_PREFIX}{jti}", ttl, "1")


# Create global security manager
security_manager = SecurityManager()

verify_password = security_manager.verify_password
get_password_hash = security_manager.hash_password
create_access_token = security_manager.create_access_token
create_refresh_token = security_manager.create_refresh_token
decode_token = security_manager.decode_token


def issue_tokens(user: User) -> Dict[str, str]:
    """
    Access and refresh token pair for a user
    """
    role = user.role.value if isinstance(user.role, UserRole) else user.role
    return {
        "access_token": create_access_token(
            data={"sub": str(user.id), "email": user.email, "role": role}
        ),
        "refresh_token": create_refresh_token(data={"sub": str(user.id)}),
        "token_type": "bearer",
    }


async def authenticate_token(token: str, db: AsyncSession, client: redis.Redis) -> User:
    """
    Resolve an access token to an active user.
    Shared by the HTTP dependencies and the WebSocket relays.
    """
    payload = decode_token(token)
    security_manager.verify_token_type(payload, "access")

    if await security_manager.is_token_blacklisted(client, payload):
        raise AuthenticationError("Token has been invalidated")

    user_id = payload.get("sub")
    if user_id is None:
        raise AuthenticationError("Could not validate credentials")

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        raise AuthenticationError("Could not validate credentials")

    result = await db.execute(select(User).where(User.id == user_uuid))
    user = result.scalar_one_or_none()
    if not user:
        raise AuthenticationError("User not found")
    if not user.is_active:
        raise AuthenticationError("User account is inactive")
    return user


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_session),
    client: redis.Redis = Depends(get_redis)
) -> User:
    """
    Get current user from JWT token with blacklist checking
    """
    return await authenticate_token(token, db, client)


async def get_optional_user(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: AsyncSession = Depends(get_session),
    client: redis.Redis = Depends(get_redis)
) -> Optional[User]:
    """
    Current user when a token is sent, None for anonymous requests
    """
    if not token:
        return None
    return await authenticate_token(token, db, client)


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """
    Require admin role for endpoint
    """
    if current_user.role != UserRole.ADMIN:
        raise AuthorizationError("Admin access required")
    return current_user


def _require_role(user: User, role: UserRole):
    if user.role != role:
        raise AuthorizationError(f"{role.value.capitalize()} account required")


async def get_current_artist(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Artist:
    """
    Artist profile owned by the current user
    """
    _require_role(current_user, UserRole.ARTIST)
    artist = await db.get(Artist, current_user.id)
    if not artist:
        raise NotFoundError("Artist", current_user.id)
    return artist


async def get_current_venue(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Venue:
    """
    Venue profile owned by the current user
    """
    _require_role(current_user, UserRole.VENUE)
    venue = await db.get(Venue, current_user.id)
    if not venue:
        raise NotFoundError("Venue", current_user.id)
    return venue


async def get_current_musician(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Musician:
    _require_role(current_user, UserRole.MUSICIAN)
    musician = await db.get(Musician, current_user.id)
    if not musician:
        raise NotFoundError("Musician", current_user.id)
    return musician
