"""
User and authentication schemas
"""

from pydantic import EmailStr, Field, field_validator
from typing import Optional, Literal
from uuid import UUID
import re

from groove.schemas.base import BaseSchema, IDSchema, TimestampSchema
from groove.models.user import UserRole


class UserBase(BaseSchema):
    """Base user schema"""
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)


class UserCreate(UserBase):
    """
    Registration payload. Creates the account and its profile row.
    `referral_code` is the referring artist's id and only applies to artists.
    """
    password: str = Field(..., min_length=8, max_length=100)
    role: Literal["artist", "venue", "musician"]
    city: Optional[str] = Field(None, max_length=100)
    referral_code: Optional[UUID] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "band@groove.music",
                "full_name": "The Midnight Band",
                "phone": "+5511999999999",
                "password": "Groove123!",
                "role": "artist",
                "city": "Sao Paulo"
            }
        }
    }

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        if not re.match(r'^(?=.*[A-Za-z])(?=.*\d)(?=.*[@$!%*#?&])[A-Za-z\d@$!%*#?&]{8,}$', v):
            raise ValueError('Password must contain at least one letter, one number, and one special character')
        return v

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        if v and not re.match(r'^\+?[1-9]\d{1,14}$', v):
            raise ValueError('Invalid phone number format')
        return v


class UserResponse(UserBase, IDSchema, TimestampSchema):
    """User response schema"""
    role: UserRole
    is_active: bool


class Token(BaseSchema):
    """Token schema with user info"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: Optional[UserResponse] = None


class TokenRefresh(BaseSchema):
    """Token refresh schema"""
    refresh_token: str
