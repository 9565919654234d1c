"""
User model
"""

from sqlalchemy import Column, String, Boolean, Enum
import enum

from groove.models.base import BaseModel


class UserRole(str, enum.Enum):
    ARTIST = "artist"
    VENUE = "venue"
    MUSICIAN = "musician"
    ADMIN = "admin"


class User(BaseModel):
    """
    Login account. Artist, venue and musician profiles share its id.
    """
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(20))
    role = Column(
        Enum(UserRole),
        nullable=False
    )
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
