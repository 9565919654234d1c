"""
Favorite model
"""

from sqlalchemy import Column, ForeignKey, Uuid, UniqueConstraint

from groove.models.base import BaseModel


class Favorite(BaseModel):
    """
    A user's bookmark of another profile (venue -> artist or artist -> venue)
    """
    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "favorited_profile_id", name="uq_favorite"),
    )

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    favorited_profile_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    def __repr__(self):
        return f"<Favorite(user_id={self.user_id}, favorited_profile_id={self.favorited_profile_id})>"
