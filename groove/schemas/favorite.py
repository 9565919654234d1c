"""
Favorite schemas
"""

from uuid import UUID

from groove.schemas.base import BaseSchema


class FavoriteStatus(BaseSchema):
    favorited_profile_id: UUID
    is_favorite: bool
