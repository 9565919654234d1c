"""
Artist profile model
"""

from sqlalchemy import Column, String, Boolean, Enum, Text, Numeric, Integer, DateTime, ForeignKey, Uuid
import enum

from groove.models.base import BaseModel, JSONType


class ArtistStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    BLOCKED = "blocked"


class Artist(BaseModel):
    """
    Performer or band profile that venues can book.
    The primary key is the owning user's id.
    """
    __tablename__ = "artists"

    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255))
    phone = Column(String(20))
    city = Column(String(100), index=True)
    genre = Column(JSONType, default=lambda: {"primary": "", "secondary": []})
    image_url = Column(Text)
    youtube_video_id = Column(String(50))
    bio = Column(Text)
    socials = Column(JSONType, default=dict)

    # Denormalized calendar, list of YYYY-MM-DD strings
    booked_dates = Column(JSONType, default=list, nullable=False)

    gallery = Column(JSONType, default=list)
    plans = Column(JSONType, default=list)
    repertoire = Column(JSONType, default=list)
    testimonials = Column(JSONType, default=list)
    hospitality_rider = Column(JSONType, default=list)
    technical_requirements = Column(JSONType)
    band_members = Column(JSONType, default=list)

    status = Column(
        Enum(ArtistStatus),
        default=ArtistStatus.PENDING,
        nullable=False,
        index=True
    )
    is_pro = Column(Boolean, default=False, nullable=False)
    pro_subscription_ends_at = Column(DateTime(timezone=True))
    profile_completeness = Column(
        JSONType,
        default=lambda: {"is_complete": False, "missing_fields": []}
    )
    is_profile_complete = Column(Boolean, default=False, nullable=False, index=True)

    is_freelancer = Column(Boolean, default=False, nullable=False)
    freelancer_instruments = Column(JSONType, default=list)
    freelancer_rate = Column(Numeric(10, 2))
    freelancer_rate_unit = Column(String(20))

    is_featured = Column(Boolean, default=False, nullable=False)
    quality_score = Column(Integer)
    quality_issues = Column(JSONType, default=list)

    referred_by = Column(Uuid(as_uuid=True), ForeignKey("artists.id", ondelete="SET NULL"), index=True)

    def find_plan(self, plan_id):
        """Return the plan dict with the given id, if any"""
        if plan_id is None:
            return None
        for plan in self.plans or []:
            if plan.get("id") == plan_id:
                return plan
        return None

    def __repr__(self):
        return f"<Artist(id={self.id}, name={self.name}, status={self.status})>"
