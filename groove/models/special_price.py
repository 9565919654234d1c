"""
Per-venue plan price override
"""

from sqlalchemy import Column, ForeignKey, Numeric, Integer, Uuid, UniqueConstraint

from groove.models.base import BaseModel


class SpecialPrice(BaseModel):
    __tablename__ = "special_prices"
    __table_args__ = (
        UniqueConstraint("artist_id", "venue_id", "plan_id", name="uq_special_price"),
    )

    artist_id = Column(Uuid(as_uuid=True), ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    venue_id = Column(Uuid(as_uuid=True), ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)
    plan_id = Column(Integer, nullable=False)
    special_price = Column(Numeric(10, 2), nullable=False)

    def __repr__(self):
        return f"<SpecialPrice(artist_id={self.artist_id}, venue_id={self.venue_id}, plan_id={self.plan_id})>"
