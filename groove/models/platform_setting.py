"""
Key/value platform settings
"""

from sqlalchemy import Column, String, Text

from groove.models.base import BaseModel

COMMISSION_RATE_KEY = "commission_rate"


class PlatformSetting(BaseModel):
    __tablename__ = "platform_settings"

    key = Column(String(100), unique=True, nullable=False, index=True)
    value = Column(Text, nullable=False)

    def __repr__(self):
        return f"<PlatformSetting(key={self.key}, value={self.value})>"
