"""
Generic response schemas
"""

from pydantic import BaseModel, Field
from datetime import datetime, timezone


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MessageResponse(BaseModel):
    """Simple message response"""
    success: bool = True
    message: str
    timestamp: datetime = Field(default_factory=_now)
