"""
Personal and platform ledger schemas
"""

from pydantic import Field
from typing import Optional
from uuid import UUID
import datetime
from datetime import date

from groove.schemas.base import BaseSchema, IDSchema, TimestampSchema
from groove.models.transaction import TransactionType, TransactionStatus


class PersonalTransactionCreate(BaseSchema):
    type: TransactionType
    description: str = Field(..., min_length=1)
    category: Optional[str] = Field(None, max_length=100)
    value: float = Field(..., ge=0)
    status: TransactionStatus = TransactionStatus.PENDING
    date: date


class PersonalTransactionUpdate(BaseSchema):
    """Type is fixed at creation"""
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, max_length=100)
    value: Optional[float] = Field(None, ge=0)
    status: Optional[TransactionStatus] = None
    date: Optional[datetime.date] = None


class TransactionStatusUpdate(BaseSchema):
    status: TransactionStatus


class PersonalTransactionResponse(IDSchema, TimestampSchema):
    artist_id: UUID
    type: TransactionType
    description: str
    category: Optional[str] = None
    value: float
    status: TransactionStatus
    date: date


class PlatformTransactionCreate(BaseSchema):
    description: str = Field(..., min_length=1)
    type: TransactionType
    category: Optional[str] = Field(None, max_length=100)
    value: float = Field(..., ge=0)
    status: TransactionStatus = TransactionStatus.PENDING
    due_date: date


class PlatformTransactionUpdate(BaseSchema):
    description: Optional[str] = Field(None, min_length=1)
    type: Optional[TransactionType] = None
    category: Optional[str] = Field(None, max_length=100)
    value: Optional[float] = Field(None, ge=0)
    status: Optional[TransactionStatus] = None
    due_date: Optional[date] = None


class PlatformTransactionResponse(IDSchema, TimestampSchema):
    description: str
    type: TransactionType
    category: Optional[str] = None
    value: float
    status: TransactionStatus
    due_date: date
    booking_id: Optional[UUID] = None
