"""
Personal and platform ledger models
"""

from sqlalchemy import Column, String, ForeignKey, Enum, Numeric, Date, Text, Uuid
import enum

from groove.models.base import BaseModel


class TransactionType(str, enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"


class TransactionStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"


class PersonalTransaction(BaseModel):
    """
    Artist's own income/expense entry
    """
    __tablename__ = "personal_transactions"

    artist_id = Column(Uuid(as_uuid=True), ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(Enum(TransactionType), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(100))
    value = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(TransactionStatus),
        default=TransactionStatus.PENDING,
        nullable=False
    )
    date = Column(Date, nullable=False, index=True)

    def __repr__(self):
        return f"<PersonalTransaction(id={self.id}, type={self.type}, value={self.value})>"


class PlatformTransaction(BaseModel):
    """
    Platform ledger entry; commission records point at their booking
    """
    __tablename__ = "platform_transactions"

    description = Column(Text, nullable=False)
    type = Column(Enum(TransactionType, name="platformtransactiontype"), nullable=False)
    category = Column(String(100))
    value = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(TransactionStatus, name="platformtransactionstatus"),
        default=TransactionStatus.PENDING,
        nullable=False
    )
    due_date = Column(Date, nullable=False, index=True)
    booking_id = Column(Uuid(as_uuid=True), ForeignKey("bookings.id", ondelete="SET NULL"), index=True)

    def __repr__(self):
        return f"<PlatformTransaction(id={self.id}, category={self.category}, value={self.value})>"
