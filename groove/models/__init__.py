"""
Database models
"""

from groove.models.user import User, UserRole
from groove.models.artist import Artist, ArtistStatus
from groove.models.venue import Venue, VenueStatus
from groove.models.musician import Musician
from groove.models.booking import Booking, BookingStatus, PayoutStatus, ManualGig
from groove.models.chat import Conversation, Message, MessageRead, SenderType
from groove.models.transaction import (
    PersonalTransaction,
    PlatformTransaction,
    TransactionType,
    TransactionStatus
)
from groove.models.special_price import SpecialPrice
from groove.models.offer import DirectOffer, GigOffer, OfferStatus, GigStatus
from groove.models.favorite import Favorite
from groove.models.support_ticket import SupportTicket, TicketStatus
from groove.models.platform_setting import PlatformSetting, COMMISSION_RATE_KEY

__all__ = [
    "User",
    "UserRole",
    "Artist",
    "ArtistStatus",
    "Venue",
    "VenueStatus",
    "Musician",
    "Booking",
    "BookingStatus",
    "PayoutStatus",
    "ManualGig",
    "Conversation",
    "Message",
    "MessageRead",
    "SenderType",
    "PersonalTransaction",
    "PlatformTransaction",
    "TransactionType",
    "TransactionStatus",
    "SpecialPrice",
    "DirectOffer",
    "GigOffer",
    "OfferStatus",
    "GigStatus",
    "Favorite",
    "SupportTicket",
    "TicketStatus",
    "PlatformSetting",
    "COMMISSION_RATE_KEY"
]
