"""
API endpoints module
"""

from . import (
    admin,
    artists,
    auth,
    bookings,
    conversations,
    favorites,
    finances,
    gigs,
    health,
    manual_gigs,
    musicians,
    offers,
    referrals,
    special_prices,
    support,
    venues,
    websocket,
)

__all__ = [
    "admin",
    "artists",
    "auth",
    "bookings",
    "conversations",
    "favorites",
    "finances",
    "gigs",
    "health",
    "manual_gigs",
    "musicians",
    "offers",
    "referrals",
    "special_prices",
    "support",
    "venues",
    "websocket",
]
