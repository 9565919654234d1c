"""
Main API Router
Aggregates all API endpoints for v1
"""

from fastapi import APIRouter
from groove.api.v1.endpoints import (
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
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(artists.router, prefix="/artists", tags=["artists"])
api_router.include_router(venues.router, prefix="/venues", tags=["venues"])
api_router.include_router(musicians.router, prefix="/musicians", tags=["musicians"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(manual_gigs.router, prefix="/manual-gigs", tags=["manual gigs"])
api_router.include_router(conversations.router, prefix="/conversations", tags=["chat"])
api_router.include_router(offers.router, prefix="/offers", tags=["offers"])
api_router.include_router(gigs.router, prefix="/gigs", tags=["gigs"])
api_router.include_router(special_prices.router, prefix="/special-prices", tags=["special prices"])
api_router.include_router(finances.router, prefix="/finances", tags=["finances"])
api_router.include_router(referrals.router, prefix="/referrals", tags=["referrals"])
api_router.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
api_router.include_router(support.router, prefix="/support", tags=["support"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
