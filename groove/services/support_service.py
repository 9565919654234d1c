"""
Support tickets raised against bookings
"""

from typing import Any, Dict, List
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.orm import aliased
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import db_manager
from groove.core.exceptions import AuthorizationError, NotFoundError
from groove.models.artist import Artist
from groove.models.booking import Booking
from groove.models.chat import SenderType
from groove.models.support_ticket import SupportTicket, TicketStatus
from groove.models.venue import Venue

logger = logging.getLogger(__name__)


class SupportService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_ticket(
        self,
        booking_id: UUID,
        reporter_id: UUID,
        reporter_type: SenderType,
        description: str
    ) -> SupportTicket:
        """
        Open a ticket; only the booking's artist or venue may report
        """
        booking = await self.db.get(Booking, booking_id)
        if not booking:
            raise NotFoundError("Booking", booking_id)

        expected = booking.artist_id if reporter_type == SenderType.ARTIST else booking.venue_id
        if reporter_id != expected:
            raise AuthorizationError("Only the booking's artist or venue can report a problem")

        async with db_manager.transaction(self.db):
            ticket = SupportTicket(
                booking_id=booking_id,
                reporter_id=reporter_id,
                reporter_type=reporter_type,
                description=description.strip(),
                status=TicketStatus.OPEN
            )
            self.db.add(ticket)
            await self.db.flush()

        logger.info(f"Support ticket {ticket.id} opened on booking {booking_id} by {reporter_type.value} {reporter_id}")
        return ticket

    async def get_all_tickets(self) -> List[Dict[str, Any]]:
        artist = aliased(Artist)
        venue = aliased(Venue)
        result = await self.db.execute(
            select(SupportTicket, Booking.date, artist.name, venue.name)
            .outerjoin(Booking, Booking.id == SupportTicket.booking_id)
            .outerjoin(artist, artist.id == Booking.artist_id)
            .outerjoin(venue, venue.id == Booking.venue_id)
            .order_by(SupportTicket.created_at.desc())
        )

        tickets = []
        for ticket, booking_date, artist_name, venue_name in result.all():
            data = ticket.dict()
            data["booking_date"] = booking_date
            data["artist_name"] = artist_name
            data["venue_name"] = venue_name
            data["reporter_name"] = artist_name if ticket.reporter_type == SenderType.ARTIST else venue_name
            tickets.append(data)
        return tickets

    async def update_ticket_status(self, ticket_id: UUID, status: TicketStatus) -> SupportTicket:
        ticket = await self.db.get(SupportTicket, ticket_id)
        if not ticket:
            raise NotFoundError("Ticket", ticket_id)
        async with db_manager.transaction(self.db):
            ticket.status = TicketStatus(status)
        return ticket
