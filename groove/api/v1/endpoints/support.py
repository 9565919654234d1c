"""
Support ticket endpoints
"""

from typing import Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import get_session
from groove.core.security import get_current_user
from groove.models.user import User
from groove.schemas.support import TicketCreate, TicketResponse
from groove.services.chat_service import sender_type_for
from groove.services.support_service import SupportService

router = APIRouter()


@router.post("/tickets", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
async def report_problem(
    ticket_data: TicketCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Report a problem with a booking. Only the booking's artist or venue can.
    """
    return await SupportService(db).create_ticket(
        ticket_data.booking_id,
        current_user.id,
        sender_type_for(current_user),
        ticket_data.description
    )
