"""
Artist personal finance endpoints
"""

from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import get_session
from groove.core.security import get_current_artist
from groove.models.artist import Artist
from groove.schemas.finance import (
    PersonalTransactionCreate,
    PersonalTransactionResponse,
    PersonalTransactionUpdate,
    TransactionStatusUpdate,
)
from groove.schemas.response import MessageResponse
from groove.services.financial_service import FinancialService

router = APIRouter()


@router.get("", response_model=List[PersonalTransactionResponse])
async def list_transactions(
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await FinancialService(db).get_transactions(artist.id)


@router.post("", response_model=PersonalTransactionResponse, status_code=status.HTTP_201_CREATED)
async def add_transaction(
    transaction_data: PersonalTransactionCreate,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await FinancialService(db).add_transaction(artist.id, transaction_data.model_dump())


@router.put("/{transaction_id}", response_model=PersonalTransactionResponse)
async def update_transaction(
    transaction_id: UUID,
    transaction_data: PersonalTransactionUpdate,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await FinancialService(db).update_transaction(
        transaction_id, artist.id, transaction_data.model_dump(exclude_unset=True)
    )


@router.patch("/{transaction_id}/status", response_model=PersonalTransactionResponse)
async def update_transaction_status(
    transaction_id: UUID,
    status_update: TransactionStatusUpdate,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Mark an entry paid or pending
    """
    return await FinancialService(db).update_transaction_status(
        transaction_id, artist.id, status_update.status
    )


@router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(
    transaction_id: UUID,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    await FinancialService(db).delete_transaction(transaction_id, artist.id)
    return {"message": "Transaction deleted"}
