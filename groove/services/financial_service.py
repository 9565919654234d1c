"""
Artist personal finances
"""

from decimal import Decimal
from typing import Any, Dict, List
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import db_manager
from groove.core.exceptions import AuthorizationError, NotFoundError
from groove.models.transaction import PersonalTransaction, TransactionStatus

logger = logging.getLogger(__name__)


class FinancialService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_transactions(self, artist_id: UUID) -> List[PersonalTransaction]:
        result = await self.db.execute(
            select(PersonalTransaction)
            .where(PersonalTransaction.artist_id == artist_id)
            .order_by(PersonalTransaction.date.desc(), PersonalTransaction.created_at.desc())
        )
        return list(result.scalars().all())

    async def _get_owned(self, transaction_id: UUID, artist_id: UUID) -> PersonalTransaction:
        transaction = await self.db.get(PersonalTransaction, transaction_id)
        if not transaction:
            raise NotFoundError("Transaction", transaction_id)
        if transaction.artist_id != artist_id:
            raise AuthorizationError("Transaction belongs to another artist")
        return transaction

    async def add_transaction(self, artist_id: UUID, payload: Dict[str, Any]) -> PersonalTransaction:
        async with db_manager.transaction(self.db):
            transaction = PersonalTransaction(
                artist_id=artist_id,
                **{**payload, "value": Decimal(str(payload["value"]))}
            )
            self.db.add(transaction)
            await self.db.flush()
        return transaction

    async def update_transaction(
        self,
        transaction_id: UUID,
        artist_id: UUID,
        payload: Dict[str, Any]
    ) -> PersonalTransaction:
        """
        Edit an entry; its type stays what it was created as
        """
        transaction = await self._get_owned(transaction_id, artist_id)
        payload.pop("type", None)

        async with db_manager.transaction(self.db):
            for field, value in payload.items():
                if field == "value":
                    value = Decimal(str(value))
                setattr(transaction, field, value)
        return transaction

    async def update_transaction_status(
        self,
        transaction_id: UUID,
        artist_id: UUID,
        status: TransactionStatus
    ) -> PersonalTransaction:
        transaction = await self._get_owned(transaction_id, artist_id)
        async with db_manager.transaction(self.db):
            transaction.status = TransactionStatus(status)
        return transaction

    async def delete_transaction(self, transaction_id: UUID, artist_id: UUID) -> None:
        transaction = await self._get_owned(transaction_id, artist_id)
        async with db_manager.transaction(self.db):
            await self.db.delete(transaction)
