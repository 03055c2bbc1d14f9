"""
Booking Service - the booking record store used by the payment flows.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import BookingNotFound, InvalidRequest, PersistenceError
from app.fsm.states import BookingStatus, GatewayName
from app.fsm.transitions import BookingTransition, apply_transition
from app.models.booking import Booking

logger = logging.getLogger(__name__)


class BookingService:
    """Read-one / update-one access to bookings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_booking(self, booking_id: str) -> Booking:
        """Load a booking by id or raise BookingNotFound."""
        try:
            booking_uuid = uuid.UUID(str(booking_id))
        except ValueError:
            logger.error(f"Invalid booking_id format: {booking_id}")
            raise InvalidRequest(f"Invalid booking id: {booking_id}")

        result = await self.db.execute(
            select(Booking).where(Booking.id == booking_uuid)
        )
        booking = result.scalar_one_or_none()

        if not booking:
            raise BookingNotFound(str(booking_id))

        return booking

    async def apply(
        self,
        booking_id: str,
        transition: BookingTransition,
        payment_method: Optional[GatewayName] = None,
        payment_reference: Optional[str] = None,
        admin_notes: Optional[str] = None,
    ) -> Booking:
        """
        Apply a transition and commit it right away.

        Each booking write is its own transaction; a failed commit is rolled
        back and surfaced as PersistenceError without retry.
        """
        booking = await self.get_booking(booking_id)

        apply_transition(
            booking,
            transition,
            payment_method=payment_method,
            payment_reference=payment_reference,
        )
        if admin_notes is not None:
            booking.admin_notes = admin_notes

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Booking update failed ({transition.value}): {e}",
                extra={"booking_id": booking_id},
            )
            raise PersistenceError(f"Failed to update booking {booking_id}") from e

        logger.info(
            f"Booking {booking_id} -> {booking.booking_status}/{booking.payment_status} ({transition.value})",
            extra={"booking_id": booking_id},
        )
        return booking

    async def list_awaiting_transfer(self) -> List[Booking]:
        """Bank-transfer bookings still waiting for an admin decision."""
        result = await self.db.execute(
            select(Booking)
            .where(
                Booking.payment_method == GatewayName.BANK_TRANSFER.value,
                Booking.booking_status == BookingStatus.PENDING.value,
            )
            .order_by(Booking.created_at)
        )
        return list(result.scalars().all())
