"""
Bank transfer review - admin decision on a transfer after checking the proof.

Kept apart from payment verification: it is human-triggered and only
reachable through the admin API.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import InvalidRequest
from app.fsm.states import GatewayName, NotificationTemplate
from app.fsm.transitions import BookingTransition
from app.models.booking import Booking
from app.services.booking_service import BookingService
from app.services.notification_service import (
    NOTIFY_TIMEOUT_SECONDS,
    NotificationPort,
    notify_best_effort,
)

logger = logging.getLogger(__name__)


class BankTransferReviewService:
    """Approve or reject bank-transfer bookings."""

    def __init__(
        self,
        db: AsyncSession,
        notifier: NotificationPort,
        notify_timeout: float = NOTIFY_TIMEOUT_SECONDS,
    ):
        self.db = db
        self.notifier = notifier
        self.notify_timeout = notify_timeout
        self.bookings = BookingService(db)

    async def list_pending(self) -> List[Booking]:
        return await self.bookings.list_awaiting_transfer()

    async def review(
        self,
        booking_id: str,
        approve: bool,
        admin_notes: Optional[str] = None,
    ) -> Booking:
        """
        Approve: booking confirmed, payment completed, confirmation email.
        Reject: booking cancelled, payment failed, rejection email.
        """
        booking = await self.bookings.get_booking(booking_id)
        if booking.payment_method != GatewayName.BANK_TRANSFER.value:
            raise InvalidRequest(f"Booking {booking_id} is not a bank transfer booking")

        if approve:
            transition = BookingTransition.TRANSFER_APPROVED
            template = NotificationTemplate.BOOKING_CONFIRMATION
        else:
            transition = BookingTransition.TRANSFER_REJECTED
            template = NotificationTemplate.PAYMENT_REJECTED

        booking = await self.bookings.apply(
            booking_id,
            transition,
            admin_notes=admin_notes,
        )
        logger.info(f"Bank transfer {transition.value} for booking {booking_id}", extra={"booking_id": booking_id})

        await notify_best_effort(self.notifier, booking_id, template, timeout=self.notify_timeout)
        return booking
