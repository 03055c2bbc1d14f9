"""
Booking transitions applied by the payment flows.

Each transition is a fixed set of field values written onto a booking. There
is no guard on the current state: writes are last-write-wins.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple, TYPE_CHECKING

from app.fsm.states import BookingStatus, GatewayName, PaymentStatus

if TYPE_CHECKING:
    from app.models.booking import Booking


class BookingTransition(str, Enum):
    """Named booking mutations."""

    SOFT_CONFIRM = "soft_confirm"            # Cash on arrival: held, not paid
    AWAIT_TRANSFER = "await_transfer"        # Bank transfer: waiting on funds
    HARD_CONFIRM = "hard_confirm"            # Provider-verified payment
    TRANSFER_APPROVED = "transfer_approved"  # Admin saw the funds
    TRANSFER_REJECTED = "transfer_rejected"  # Admin rejected the proof

    @property
    def target(self) -> Tuple[BookingStatus, PaymentStatus]:
        """(booking_status, payment_status) after the transition."""
        targets = {
            BookingTransition.SOFT_CONFIRM: (BookingStatus.CONFIRMED, PaymentStatus.PENDING),
            BookingTransition.AWAIT_TRANSFER: (BookingStatus.PENDING, PaymentStatus.PENDING),
            BookingTransition.HARD_CONFIRM: (BookingStatus.CONFIRMED, PaymentStatus.PAID),
            BookingTransition.TRANSFER_APPROVED: (BookingStatus.CONFIRMED, PaymentStatus.COMPLETED),
            BookingTransition.TRANSFER_REJECTED: (BookingStatus.CANCELLED, PaymentStatus.FAILED),
        }
        return targets[self]

    @property
    def implied_method(self) -> Optional[GatewayName]:
        """Gateway recorded on the booking by this transition, if fixed."""
        if self is BookingTransition.SOFT_CONFIRM:
            return GatewayName.CASH_ON_ARRIVAL
        if self is BookingTransition.AWAIT_TRANSFER:
            return GatewayName.BANK_TRANSFER
        return None

    @property
    def confirms(self) -> bool:
        return self.target[0] == BookingStatus.CONFIRMED


def apply_transition(
    booking: "Booking",
    transition: BookingTransition,
    payment_method: Optional[GatewayName] = None,
    payment_reference: Optional[str] = None,
    now: Optional[datetime] = None,
) -> "Booking":
    """
    Write the transition's fields onto a booking in place.

    confirmed_at is stamped once by the first confirming transition and kept
    on repeats; any non-confirming transition clears it.
    """
    booking_status, payment_status = transition.target
    booking.booking_status = booking_status.value
    booking.payment_status = payment_status.value

    method = transition.implied_method or payment_method
    if method is not None:
        booking.payment_method = method.value

    if payment_reference is not None:
        booking.payment_reference = payment_reference

    if transition.confirms:
        if booking.confirmed_at is None:
            booking.confirmed_at = now or datetime.now(timezone.utc)
    else:
        booking.confirmed_at = None

    return booking
