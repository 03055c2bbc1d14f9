"""
Verification Service - moves a booking to paid once the provider says so.

Razorpay: the client-supplied payment id is trusted as proof of payment. It is
not fetched from Razorpay and no signature is checked, so any caller can mark
a booking paid with a made-up id. Every such confirmation is logged at
WARNING.

Stripe: the Checkout Session is retrieved and must report payment_status
"paid" before the booking is touched. The session is not required to belong to the
booking being confirmed; a session created for another booking is accepted and
the mismatch is logged at WARNING.
"""

import logging
from typing import Literal, Optional, assert_never

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.exceptions import InvalidRequest, PaymentNotCompleted, UnsupportedGateway
from app.fsm.states import GatewayName, NotificationTemplate
from app.fsm.transitions import BookingTransition
from app.services.booking_service import BookingService
from app.services.gateway_registry import GatewayRegistry
from app.services.notification_service import NotificationPort, notify_best_effort
from app.services.payment_types import VerificationResult
from app.services.stripe_service import StripeCheckout

logger = logging.getLogger(__name__)

VerifiableGateway = Literal[GatewayName.RAZORPAY, GatewayName.STRIPE]


class VerificationService:
    """Verifies redirect/checkout payments and hard-confirms the booking."""

    def __init__(
        self,
        db: AsyncSession,
        settings: Settings,
        notifier: NotificationPort,
        stripe_checkout: Optional[StripeCheckout] = None,
    ):
        self.db = db
        self.settings = settings
        self.notifier = notifier
        self.registry = GatewayRegistry(db)
        self.bookings = BookingService(db)
        self.stripe = stripe_checkout or StripeCheckout(settings)

    async def verify(
        self,
        booking_id: str,
        payment_method: str,
        payment_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> VerificationResult:
        """
        Verify a payment and confirm the booking.

        Repeating a successful call re-applies the same terminal state.
        """
        if not booking_id or not payment_method:
            raise InvalidRequest("Missing required fields: bookingId, paymentMethod")

        method = self._parse_method(payment_method)

        if method is GatewayName.RAZORPAY:
            await self._verify_razorpay(booking_id, payment_id)
        elif method is GatewayName.STRIPE:
            await self._verify_stripe(booking_id, session_id)
        else:
            assert_never(method)

        await notify_best_effort(
            self.notifier,
            booking_id,
            NotificationTemplate.BOOKING_CONFIRMATION,
            timeout=self.settings.notification_timeout_seconds,
        )

        return VerificationResult(
            message="Payment verified successfully",
            booking_id=booking_id,
        )

    @staticmethod
    def _parse_method(payment_method: str) -> VerifiableGateway:
        try:
            method = GatewayName(payment_method)
        except ValueError:
            method = None
        if method is GatewayName.RAZORPAY or method is GatewayName.STRIPE:
            return method
        raise UnsupportedGateway(f"Payment verification not supported for: {payment_method}")

    async def _verify_razorpay(self, booking_id: str, payment_id: Optional[str]) -> None:
        if not payment_id:
            raise InvalidRequest("paymentId is required for Razorpay verification")

        logger.warning(
            f"Confirming booking {booking_id} on unverified Razorpay payment id {payment_id}",
            extra={"booking_id": booking_id, "gateway": GatewayName.RAZORPAY.value},
        )

        await self.bookings.apply(
            booking_id,
            BookingTransition.HARD_CONFIRM,
            payment_method=GatewayName.RAZORPAY,
            payment_reference=payment_id,
        )

    async def _verify_stripe(self, booking_id: str, session_id: Optional[str]) -> None:
        if not session_id:
            raise InvalidRequest("sessionId is required for Stripe verification")

        gateway = await self.registry.get_enabled(GatewayName.STRIPE.value)
        session = await self.stripe.retrieve_session(gateway, session_id)

        if not session.is_paid:
            logger.info(
                f"Stripe session {session_id} not paid: {session.payment_status}",
                extra={"booking_id": booking_id, "session_id": session_id},
            )
            raise PaymentNotCompleted("Payment not completed")

        session_booking_id = session.metadata.get("booking_id")
        if session_booking_id and session_booking_id != booking_id:
            logger.warning(
                f"Stripe session {session_id} belongs to booking {session_booking_id}, confirming {booking_id}",
                extra={"booking_id": booking_id, "session_id": session_id},
            )

        await self.bookings.apply(
            booking_id,
            BookingTransition.HARD_CONFIRM,
            payment_method=GatewayName.STRIPE,
            payment_reference=session.payment_intent,
        )
