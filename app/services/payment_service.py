"""
Payment Service - initiation of a booking payment.

Looks up the enabled gateway, dispatches to exactly one adapter and returns
what the client has to do next.
"""

import logging
from decimal import Decimal
from typing import Optional, assert_never

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.exceptions import InvalidRequest, UnsupportedGateway
from app.fsm.states import GatewayName
from app.services.booking_service import BookingService
from app.services.gateway_registry import GatewayRegistry
from app.services.manual_payment_service import BankTransfer, CashOnArrival
from app.services.payment_types import CustomerDetails, InitiationResult
from app.services.razorpay_service import RazorpayCheckout
from app.services.stripe_service import StripeCheckout

logger = logging.getLogger(__name__)


class PaymentService:
    """Initiates payments across the four gateways."""

    def __init__(
        self,
        db: AsyncSession,
        settings: Settings,
        stripe_checkout: Optional[StripeCheckout] = None,
    ):
        self.db = db
        self.settings = settings
        self.registry = GatewayRegistry(db)
        self.bookings = BookingService(db)
        self.razorpay = RazorpayCheckout(settings)
        self.stripe = stripe_checkout or StripeCheckout(settings)
        self.cash = CashOnArrival(self.bookings)
        self.bank_transfer = BankTransfer(self.bookings)

    async def initiate(
        self,
        booking_id: str,
        gateway_name: str,
        amount: Optional[Decimal],
        customer: CustomerDetails,
        currency: Optional[str] = None,
        origin: Optional[str] = None,
    ) -> InitiationResult:
        """
        Start payment for a booking.

        Raises InvalidRequest before touching anything when a field is
        missing, GatewayNotFound when no enabled row matches, and
        UnsupportedGateway for a configured name this service cannot handle.
        Only the manual gateways write to the booking.
        """
        self._validate(booking_id, gateway_name, amount, customer)

        gateway = await self.registry.get_enabled(gateway_name)

        try:
            kind = GatewayName(gateway_name)
        except ValueError:
            logger.error(f"Unsupported payment method: {gateway_name}")
            raise UnsupportedGateway(f"Unsupported payment method: {gateway_name}")

        currency = (currency or self.settings.default_currency).upper()
        origin = origin or self.settings.site_url

        logger.info(
            f"Initiating {kind.value} payment for booking {booking_id}: {amount} {currency}",
            extra={"booking_id": booking_id, "gateway": kind.value},
        )

        result: InitiationResult
        if kind is GatewayName.RAZORPAY:
            result = self.razorpay.build(gateway, booking_id, amount, currency, customer)
        elif kind is GatewayName.STRIPE:
            result = await self.stripe.create_session(
                gateway, booking_id, amount, currency, customer, origin
            )
        elif kind is GatewayName.CASH_ON_ARRIVAL:
            result = await self.cash.settle(gateway, booking_id)
        elif kind is GatewayName.BANK_TRANSFER:
            result = await self.bank_transfer.settle(gateway, booking_id)
        else:
            assert_never(kind)

        return result

    @staticmethod
    def _validate(
        booking_id: str,
        gateway_name: str,
        amount: Optional[Decimal],
        customer: CustomerDetails,
    ) -> None:
        missing = [
            field
            for field, value in (
                ("bookingId", booking_id),
                ("paymentMethod", gateway_name),
                ("customerName", customer.name),
                ("customerEmail", customer.email),
            )
            if not value or not str(value).strip()
        ]
        if amount is None:
            missing.append("amount")
        if missing:
            raise InvalidRequest(f"Missing required fields: {', '.join(missing)}")

        if amount <= 0:
            raise InvalidRequest("Amount must be greater than zero")
