"""
Manual settlement gateways: cash on arrival and bank transfer.

Neither talks to a provider. Both write the booking directly and hand back
instructions from the gateway configuration.
"""

import logging

from app.fsm.states import GatewayName
from app.fsm.transitions import BookingTransition
from app.models.payment_gateway import PaymentGateway
from app.services.booking_service import BookingService
from app.services.payment_types import ManualSettlement

logger = logging.getLogger(__name__)

DEFAULT_CASH_INSTRUCTIONS = (
    "You can pay in cash at the pickup location or when you meet our representative."
)


class CashOnArrival:
    """
    Soft confirm: the reservation is held and marked confirmed now,
    while payment stays pending until it is collected in person.
    """

    def __init__(self, bookings: BookingService):
        self.bookings = bookings

    async def settle(self, gateway: PaymentGateway, booking_id: str) -> ManualSettlement:
        logger.info("Processing cash payment", extra={"booking_id": booking_id})

        await self.bookings.apply(booking_id, BookingTransition.SOFT_CONFIRM)

        return ManualSettlement(
            payment_method=GatewayName.CASH_ON_ARRIVAL,
            message="Booking confirmed! Please pay in cash at the pickup location.",
            instructions=gateway.instructions or DEFAULT_CASH_INSTRUCTIONS,
        )


class BankTransfer:
    """
    Booking stays pending until an admin confirms the funds arrived.
    """

    def __init__(self, bookings: BookingService):
        self.bookings = bookings

    async def settle(self, gateway: PaymentGateway, booking_id: str) -> ManualSettlement:
        logger.info("Processing bank transfer", extra={"booking_id": booking_id})

        await self.bookings.apply(booking_id, BookingTransition.AWAIT_TRANSFER)

        return ManualSettlement(
            payment_method=GatewayName.BANK_TRANSFER,
            message=(
                "Please transfer the amount to our bank account. "
                "Payment confirmation will be processed within 24 hours."
            ),
            bank_details=gateway.bank_details or gateway.manual_instructions,
            instructions=gateway.instructions,
        )
