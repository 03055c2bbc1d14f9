"""
Razorpay checkout handoff.

No order is created server-side: the client opens Razorpay Checkout with the
config built here and comes back through verification with a payment id.
"""

import logging
from decimal import Decimal

from app.config import Settings
from app.exceptions import GatewayMisconfigured
from app.fsm.states import ActionType, GatewayName
from app.models.payment_gateway import PaymentGateway
from app.services.payment_types import CheckoutAction, CustomerDetails, to_minor_units

logger = logging.getLogger(__name__)


class RazorpayCheckout:
    """Builds the Razorpay Checkout options object."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def build(
        self,
        gateway: PaymentGateway,
        booking_id: str,
        amount: Decimal,
        currency: str,
        customer: CustomerDetails,
    ) -> CheckoutAction:
        if not gateway.api_key:
            raise GatewayMisconfigured("Razorpay key not configured")

        amount_paise = to_minor_units(amount)
        logger.info(
            f"Razorpay checkout for booking {booking_id}: {amount_paise} {currency}",
            extra={"booking_id": booking_id, "gateway": GatewayName.RAZORPAY.value},
        )

        checkout_data = {
            "key": gateway.api_key,
            "amount": amount_paise,
            "currency": currency.upper(),
            "name": self.settings.business_name,
            "description": "Tour Booking Payment",
            "order_id": booking_id,
            "prefill": {
                "name": customer.name,
                "email": customer.email,
                "contact": customer.phone or "",
            },
            "theme": {
                "color": self.settings.checkout_theme_color,
            },
        }

        return CheckoutAction(
            payment_method=GatewayName.RAZORPAY,
            action_type=ActionType.RAZORPAY_CHECKOUT,
            checkout_data=checkout_data,
        )
