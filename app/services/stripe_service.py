"""
Stripe hosted checkout.

Creates a one-line-item Checkout Session for a booking and retrieves it again
when the customer comes back from the hosted page.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

import stripe

from app.config import Settings
from app.exceptions import GatewayMisconfigured, PaymentProviderError
from app.fsm.states import ActionType, GatewayName
from app.models.payment_gateway import PaymentGateway
from app.services.payment_types import CheckoutAction, CustomerDetails, to_minor_units

logger = logging.getLogger(__name__)


@dataclass
class StripeSession:
    id: str
    url: Optional[str] = None
    payment_status: Optional[str] = None
    payment_intent: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == "paid"


class StripeGateway:
    """
    Thin wrapper over the Stripe SDK bound to one secret key.
    Calls are blocking; callers run them off the event loop.
    """

    def __init__(self, secret_key: str, api_version: str):
        self.secret_key = secret_key
        self.api_version = api_version

    def _request_options(self) -> Dict[str, Any]:
        return {"api_key": self.secret_key, "stripe_version": self.api_version}

    def find_or_create_customer(self, email: str, name: str, phone: Optional[str]) -> str:
        """Reuse the first customer with this email, else create one."""
        existing = stripe.Customer.list(email=email, limit=1, **self._request_options())
        if existing.data:
            return existing.data[0].id

        params: Dict[str, Any] = {"email": email, "name": name}
        if phone:
            params["phone"] = phone
        customer = stripe.Customer.create(**params, **self._request_options())
        return customer.id

    def create_checkout_session(self, params: Dict[str, Any]) -> StripeSession:
        session = stripe.checkout.Session.create(**params, **self._request_options())
        return StripeSession(id=session.id, url=session.url)

    def retrieve_session(self, session_id: str) -> StripeSession:
        session = stripe.checkout.Session.retrieve(session_id, **self._request_options())
        payment_intent = session.payment_intent
        if payment_intent is not None and not isinstance(payment_intent, str):
            payment_intent = payment_intent.id
        metadata = session.metadata
        return StripeSession(
            id=session.id,
            url=session.url,
            payment_status=session.payment_status,
            payment_intent=payment_intent,
            metadata={key: str(metadata[key]) for key in metadata.keys()} if metadata else {},
        )


StripeGatewayFactory = Callable[[str], StripeGateway]


class StripeCheckout:
    """Stripe adapter used by initiation and verification."""

    def __init__(
        self,
        settings: Settings,
        gateway_factory: Optional[StripeGatewayFactory] = None,
    ):
        self.settings = settings
        self.gateway_factory = gateway_factory or (
            lambda secret_key: StripeGateway(secret_key, settings.stripe_api_version)
        )

    def _client(self, gateway: PaymentGateway, missing_message: str) -> StripeGateway:
        if not gateway.api_secret:
            raise GatewayMisconfigured(missing_message)
        return self.gateway_factory(gateway.api_secret)

    async def create_session(
        self,
        gateway: PaymentGateway,
        booking_id: str,
        amount: Decimal,
        currency: str,
        customer: CustomerDetails,
        origin: str,
    ) -> CheckoutAction:
        """Create a hosted checkout session and return its redirect URL."""
        client = self._client(gateway, "Stripe secret key not configured")
        origin = origin.rstrip("/")

        logger.info(
            f"Stripe checkout for booking {booking_id}: {amount} {currency}",
            extra={"booking_id": booking_id, "gateway": GatewayName.STRIPE.value},
        )

        try:
            customer_id = await asyncio.to_thread(
                client.find_or_create_customer,
                customer.email,
                customer.name,
                customer.phone,
            )
            session = await asyncio.to_thread(
                client.create_checkout_session,
                {
                    "customer": customer_id,
                    "payment_method_types": ["card"],
                    "line_items": [
                        {
                            "price_data": {
                                "currency": currency.lower(),
                                "product_data": {
                                    "name": f"{self.settings.business_name} Booking",
                                    "description": f"Booking ID: {booking_id}",
                                },
                                "unit_amount": to_minor_units(amount),
                            },
                            "quantity": 1,
                        },
                    ],
                    "mode": "payment",
                    "success_url": f"{origin}/booking-success?session_id={{CHECKOUT_SESSION_ID}}",
                    "cancel_url": f"{origin}/booking?cancelled=true",
                    "metadata": {"booking_id": booking_id},
                },
            )
        except stripe.StripeError as e:
            message = e.user_message or str(e)
            logger.error(f"Stripe error: {message}", extra={"booking_id": booking_id})
            raise PaymentProviderError(f"Stripe payment failed: {message}") from e

        return CheckoutAction(
            payment_method=GatewayName.STRIPE,
            action_type=ActionType.REDIRECT_TO_CHECKOUT,
            checkout_url=session.url,
            session_id=session.id,
        )

    async def retrieve_session(self, gateway: PaymentGateway, session_id: str) -> StripeSession:
        client = self._client(gateway, "Stripe configuration not found")
        try:
            return await asyncio.to_thread(client.retrieve_session, session_id)
        except stripe.StripeError as e:
            message = e.user_message or str(e)
            logger.error(f"Stripe session retrieval failed: {message}", extra={"session_id": session_id})
            raise PaymentProviderError(f"Stripe verification failed: {message}") from e
