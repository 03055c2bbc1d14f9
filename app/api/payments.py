"""
Payments API Router.

- POST /api/payments/create: start payment with the chosen gateway
- POST /api/payments/verify: confirm a Razorpay / Stripe payment
- GET  /api/payments/gateways: enabled gateways for the checkout selector

Errors are rendered as {"success": false, "error": ...} by the handlers in
app.main.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Header
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_payment_service, get_verification_service
from app.database import get_db
from app.services.gateway_registry import GatewayRegistry
from app.services.payment_service import PaymentService
from app.services.payment_types import CustomerDetails
from app.services.verification_service import VerificationService

router = APIRouter(prefix="/api/payments", tags=["payments"])
logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreatePaymentRequest(CamelModel):
    """Request body for starting a payment. Presence is checked by the service."""
    booking_id: Optional[str] = None
    payment_method: Optional[str] = None
    amount: Optional[Decimal] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    currency: Optional[str] = None


class VerifyPaymentRequest(CamelModel):
    """Request body for verifying a payment."""
    booking_id: Optional[str] = None
    payment_method: Optional[str] = None
    payment_id: Optional[str] = None
    session_id: Optional[str] = None


@router.post("/create")
async def create_payment(
    request: CreatePaymentRequest,
    origin: Optional[str] = Header(None),
    service: PaymentService = Depends(get_payment_service),
) -> Dict[str, Any]:
    """Start payment for a booking with the selected gateway."""
    result = await service.initiate(
        booking_id=request.booking_id or "",
        gateway_name=request.payment_method or "",
        amount=request.amount,
        customer=CustomerDetails(
            name=request.customer_name or "",
            email=request.customer_email or "",
            phone=request.customer_phone,
        ),
        currency=request.currency,
        origin=origin,
    )
    return result.to_response()


@router.post("/verify")
async def verify_payment(
    request: VerifyPaymentRequest,
    service: VerificationService = Depends(get_verification_service),
) -> Dict[str, Any]:
    """Verify a provider payment and confirm the booking."""
    result = await service.verify(
        booking_id=request.booking_id or "",
        payment_method=request.payment_method or "",
        payment_id=request.payment_id,
        session_id=request.session_id,
    )
    return result.to_response()


@router.get("/gateways")
async def list_gateways(db: AsyncSession = Depends(get_db)) -> List[Dict[str, Any]]:
    """Enabled gateways, public fields only."""
    gateways = await GatewayRegistry(db).list_enabled()
    return [
        {
            "gatewayName": gateway.gateway_name,
            "displayName": gateway.display_name,
            "testMode": gateway.test_mode,
            "instructions": gateway.instructions,
        }
        for gateway in gateways
    ]
