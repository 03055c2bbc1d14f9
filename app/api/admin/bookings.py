"""
Admin Booking Endpoints.
Review of bank-transfer bookings after the customer uploads proof.
"""

import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.api.deps import get_admin_key, get_bank_transfer_review
from app.models.booking import Booking
from app.services.bank_transfer_service import BankTransferReviewService

router = APIRouter()
logger = logging.getLogger(__name__)


class ReviewTransferRequest(BaseModel):
    """Request body for approving or rejecting a transfer."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    action: Literal["approve", "reject"]
    admin_notes: Optional[str] = None


def _serialize(booking: Booking) -> Dict[str, Any]:
    return {
        "bookingId": str(booking.id),
        "bookingReference": booking.booking_reference,
        "customerName": booking.customer_name,
        "customerEmail": booking.customer_email,
        "finalAmount": float(booking.final_amount),
        "currency": booking.currency,
        "bookingStatus": booking.booking_status,
        "paymentStatus": booking.payment_status,
        "paymentProofUrl": booking.payment_proof_url,
        "adminNotes": booking.admin_notes,
        "confirmedAt": booking.confirmed_at.isoformat() if booking.confirmed_at else None,
        "createdAt": booking.created_at.isoformat() if booking.created_at else None,
    }


@router.get("/bookings/bank-transfers")
async def list_pending_transfers(
    service: BankTransferReviewService = Depends(get_bank_transfer_review),
    _: str = Depends(get_admin_key),
) -> List[Dict[str, Any]]:
    """Bank-transfer bookings waiting for review, oldest first."""
    bookings = await service.list_pending()
    return [_serialize(booking) for booking in bookings]


@router.post("/bookings/{booking_id}/bank-transfer/review")
async def review_transfer(
    booking_id: str,
    request: ReviewTransferRequest,
    service: BankTransferReviewService = Depends(get_bank_transfer_review),
    _: str = Depends(get_admin_key),
) -> Dict[str, Any]:
    """Approve or reject a bank transfer."""
    booking = await service.review(
        booking_id,
        approve=request.action == "approve",
        admin_notes=request.admin_notes,
    )
    logger.info(f"Admin reviewed transfer for booking {booking_id}: {request.action}")
    return {"success": True, "booking": _serialize(booking)}
