"""Services package."""

from app.services.bank_transfer_service import BankTransferReviewService
from app.services.booking_service import BookingService
from app.services.gateway_registry import GatewayRegistry
from app.services.notification_service import CeleryNotificationDispatcher, NotificationPort
from app.services.payment_service import PaymentService
from app.services.verification_service import VerificationService

__all__ = [
    "BankTransferReviewService",
    "BookingService",
    "GatewayRegistry",
    "CeleryNotificationDispatcher",
    "NotificationPort",
    "PaymentService",
    "VerificationService",
]
