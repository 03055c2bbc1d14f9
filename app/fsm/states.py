"""
Booking and payment state definitions.
"""

from enum import Enum


class BookingStatus(str, Enum):
    """Lifecycle of a booking reservation."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    """Money side of a booking."""

    PENDING = "pending"
    PAID = "paid"
    COMPLETED = "completed"    # Bank transfer approved by an admin
    FAILED = "failed"
    REFUNDED = "refunded"

    @property
    def is_settled(self) -> bool:
        """Funds have been received."""
        return self in (PaymentStatus.PAID, PaymentStatus.COMPLETED)


class GatewayName(str, Enum):
    """
    Closed set of supported payment gateways.
    Values match `payment_gateways.gateway_name`.
    """

    RAZORPAY = "razorpay"
    STRIPE = "stripe"
    CASH_ON_ARRIVAL = "cash_on_arrival"
    BANK_TRANSFER = "bank_transfer"

    @property
    def display_name(self) -> str:
        names = {
            GatewayName.RAZORPAY: "Razorpay",
            GatewayName.STRIPE: "Credit / Debit Card",
            GatewayName.CASH_ON_ARRIVAL: "Cash on Arrival",
            GatewayName.BANK_TRANSFER: "Bank Transfer",
        }
        return names[self]

    @property
    def requires_action(self) -> bool:
        """Client must hand off to a provider checkout."""
        return self in (GatewayName.RAZORPAY, GatewayName.STRIPE)


class ActionType(str, Enum):
    """What the client does next after initiation."""

    REDIRECT_TO_CHECKOUT = "redirect_to_checkout"
    RAZORPAY_CHECKOUT = "razorpay_checkout"


class NotificationTemplate(str, Enum):
    """Email templates under app/templates/email."""

    BOOKING_CONFIRMATION = "booking_confirmation"
    PAYMENT_REJECTED = "payment_rejected"

    @property
    def subject_prefix(self) -> str:
        prefixes = {
            NotificationTemplate.BOOKING_CONFIRMATION: "Booking Confirmation",
            NotificationTemplate.PAYMENT_REJECTED: "Payment Not Received",
        }
        return prefixes[self]
