"""Booking and payment state package."""

from app.fsm.states import (
    ActionType,
    BookingStatus,
    GatewayName,
    NotificationTemplate,
    PaymentStatus,
)
from app.fsm.transitions import BookingTransition, apply_transition

__all__ = [
    "ActionType",
    "BookingStatus",
    "GatewayName",
    "NotificationTemplate",
    "PaymentStatus",
    "BookingTransition",
    "apply_transition",
]
