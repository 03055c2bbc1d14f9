"""Models package for database models."""

from app.models.booking import Booking
from app.models.payment_gateway import PaymentGateway

__all__ = [
    "Booking",
    "PaymentGateway",
]
