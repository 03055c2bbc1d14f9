"""Booking model - one customer purchase intent tracked through payment."""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, DateTime, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.fsm.states import BookingStatus, PaymentStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Booking(Base):
    """
    Booking for a tour, package, visa, ticket or transfer.

    Rows are created by the storefront in pending/pending and only mutated
    here by the payment flows and the admin bank-transfer review.
    """

    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    booking_reference: Mapped[Optional[str]] = mapped_column(
        String(32),
        unique=True,
        nullable=True,
    )

    # Customer contact (passed through to providers)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    # Display fields for the confirmation email
    service_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    travel_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    traveler_count: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    final_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )

    currency: Mapped[str] = mapped_column(
        String(3),
        default="INR",
        nullable=False,
    )

    booking_status: Mapped[str] = mapped_column(
        String(20),
        default=BookingStatus.PENDING.value,
        nullable=False,
        index=True,
    )

    payment_status: Mapped[str] = mapped_column(
        String(20),
        default=PaymentStatus.PENDING.value,
        nullable=False,
    )

    # Gateway name, set once a method is chosen
    payment_method: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        index=True,
    )

    # Provider transaction id (Razorpay payment id / Stripe payment intent)
    payment_reference: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    # Bank transfer review
    payment_proof_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    admin_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    confirmed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Booking {self.id} {self.booking_status}/{self.payment_status}>"

    @property
    def is_confirmed(self) -> bool:
        return self.booking_status == BookingStatus.CONFIRMED.value

    @property
    def is_paid(self) -> bool:
        return PaymentStatus(self.payment_status).is_settled
