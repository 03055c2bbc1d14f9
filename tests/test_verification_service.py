"""
Tests for VerificationService.
"""

import time

import pytest
import stripe

from app.exceptions import (
    BookingNotFound,
    GatewayMisconfigured,
    InvalidRequest,
    PaymentNotCompleted,
    PaymentProviderError,
    UnsupportedGateway,
)
from app.fsm.states import NotificationTemplate
from app.services.stripe_service import StripeCheckout
from app.services.verification_service import VerificationService
from conftest import FakeStripeGateway, RecordingNotifier


def _service(db, settings, notifier, stripe_checkout) -> VerificationService:
    return VerificationService(db, settings, notifier, stripe_checkout=stripe_checkout)


@pytest.mark.asyncio
async def test_stripe_paid_session_confirms_booking(
    db, settings, notifier, stripe_checkout, fake_stripe, gateways, make_booking
):
    booking = await make_booking()
    service = _service(db, settings, notifier, stripe_checkout)

    result = await service.verify(str(booking.id), "stripe", session_id="cs_test_1")

    assert result.to_response() == {
        "success": True,
        "message": "Payment verified successfully",
        "bookingId": str(booking.id),
    }
    assert ("retrieve_session", "cs_test_1") in fake_stripe.calls

    await db.refresh(booking)
    assert booking.booking_status == "confirmed"
    assert booking.payment_status == "paid"
    assert booking.payment_method == "stripe"
    assert booking.payment_reference == "pi_test_123"
    assert booking.confirmed_at is not None

    assert notifier.sent == [(str(booking.id), NotificationTemplate.BOOKING_CONFIRMATION)]


@pytest.mark.asyncio
async def test_stripe_unpaid_session_leaves_booking(db, settings, notifier, gateways, make_booking):
    booking = await make_booking()
    unpaid = FakeStripeGateway(payment_status="unpaid", payment_intent=None)
    checkout = StripeCheckout(settings, gateway_factory=lambda secret: unpaid)
    service = _service(db, settings, notifier, checkout)

    with pytest.raises(PaymentNotCompleted, match="Payment not completed"):
        await service.verify(str(booking.id), "stripe", session_id="cs_test_1")

    await db.refresh(booking)
    assert booking.booking_status == "pending"
    assert booking.payment_status == "pending"
    assert booking.payment_reference is None
    assert booking.confirmed_at is None
    assert notifier.sent == []


@pytest.mark.asyncio
async def test_stripe_retrieval_error_is_wrapped(db, settings, notifier, gateways, make_booking):
    booking = await make_booking()
    failing = FakeStripeGateway(error=stripe.StripeError("No such checkout.session"))
    checkout = StripeCheckout(settings, gateway_factory=lambda secret: failing)
    service = _service(db, settings, notifier, checkout)

    with pytest.raises(PaymentProviderError, match="No such checkout.session"):
        await service.verify(str(booking.id), "stripe", session_id="cs_missing")

    assert notifier.sent == []


@pytest.mark.asyncio
async def test_stripe_without_secret(db, settings, notifier, stripe_checkout, fake_stripe, gateways, make_booking):
    gateways["stripe"].api_secret = None
    await db.commit()
    booking = await make_booking()
    service = _service(db, settings, notifier, stripe_checkout)

    with pytest.raises(GatewayMisconfigured, match="Stripe configuration not found"):
        await service.verify(str(booking.id), "stripe", session_id="cs_test_1")

    assert fake_stripe.calls == []


@pytest.mark.asyncio
async def test_stripe_requires_session_id(db, settings, notifier, stripe_checkout, gateways, make_booking):
    booking = await make_booking()
    service = _service(db, settings, notifier, stripe_checkout)

    with pytest.raises(InvalidRequest, match="sessionId"):
        await service.verify(str(booking.id), "stripe")


@pytest.mark.asyncio
async def test_razorpay_trusts_arbitrary_payment_id(
    db, settings, notifier, stripe_checkout, fake_stripe, gateways, make_booking
):
    """The client-supplied id is accepted without asking Razorpay."""
    booking = await make_booking()
    service = _service(db, settings, notifier, stripe_checkout)

    await service.verify(str(booking.id), "razorpay", payment_id="totally-made-up")

    await db.refresh(booking)
    assert booking.booking_status == "confirmed"
    assert booking.payment_status == "paid"
    assert booking.payment_method == "razorpay"
    assert booking.payment_reference == "totally-made-up"
    assert booking.confirmed_at is not None
    assert fake_stripe.calls == []
    assert len(notifier.sent) == 1


@pytest.mark.asyncio
async def test_razorpay_requires_payment_id(db, settings, notifier, stripe_checkout, make_booking):
    booking = await make_booking()
    service = _service(db, settings, notifier, stripe_checkout)

    with pytest.raises(InvalidRequest, match="paymentId"):
        await service.verify(str(booking.id), "razorpay")


@pytest.mark.asyncio
async def test_verify_twice_is_last_write_wins(db, settings, notifier, stripe_checkout, gateways, make_booking):
    booking = await make_booking()
    service = _service(db, settings, notifier, stripe_checkout)

    await service.verify(str(booking.id), "stripe", session_id="cs_test_1")
    await db.refresh(booking)
    first = (
        booking.booking_status,
        booking.payment_status,
        booking.payment_reference,
        booking.confirmed_at,
    )

    await service.verify(str(booking.id), "stripe", session_id="cs_test_1")
    await db.refresh(booking)
    second = (
        booking.booking_status,
        booking.payment_status,
        booking.payment_reference,
        booking.confirmed_at,
    )

    assert first == second
    assert len(notifier.sent) == 2


@pytest.mark.asyncio
async def test_notification_failure_does_not_fail_verification(db, settings, stripe_checkout, make_booking):
    booking = await make_booking()
    failing_notifier = RecordingNotifier(fail=True)
    service = _service(db, settings, failing_notifier, stripe_checkout)

    result = await service.verify(str(booking.id), "razorpay", payment_id="pay_123")

    assert result.booking_id == str(booking.id)
    await db.refresh(booking)
    assert booking.payment_status == "paid"
    assert len(failing_notifier.sent) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["cash_on_arrival", "bank_transfer", "paypal"])
async def test_manual_and_unknown_methods_not_verifiable(
    db, settings, notifier, stripe_checkout, make_booking, method
):
    booking = await make_booking()
    service = _service(db, settings, notifier, stripe_checkout)

    with pytest.raises(UnsupportedGateway, match=f"Payment verification not supported for: {method}"):
        await service.verify(str(booking.id), method, payment_id="x", session_id="y")

    await db.refresh(booking)
    assert booking.payment_status == "pending"


@pytest.mark.asyncio
async def test_missing_booking(db, settings, notifier, stripe_checkout):
    service = _service(db, settings, notifier, stripe_checkout)

    with pytest.raises(BookingNotFound):
        await service.verify("6f1c1f3e-3b7a-4d1e-9a59-0d7f2a0c4b11", "razorpay", payment_id="pay_1")

    assert notifier.sent == []


@pytest.mark.asyncio
async def test_malformed_booking_id(db, settings, notifier, stripe_checkout):
    service = _service(db, settings, notifier, stripe_checkout)

    with pytest.raises(InvalidRequest, match="Invalid booking id"):
        await service.verify("not-a-uuid", "razorpay", payment_id="pay_1")


@pytest.mark.asyncio
async def test_stalled_notification_does_not_hold_verification(db, settings, stripe_checkout, make_booking):
    booking = await make_booking()
    stalled = RecordingNotifier(hang=True)
    quick = settings.model_copy(update={"notification_timeout_seconds": 0.05})
    service = VerificationService(db, quick, stalled, stripe_checkout=stripe_checkout)

    started = time.monotonic()
    result = await service.verify(str(booking.id), "razorpay", payment_id="pay_123")
    elapsed = time.monotonic() - started

    assert elapsed < 1.0
    assert result.booking_id == str(booking.id)
    assert len(stalled.sent) == 1
    await db.refresh(booking)
    assert booking.payment_status == "paid"


@pytest.mark.asyncio
async def test_stripe_session_for_other_booking_is_logged(
    db, settings, notifier, gateways, make_booking, caplog
):
    booking = await make_booking()
    foreign = FakeStripeGateway(session_booking_id="9d3b2a1c-0000-4000-8000-000000000000")
    checkout = StripeCheckout(settings, gateway_factory=lambda secret: foreign)
    service = _service(db, settings, notifier, checkout)

    await service.verify(str(booking.id), "stripe", session_id="cs_test_1")

    assert "belongs to booking 9d3b2a1c-0000-4000-8000-000000000000" in caplog.text
    await db.refresh(booking)
    assert booking.payment_status == "paid"


@pytest.mark.asyncio
async def test_stripe_session_for_same_booking_is_quiet(db, settings, notifier, gateways, make_booking, caplog):
    booking = await make_booking()
    own = FakeStripeGateway(session_booking_id=str(booking.id))
    checkout = StripeCheckout(settings, gateway_factory=lambda secret: own)
    service = _service(db, settings, notifier, checkout)

    await service.verify(str(booking.id), "stripe", session_id="cs_test_1")

    assert "belongs to booking" not in caplog.text
