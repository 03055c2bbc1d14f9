"""
Tests for BankTransferReviewService.
"""

import time

import pytest

from app.exceptions import InvalidRequest
from app.fsm.states import NotificationTemplate
from app.fsm.transitions import BookingTransition
from app.services.bank_transfer_service import BankTransferReviewService
from app.services.booking_service import BookingService
from conftest import RecordingNotifier


async def _bank_transfer_booking(db, make_booking):
    booking = await make_booking()
    await BookingService(db).apply(str(booking.id), BookingTransition.AWAIT_TRANSFER)
    return booking


@pytest.mark.asyncio
async def test_list_pending_only_returns_waiting_transfers(db, notifier, make_booking):
    waiting = await _bank_transfer_booking(db, make_booking)
    await make_booking()  # no payment method chosen
    service = BankTransferReviewService(db, notifier)

    pending = await service.list_pending()

    assert [b.id for b in pending] == [waiting.id]


@pytest.mark.asyncio
async def test_approve_completes_payment(db, notifier, make_booking):
    booking = await _bank_transfer_booking(db, make_booking)
    service = BankTransferReviewService(db, notifier)

    await service.review(str(booking.id), approve=True, admin_notes="Funds received")

    await db.refresh(booking)
    assert booking.booking_status == "confirmed"
    assert booking.payment_status == "completed"
    assert booking.confirmed_at is not None
    assert booking.admin_notes == "Funds received"
    assert notifier.sent == [(str(booking.id), NotificationTemplate.BOOKING_CONFIRMATION)]


@pytest.mark.asyncio
async def test_reject_cancels_booking(db, notifier, make_booking):
    booking = await _bank_transfer_booking(db, make_booking)
    service = BankTransferReviewService(db, notifier)

    await service.review(str(booking.id), approve=False, admin_notes="Receipt unreadable")

    await db.refresh(booking)
    assert booking.booking_status == "cancelled"
    assert booking.payment_status == "failed"
    assert booking.confirmed_at is None
    assert notifier.sent == [(str(booking.id), NotificationTemplate.PAYMENT_REJECTED)]


@pytest.mark.asyncio
async def test_review_rejects_other_methods(db, notifier, make_booking):
    booking = await make_booking()
    await BookingService(db).apply(str(booking.id), BookingTransition.SOFT_CONFIRM)
    service = BankTransferReviewService(db, notifier)

    with pytest.raises(InvalidRequest, match="not a bank transfer"):
        await service.review(str(booking.id), approve=True)

    assert notifier.sent == []


@pytest.mark.asyncio
async def test_stalled_notification_does_not_hold_review(db, make_booking):
    booking = await _bank_transfer_booking(db, make_booking)
    service = BankTransferReviewService(db, RecordingNotifier(hang=True), notify_timeout=0.05)

    started = time.monotonic()
    await service.review(str(booking.id), approve=True)

    assert time.monotonic() - started < 1.0
    await db.refresh(booking)
    assert booking.payment_status == "completed"
