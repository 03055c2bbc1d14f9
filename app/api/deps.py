from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.database import get_db
from app.services.bank_transfer_service import BankTransferReviewService
from app.services.notification_service import CeleryNotificationDispatcher, NotificationPort
from app.services.payment_service import PaymentService
from app.services.stripe_service import StripeCheckout
from app.services.verification_service import VerificationService


async def get_admin_key(
    x_admin_key: Optional[str] = Header(None, alias="X-Admin-Key"),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Validate the Admin Key header.
    Returns the key if valid, raises 401 otherwise.
    """
    if not x_admin_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Admin Key",
        )

    if not settings.admin_api_key or x_admin_key != settings.admin_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Admin Key",
        )

    return x_admin_key


def get_notifier() -> NotificationPort:
    return CeleryNotificationDispatcher()


def get_stripe_checkout(settings: Settings = Depends(get_settings)) -> StripeCheckout:
    return StripeCheckout(settings)


def get_payment_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    stripe_checkout: StripeCheckout = Depends(get_stripe_checkout),
) -> PaymentService:
    return PaymentService(db, settings, stripe_checkout=stripe_checkout)


def get_verification_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    notifier: NotificationPort = Depends(get_notifier),
    stripe_checkout: StripeCheckout = Depends(get_stripe_checkout),
) -> VerificationService:
    return VerificationService(db, settings, notifier, stripe_checkout=stripe_checkout)


def get_bank_transfer_review(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    notifier: NotificationPort = Depends(get_notifier),
) -> BankTransferReviewService:
    return BankTransferReviewService(
        db, notifier, notify_timeout=settings.notification_timeout_seconds
    )
