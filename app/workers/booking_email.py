"""
Booking Email Worker.

Sends booking confirmation / rejection emails queued by the payment flows.
"""

import asyncio
import logging
import smtplib
from typing import Any, Dict, Optional

from app.config import Settings, get_settings
from app.database import get_db_context
from app.fsm.states import NotificationTemplate
from app.services.booking_service import BookingService
from app.services.email_service import EmailService
from app.workers.celery_app import celery_app

logger = logging.getLogger(__name__)


async def deliver_booking_email(
    booking_id: str,
    template: NotificationTemplate,
    config: Optional[Settings] = None,
) -> Dict[str, Any]:
    """Load the booking, render the template and send it."""
    config = config or get_settings()
    mailer = EmailService(config)

    if not mailer.is_configured:
        logger.info(f"Email disabled, skipping {template.value}", extra={"booking_id": booking_id})
        return {"sent": False, "reason": "email_disabled"}

    async with get_db_context() as db:
        booking = await BookingService(db).get_booking(booking_id)
        if not booking.customer_email:
            logger.warning("Booking has no customer email", extra={"booking_id": booking_id})
            return {"sent": False, "reason": "no_recipient"}
        subject, html = mailer.render(template, booking)
        recipient = booking.customer_email

    await asyncio.to_thread(mailer.send, recipient, subject, html)
    return {"sent": True, "to": recipient}


@celery_app.task(bind=True, max_retries=3)
def send_booking_email(self, booking_id: str, template_type: str):
    """Send one booking email, retrying on SMTP failures."""
    template = NotificationTemplate(template_type)

    try:
        result = asyncio.run(deliver_booking_email(booking_id, template))
        logger.info(f"Booking email {template.value}: {result}", extra={"booking_id": booking_id})
        return result
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Booking email failed: {e}", extra={"booking_id": booking_id})
        raise self.retry(exc=e, countdown=60)
