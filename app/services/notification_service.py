"""
Notification port for booking emails.

Sending is best-effort: a failure to notify never fails the payment step
that triggered it.
"""

import asyncio
import logging
from typing import Protocol

from app.fsm.states import NotificationTemplate

logger = logging.getLogger(__name__)


class NotificationPort(Protocol):
    async def send_booking_notification(
        self,
        booking_id: str,
        template: NotificationTemplate,
    ) -> None:
        ...


class CeleryNotificationDispatcher:
    """Queues the booking email on the Celery worker."""

    async def send_booking_notification(
        self,
        booking_id: str,
        template: NotificationTemplate,
    ) -> None:
        from app.workers.booking_email import send_booking_email

        # Publishing talks to the broker synchronously
        await asyncio.to_thread(
            send_booking_email.apply_async,
            args=[booking_id, template.value],
            retry=False,
        )
        logger.info(f"Queued {template.value} email", extra={"booking_id": booking_id})


# Seconds the request path waits on a dispatch before giving up on it
NOTIFY_TIMEOUT_SECONDS = 2.0


async def notify_best_effort(
    notifier: NotificationPort,
    booking_id: str,
    template: NotificationTemplate,
    timeout: float = NOTIFY_TIMEOUT_SECONDS,
) -> bool:
    """
    Dispatch a notification; log and swallow any failure.

    The wait is bounded by `timeout` so an unreachable broker cannot hold the
    response of a payment step that has already been committed.
    """
    try:
        await asyncio.wait_for(
            notifier.send_booking_notification(booking_id, template),
            timeout=timeout,
        )
        return True
    except asyncio.TimeoutError:
        logger.warning(
            f"Notification {template.value} timed out after {timeout}s",
            extra={"booking_id": booking_id},
        )
        return False
    except Exception as e:
        logger.warning(
            f"Notification {template.value} failed: {e}",
            extra={"booking_id": booking_id},
        )
        return False
