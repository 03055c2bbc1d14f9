"""
Email Service - renders booking emails and sends them over SMTP.
Used by the Celery worker, never in the request path.
"""

import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import Any, Dict, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.config import Settings
from app.fsm.states import NotificationTemplate
from app.models.booking import Booking

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

_templates = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html"]),
)


class EmailService:
    """SMTP mailer configured from settings."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def is_configured(self) -> bool:
        return bool(
            self.settings.email_enabled
            and self.settings.smtp_host
            and (self.settings.smtp_from_email or self.settings.smtp_username)
        )

    def template_context(self, booking: Booking) -> Dict[str, Any]:
        return {
            "business_name": self.settings.business_name,
            "customer_name": booking.customer_name,
            "booking_reference": booking.booking_reference or str(booking.id)[:8].upper(),
            "service_name": booking.service_title or "Tour Service",
            "travel_date": booking.travel_date.isoformat() if booking.travel_date else "TBD",
            "traveler_count": booking.traveler_count,
            "total_amount": f"{booking.final_amount:.2f}",
            "currency": booking.currency,
            "payment_method": (booking.payment_method or "").replace("_", " ").title(),
            "payment_reference": booking.payment_reference,
            "customer_email": booking.customer_email,
            "customer_phone": booking.customer_phone,
            "admin_notes": booking.admin_notes,
            "site_url": self.settings.site_url,
        }

    def render(self, template: NotificationTemplate, booking: Booking) -> Tuple[str, str]:
        """Return (subject, html body)."""
        context = self.template_context(booking)
        subject = f"{template.subject_prefix} - {context['booking_reference']}"
        html = _templates.get_template(f"{template.value}.html").render(**context)
        return subject, html

    def send(self, to_email: str, subject: str, html: str) -> None:
        """Send one HTML email. SMTP errors propagate to the caller."""
        from_email = self.settings.smtp_from_email or self.settings.smtp_username

        msg = EmailMessage()
        msg["From"] = from_email
        msg["To"] = to_email
        msg["Subject"] = subject
        msg.set_content("This email requires an HTML capable client.")
        msg.add_alternative(html, subtype="html")

        with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=10) as server:
            if self.settings.smtp_use_tls:
                server.starttls()
            if self.settings.smtp_username and self.settings.smtp_password:
                server.login(self.settings.smtp_username, self.settings.smtp_password)
            server.send_message(msg)

        logger.info(f"Email '{subject}' sent to {to_email}")
