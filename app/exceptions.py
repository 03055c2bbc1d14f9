"""
Payment error taxonomy.

Every error carries the message shown to the client and the HTTP status the
API layer answers with. Nothing here is retried.
"""


class PaymentError(Exception):
    """Base class for payment core failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(PaymentError):
    """Missing or malformed request fields."""

    status_code = 400


class UnsupportedGateway(PaymentError):
    """Gateway name outside the closed set for the operation."""

    status_code = 400


class BookingNotFound(PaymentError):
    status_code = 404

    def __init__(self, booking_id: str):
        super().__init__(f"Booking {booking_id} not found")
        self.booking_id = booking_id


class GatewayNotFound(PaymentError):
    status_code = 404

    def __init__(self, gateway_name: str):
        super().__init__(f"Payment gateway {gateway_name} not found or disabled")
        self.gateway_name = gateway_name


class GatewayMisconfigured(PaymentError):
    """Enabled gateway row without the credentials it needs."""

    status_code = 500


class PaymentNotCompleted(PaymentError):
    """Provider session exists but is not paid."""

    status_code = 402


class PaymentProviderError(PaymentError):
    """Provider SDK or API failure. The provider's message is passed through."""

    status_code = 502


class PersistenceError(PaymentError):
    """Booking write failed."""

    status_code = 500
