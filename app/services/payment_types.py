"""
Value types shared by the gateway adapters and the payment services.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.fsm.states import ActionType, GatewayName


def to_minor_units(amount: Decimal) -> int:
    """
    Convert a major-unit amount to the provider's integer minor unit.
    Rounds half up, so 99.995 becomes 10000 rather than truncating to 9999.
    """
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class CustomerDetails(BaseModel):
    """Contact fields passed through to providers."""

    name: str
    email: str
    phone: Optional[str] = None


class _Response(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_response(self) -> Dict[str, Any]:
        """Serialize for the API with camelCase keys."""
        return {
            "success": True,
            **self.model_dump(mode="json", by_alias=True, exclude_none=True),
        }


class CheckoutAction(_Response):
    """Client must hand off to a provider checkout."""

    payment_method: GatewayName
    requires_action: Literal[True] = True
    action_type: ActionType
    checkout_url: Optional[str] = None
    checkout_data: Optional[Dict[str, Any]] = None
    session_id: Optional[str] = None


class ManualSettlement(_Response):
    """Nothing to redirect to; show the message and instructions."""

    payment_method: GatewayName
    requires_action: Literal[False] = False
    message: str
    bank_details: Optional[Any] = None
    instructions: Optional[str] = None


InitiationResult = Union[CheckoutAction, ManualSettlement]


class VerificationResult(_Response):
    message: str
    booking_id: str
