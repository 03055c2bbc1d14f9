"""
Gateway Registry - lookup of enabled payment gateway configuration.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import GatewayNotFound
from app.models.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


class GatewayRegistry:
    """Reads gateway rows fresh on every call; nothing is cached."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_enabled(self, gateway_name: str) -> PaymentGateway:
        """Return the enabled gateway row for a name or raise GatewayNotFound."""
        result = await self.db.execute(
            select(PaymentGateway).where(
                PaymentGateway.gateway_name == gateway_name,
                PaymentGateway.is_enabled.is_(True),
            )
        )
        gateway = result.scalar_one_or_none()

        if not gateway:
            logger.warning(f"Gateway lookup failed: {gateway_name}", extra={"gateway": gateway_name})
            raise GatewayNotFound(gateway_name)

        return gateway

    async def list_enabled(self) -> List[PaymentGateway]:
        """Enabled gateways in display order, for the checkout selector."""
        result = await self.db.execute(
            select(PaymentGateway)
            .where(PaymentGateway.is_enabled.is_(True))
            .order_by(PaymentGateway.sort_order, PaymentGateway.gateway_name)
        )
        return list(result.scalars().all())
