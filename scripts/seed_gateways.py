"""
Seed the four payment gateways.
Manual methods are enabled; card gateways stay disabled until keys are set.
Run: python scripts/seed_gateways.py [--razorpay-key KEY] [--stripe-secret SECRET]
"""

import argparse
import asyncio
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select

from app.database import engine, get_db_context
from app.fsm.states import GatewayName
from app.models.payment_gateway import PaymentGateway


GATEWAYS_DATA = [
    {
        "gateway_name": GatewayName.RAZORPAY.value,
        "sort_order": 1,
    },
    {
        "gateway_name": GatewayName.STRIPE.value,
        "sort_order": 2,
    },
    {
        "gateway_name": GatewayName.CASH_ON_ARRIVAL.value,
        "sort_order": 3,
        "is_enabled": True,
        "test_mode": False,
        "instructions": "You can pay in cash at the pickup location or when you meet our representative.",
    },
    {
        "gateway_name": GatewayName.BANK_TRANSFER.value,
        "sort_order": 4,
        "is_enabled": True,
        "test_mode": False,
        "instructions": "Use your booking reference as the transfer remark and upload the receipt.",
        "bank_details": {
            "account_name": "",
            "account_number": "",
            "bank_name": "",
            "ifsc_code": "",
            "iban": "",
            "swift_code": "",
        },
    },
]


async def seed_gateways(razorpay_key: str = "", stripe_secret: str = ""):
    async with get_db_context() as db:
        for data in GATEWAYS_DATA:
            name = data["gateway_name"]
            result = await db.execute(
                select(PaymentGateway).where(PaymentGateway.gateway_name == name)
            )
            gateway = result.scalar_one_or_none()

            if gateway:
                print(f"  = {name} already exists")
            else:
                gateway = PaymentGateway(
                    display_name=GatewayName(name).display_name,
                    **data,
                )
                db.add(gateway)
                print(f"  + {name}")

            if name == GatewayName.RAZORPAY.value and razorpay_key:
                gateway.api_key = razorpay_key
                gateway.is_enabled = True
            if name == GatewayName.STRIPE.value and stripe_secret:
                gateway.api_secret = stripe_secret
                gateway.is_enabled = True

    await engine.dispose()
    print("Gateways seeded.")


def main():
    parser = argparse.ArgumentParser(description="Seed payment gateways")
    parser.add_argument("--razorpay-key", default="", help="Razorpay key id")
    parser.add_argument("--stripe-secret", default="", help="Stripe secret key")
    args = parser.parse_args()

    if not engine:
        print("DATABASE_URL not configured")
        sys.exit(1)

    asyncio.run(seed_gateways(args.razorpay_key, args.stripe_secret))


if __name__ == "__main__":
    main()
