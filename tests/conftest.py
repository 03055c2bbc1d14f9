"""
Pytest configuration and fixtures.
"""

import asyncio
import uuid
from decimal import Decimal
from typing import AsyncGenerator, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.database import Base
from app.fsm.states import GatewayName, NotificationTemplate
from app.models.booking import Booking
from app.models.payment_gateway import PaymentGateway
from app.services.stripe_service import StripeCheckout, StripeSession
import app.models  # noqa: F401

# Use in-memory SQLite for tests
TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Database session for a test."""
    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        app_env="development",
        database_url="",
        site_url="https://shop.example.com",
        business_name="Trip Habibi",
        default_currency="INR",
        admin_api_key="test-admin-key",
        email_enabled=False,
    )


class FakeStripeGateway:
    """Stands in for the Stripe SDK wrapper and records every call."""

    def __init__(
        self,
        payment_status: str = "paid",
        payment_intent: Optional[str] = "pi_test_123",
        error: Optional[Exception] = None,
        session_booking_id: Optional[str] = None,
    ):
        self.payment_status = payment_status
        self.session_booking_id = session_booking_id
        self.payment_intent = payment_intent
        self.error = error
        self.calls: List[Tuple[str, object]] = []

    def find_or_create_customer(self, email, name, phone):
        self.calls.append(("customer", email))
        if self.error:
            raise self.error
        return "cus_test_1"

    def create_checkout_session(self, params):
        self.calls.append(("create_session", params))
        return StripeSession(id="cs_test_1", url="https://checkout.stripe.com/c/pay/cs_test_1")

    def retrieve_session(self, session_id):
        self.calls.append(("retrieve_session", session_id))
        if self.error:
            raise self.error
        return StripeSession(
            id=session_id,
            payment_status=self.payment_status,
            payment_intent=self.payment_intent,
            metadata={"booking_id": self.session_booking_id} if self.session_booking_id else {},
        )


class RecordingNotifier:
    """NotificationPort fake."""

    def __init__(self, fail: bool = False, hang: bool = False):
        self.fail = fail
        self.hang = hang
        self.sent: List[Tuple[str, NotificationTemplate]] = []

    async def send_booking_notification(self, booking_id, template):
        self.sent.append((booking_id, template))
        if self.hang:
            await asyncio.Event().wait()
        if self.fail:
            raise RuntimeError("broker unavailable")


@pytest.fixture
def fake_stripe() -> FakeStripeGateway:
    return FakeStripeGateway()


@pytest.fixture
def stripe_secrets() -> List[str]:
    """Secret keys the Stripe factory was asked to build clients for."""
    return []


@pytest.fixture
def stripe_checkout(settings, fake_stripe, stripe_secrets) -> StripeCheckout:
    def factory(secret_key: str):
        stripe_secrets.append(secret_key)
        return fake_stripe

    return StripeCheckout(settings, gateway_factory=factory)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest_asyncio.fixture
async def gateways(db) -> Dict[str, PaymentGateway]:
    """All four gateways enabled with credentials."""
    rows = [
        PaymentGateway(
            gateway_name=GatewayName.RAZORPAY.value,
            display_name="Razorpay",
            is_enabled=True,
            api_key="rzp_test_key",
            api_secret="rzp_test_secret",
            sort_order=1,
        ),
        PaymentGateway(
            gateway_name=GatewayName.STRIPE.value,
            display_name="Card",
            is_enabled=True,
            api_key="pk_test_key",
            api_secret="sk_test_secret",
            sort_order=2,
        ),
        PaymentGateway(
            gateway_name=GatewayName.CASH_ON_ARRIVAL.value,
            display_name="Cash on Arrival",
            is_enabled=True,
            instructions="Pay the driver at pickup.",
            sort_order=3,
        ),
        PaymentGateway(
            gateway_name=GatewayName.BANK_TRANSFER.value,
            display_name="Bank Transfer",
            is_enabled=True,
            instructions="Use your booking reference as remark.",
            bank_details={"bank_name": "Emirates NBD", "iban": "AE070331234567890123456"},
            sort_order=4,
        ),
    ]
    db.add_all(rows)
    await db.commit()
    return {row.gateway_name: row for row in rows}


@pytest_asyncio.fixture
async def make_booking(db):
    """Factory for pending/pending bookings."""

    async def _make(amount: str = "1500.00", **overrides) -> Booking:
        booking = Booking(
            id=uuid.uuid4(),
            booking_reference=f"TH{uuid.uuid4().hex[:8].upper()}",
            customer_name="Aisha Khan",
            customer_email="aisha@example.com",
            customer_phone="+971500000000",
            service_title="Desert Safari",
            final_amount=Decimal(amount),
            currency="INR",
            **overrides,
        )
        db.add(booking)
        await db.commit()
        return booking

    return _make
