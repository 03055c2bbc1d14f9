"""create_bookings_and_gateways

Revision ID: 0001a7c3e5b2
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001a7c3e5b2'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'payment_gateways',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('gateway_name', sa.String(length=50), nullable=False, unique=True),
        sa.Column('display_name', sa.String(length=100), nullable=False),
        sa.Column('is_enabled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('test_mode', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('api_key', sa.String(length=255), nullable=True),
        sa.Column('api_secret', sa.String(length=255), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('bank_details', sa.JSON(), nullable=True),
        sa.Column('manual_instructions', sa.Text(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'bookings',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('booking_reference', sa.String(length=32), nullable=True, unique=True),
        sa.Column('customer_name', sa.String(length=255), nullable=False),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('customer_phone', sa.String(length=32), nullable=True),
        sa.Column('service_title', sa.String(length=255), nullable=True),
        sa.Column('travel_date', sa.Date(), nullable=True),
        sa.Column('traveler_count', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('final_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='INR'),
        sa.Column('booking_status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('payment_status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('payment_method', sa.String(length=50), nullable=True),
        sa.Column('payment_reference', sa.String(length=255), nullable=True),
        sa.Column('payment_proof_url', sa.String(length=500), nullable=True),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('confirmed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_bookings_booking_status', 'bookings', ['booking_status'])
    op.create_index('ix_bookings_payment_method', 'bookings', ['payment_method'])


def downgrade() -> None:
    op.drop_index('ix_bookings_payment_method', table_name='bookings')
    op.drop_index('ix_bookings_booking_status', table_name='bookings')
    op.drop_table('bookings')
    op.drop_table('payment_gateways')
