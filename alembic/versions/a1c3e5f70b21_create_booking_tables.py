"""create vendor schedule and booking tables

Revision ID: a1c3e5f70b21
Revises:
Create Date: 2026-10-19 09:12:40.482113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f70b21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Vendor shops
    op.create_table(
        'vendor_shops',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('shop_name', sa.String(100), nullable=False),
        sa.Column('open_time', sa.Time, nullable=False),
        sa.Column('close_time', sa.Time, nullable=False),
        sa.Column('break_start_time', sa.Time, nullable=True),
        sa.Column('break_end_time', sa.Time, nullable=True),
        sa.Column('weekly_holiday', sa.String(10), nullable=True),
        sa.Column('seat_count', sa.Integer, nullable=False, server_default='1'),
        sa.Column('worker_count', sa.Integer, nullable=False, server_default='1'),
        sa.Column('verification_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.CheckConstraint('open_time < close_time', name='ck_vendor_shops_hours'),
        sa.CheckConstraint('seat_count >= 1', name='ck_vendor_shops_seats'),
        sa.CheckConstraint('worker_count >= 1', name='ck_vendor_shops_workers'),
    )
    op.create_index('ix_vendor_shops_verification_status', 'vendor_shops', ['verification_status'])
    op.create_index('ix_vendor_shops_status', 'vendor_shops', ['status'])

    # 2. Per-date overrides
    op.create_table(
        'vendor_holidays',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('vendor_id', sa.Integer, sa.ForeignKey('vendor_shops.id', ondelete='CASCADE'), nullable=False),
        sa.Column('holiday_date', sa.Date, nullable=False),
        sa.Column('holiday_reason', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.UniqueConstraint('vendor_id', 'holiday_date', name='uq_vendor_holidays_vendor_date'),
    )
    op.create_index('ix_vendor_holidays_vendor_id', 'vendor_holidays', ['vendor_id'])

    op.create_table(
        'vendor_early_closures',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('vendor_id', sa.Integer, sa.ForeignKey('vendor_shops.id', ondelete='CASCADE'), nullable=False),
        sa.Column('closure_date', sa.Date, nullable=False),
        sa.Column('early_close_time', sa.Time, nullable=False),
        sa.Column('reason', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.UniqueConstraint('vendor_id', 'closure_date', name='uq_vendor_early_closures_vendor_date'),
    )
    op.create_index('ix_vendor_early_closures_vendor_id', 'vendor_early_closures', ['vendor_id'])

    # 3. Service catalog and vendor offerings
    op.create_table(
        'services_master',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('service_name', sa.String(100), nullable=False),
        sa.Column('default_duration_minutes', sa.Integer, nullable=False, server_default='30'),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )

    op.create_table(
        'vendor_services',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('vendor_id', sa.Integer, sa.ForeignKey('vendor_shops.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_id', sa.Integer, sa.ForeignKey('services_master.id'), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('is_available', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.UniqueConstraint('vendor_id', 'service_id', name='uq_vendor_services_vendor_service'),
    )
    op.create_index('ix_vendor_services_vendor_id', 'vendor_services', ['vendor_id'])
    op.create_index('ix_vendor_services_service_id', 'vendor_services', ['service_id'])

    # 4. Bookings and their service lines
    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('vendor_id', sa.Integer, sa.ForeignKey('vendor_shops.id'), nullable=False),
        sa.Column('customer_id', sa.Integer, nullable=True),
        sa.Column('booking_date', sa.Date, nullable=False),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('payment_method', sa.String(20), nullable=True),
        sa.Column('payment_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('booking_status', sa.String(20), nullable=False, server_default='confirmed'),
        sa.Column('booking_type', sa.String(20), nullable=False, server_default='online'),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('cancellation_reason', sa.Text, nullable=True),
        sa.Column('cancelled_by', sa.String(10), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_index('idx_bookings_vendor_date', 'bookings', ['vendor_id', 'booking_date'])
    op.create_index('ix_bookings_customer_id', 'bookings', ['customer_id'])
    op.create_index('ix_bookings_booking_status', 'bookings', ['booking_status'])

    op.create_table(
        'booking_services',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('booking_id', sa.Integer, sa.ForeignKey('bookings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_id', sa.Integer, sa.ForeignKey('services_master.id'), nullable=False),
        sa.Column('service_name', sa.String(100), nullable=False),
        sa.Column('service_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('start_time', sa.Time, nullable=False),
        sa.Column('end_time', sa.Time, nullable=False),
        sa.Column('duration_minutes', sa.Integer, nullable=False),
        sa.CheckConstraint('start_time < end_time', name='ck_booking_services_range'),
    )
    op.create_index('ix_booking_services_booking_id', 'booking_services', ['booking_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('booking_services')
    op.drop_table('bookings')
    op.drop_table('vendor_services')
    op.drop_table('services_master')
    op.drop_table('vendor_early_closures')
    op.drop_table('vendor_holidays')
    op.drop_table('vendor_shops')
