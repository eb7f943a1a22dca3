# ============================================================================
# FILE: salonbook/models/booking.py
# Bookings and their per-service lines
# ============================================================================
from sqlalchemy import (
    Column, String, Integer, Numeric, Date, Time, Text, DateTime, ForeignKey, Index, CheckConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum

from salonbook.models.base import Base
from salonbook.utils.time_utils import format_hhmm


class BookingStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


# Statuses whose lines occupy capacity
ACTIVE_BOOKING_STATUSES = (BookingStatus.CONFIRMED.value, BookingStatus.COMPLETED.value)


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    UPI = "upi"
    CARD = "card"
    WALLET = "wallet"


class BookingType(str, enum.Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    WALK_IN = "walk_in"


class ActorRole(str, enum.Enum):
    """Who is acting on a booking; also recorded as cancelled_by."""
    CUSTOMER = "customer"
    VENDOR = "vendor"
    ADMIN = "admin"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("idx_bookings_vendor_date", "vendor_id", "booking_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    # References
    vendor_id = Column(Integer, ForeignKey("vendor_shops.id"), nullable=False)
    customer_id = Column(Integer, nullable=True, index=True)  # null for walk-ins

    booking_date = Column(Date, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)

    payment_method = Column(String(20), nullable=True)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.PENDING.value)
    booking_status = Column(String(20), nullable=False, default=BookingStatus.CONFIRMED.value, index=True)
    booking_type = Column(String(20), nullable=False, default=BookingType.ONLINE.value)
    notes = Column(Text, nullable=True)

    cancellation_reason = Column(Text, nullable=True)
    cancelled_by = Column(String(10), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    services = relationship(
        "BookingServiceLine",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingServiceLine.start_time",
        lazy="selectin",
    )

    @property
    def earliest_start_time(self):
        return min(line.start_time for line in self.services)

    def __repr__(self):
        return f"<Booking(id={self.id}, vendor_id={self.vendor_id}, status={self.booking_status})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "booking_id": self.id,
            "vendor_id": self.vendor_id,
            "customer_id": self.customer_id,
            "booking_date": self.booking_date.isoformat(),
            "booking_status": self.booking_status,
            "booking_type": self.booking_type,
            "total_amount": float(self.total_amount),
            "payment_method": self.payment_method,
            "payment_status": self.payment_status,
            "notes": self.notes,
            "cancellation_reason": self.cancellation_reason,
            "cancelled_by": self.cancelled_by,
            "services": [line.to_dict() for line in self.services],
        }


class BookingServiceLine(Base):
    """One service inside a booking. Name and price are snapshots taken at booking time."""
    __tablename__ = "booking_services"
    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_booking_services_range"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services_master.id"), nullable=False)

    service_name = Column(String(100), nullable=False)
    service_price = Column(Numeric(10, 2), nullable=False)

    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    duration_minutes = Column(Integer, nullable=False)

    booking = relationship("Booking", back_populates="services")

    def to_dict(self):
        return {
            "service_id": self.service_id,
            "service_name": self.service_name,
            "service_price": float(self.service_price),
            "start_time": format_hhmm(self.start_time),
            "end_time": format_hhmm(self.end_time),
            "duration_minutes": self.duration_minutes,
        }
