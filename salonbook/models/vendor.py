# salonbook/models/vendor.py
"""
Vendor shop model - operating hours and capacity for the slot engine
"""
from sqlalchemy import Column, String, Integer, Time, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum

from salonbook.models.base import Base


class VerificationStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class VendorStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class VendorShop(Base):
    __tablename__ = "vendor_shops"
    __table_args__ = (
        CheckConstraint("open_time < close_time", name="ck_vendor_shops_hours"),
        CheckConstraint("seat_count >= 1", name="ck_vendor_shops_seats"),
        CheckConstraint("worker_count >= 1", name="ck_vendor_shops_workers"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    shop_name = Column(String(100), nullable=False)

    # Operating hours
    open_time = Column(Time, nullable=False)
    close_time = Column(Time, nullable=False)
    break_start_time = Column(Time, nullable=True)
    break_end_time = Column(Time, nullable=True)
    weekly_holiday = Column(String(10), nullable=True)  # monday..sunday

    # Capacity
    seat_count = Column(Integer, nullable=False, default=1)
    worker_count = Column(Integer, nullable=False, default=1)

    verification_status = Column(String(20), nullable=False, default=VerificationStatus.PENDING.value, index=True)
    status = Column(String(20), nullable=False, default=VendorStatus.ACTIVE.value, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    holidays = relationship("VendorHoliday", back_populates="vendor", cascade="all, delete-orphan")
    early_closures = relationship("VendorEarlyClosure", back_populates="vendor", cascade="all, delete-orphan")
    offerings = relationship("VendorService", back_populates="vendor", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<VendorShop(id={self.id}, shop_name={self.shop_name})>"
