# salonbook/models/schedule_override.py
from sqlalchemy import Column, String, Integer, Date, Time, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from salonbook.models.base import Base
from salonbook.utils.time_utils import format_hhmm


class VendorHoliday(Base):
    """Full-day closure for a single date"""
    __tablename__ = "vendor_holidays"
    __table_args__ = (
        UniqueConstraint("vendor_id", "holiday_date", name="uq_vendor_holidays_vendor_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    vendor_id = Column(Integer, ForeignKey("vendor_shops.id", ondelete="CASCADE"), nullable=False, index=True)
    holiday_date = Column(Date, nullable=False)
    holiday_reason = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    vendor = relationship("VendorShop", back_populates="holidays")

    def to_dict(self):
        return {
            "holiday_id": self.id,
            "vendor_id": self.vendor_id,
            "holiday_date": self.holiday_date.isoformat(),
            "holiday_reason": self.holiday_reason,
        }


class VendorEarlyClosure(Base):
    """Closes the shop before its regular close time on one date"""
    __tablename__ = "vendor_early_closures"
    __table_args__ = (
        UniqueConstraint("vendor_id", "closure_date", name="uq_vendor_early_closures_vendor_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    vendor_id = Column(Integer, ForeignKey("vendor_shops.id", ondelete="CASCADE"), nullable=False, index=True)
    closure_date = Column(Date, nullable=False)
    early_close_time = Column(Time, nullable=False)
    reason = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    vendor = relationship("VendorShop", back_populates="early_closures")

    def to_dict(self):
        return {
            "closure_id": self.id,
            "vendor_id": self.vendor_id,
            "closure_date": self.closure_date.isoformat(),
            "early_close_time": format_hhmm(self.early_close_time),
            "reason": self.reason,
        }
