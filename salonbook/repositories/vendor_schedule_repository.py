# salonbook/repositories/vendor_schedule_repository.py
"""Data access for vendor operating hours and per-date overrides"""
from datetime import date, time
from typing import Optional

from sqlalchemy.orm import Session

from salonbook.core.exceptions import NotFoundError
from salonbook.models.schedule_override import VendorHoliday, VendorEarlyClosure
from salonbook.models.vendor import VendorShop, VendorStatus, VerificationStatus
from salonbook.services.scheduling.schedule import (
    VendorSchedule,
    HolidayOverride,
    EarlyClosureOverride,
)


class VendorScheduleRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_vendor(self, vendor_id: int) -> Optional[VendorShop]:
        return self.db.query(VendorShop).filter(VendorShop.id == vendor_id).first()

    def get_bookable_vendor(self, vendor_id: int, for_update: bool = False) -> Optional[VendorShop]:
        """Approved and active vendor, optionally row-locked for the rest of the transaction"""
        query = self.db.query(VendorShop).filter(
            VendorShop.id == vendor_id,
            VendorShop.verification_status == VerificationStatus.APPROVED.value,
            VendorShop.status == VendorStatus.ACTIVE.value,
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_schedule(self, vendor_id: int, for_update: bool = False) -> VendorSchedule:
        vendor = self.get_bookable_vendor(vendor_id, for_update=for_update)
        if not vendor:
            raise NotFoundError("Vendor not found or not available", details={"vendor_id": vendor_id})
        return self.to_schedule(vendor)

    @staticmethod
    def to_schedule(vendor: VendorShop) -> VendorSchedule:
        return VendorSchedule(
            vendor_id=vendor.id,
            open_time=vendor.open_time,
            close_time=vendor.close_time,
            seat_count=vendor.seat_count,
            worker_count=vendor.worker_count,
            break_start_time=vendor.break_start_time,
            break_end_time=vendor.break_end_time,
            weekly_holiday=vendor.weekly_holiday,
        )

    # ------------------------------------------------------------------
    # Holidays
    # ------------------------------------------------------------------

    def _holiday_row(self, vendor_id: int, day: date) -> Optional[VendorHoliday]:
        return self.db.query(VendorHoliday).filter(
            VendorHoliday.vendor_id == vendor_id,
            VendorHoliday.holiday_date == day,
        ).first()

    def get_holiday(self, vendor_id: int, day: date) -> Optional[HolidayOverride]:
        row = self._holiday_row(vendor_id, day)
        if not row:
            return None
        return HolidayOverride(vendor_id=row.vendor_id, holiday_date=row.holiday_date, reason=row.holiday_reason)

    def add_holiday(self, vendor_id: int, day: date, reason: Optional[str]) -> VendorHoliday:
        holiday = VendorHoliday(vendor_id=vendor_id, holiday_date=day, holiday_reason=reason)
        self.db.add(holiday)
        self.db.flush()
        return holiday

    def delete_holiday(self, vendor_id: int, day: date) -> bool:
        row = self._holiday_row(vendor_id, day)
        if not row:
            return False
        self.db.delete(row)
        self.db.flush()
        return True

    def has_holiday(self, vendor_id: int, day: date) -> bool:
        return self._holiday_row(vendor_id, day) is not None

    # ------------------------------------------------------------------
    # Early closures
    # ------------------------------------------------------------------

    def _early_closure_row(self, vendor_id: int, day: date) -> Optional[VendorEarlyClosure]:
        return self.db.query(VendorEarlyClosure).filter(
            VendorEarlyClosure.vendor_id == vendor_id,
            VendorEarlyClosure.closure_date == day,
        ).first()

    def get_early_closure(self, vendor_id: int, day: date) -> Optional[EarlyClosureOverride]:
        row = self._early_closure_row(vendor_id, day)
        if not row:
            return None
        return EarlyClosureOverride(
            vendor_id=row.vendor_id,
            closure_date=row.closure_date,
            early_close_time=row.early_close_time,
            reason=row.reason,
        )

    def upsert_early_closure(
            self,
            vendor_id: int,
            day: date,
            early_close_time: time,
            reason: Optional[str]
    ) -> tuple[VendorEarlyClosure, bool]:
        """Insert or update the closure for a date. Returns (row, created)."""
        row = self._early_closure_row(vendor_id, day)
        created = row is None
        if created:
            row = VendorEarlyClosure(
                vendor_id=vendor_id,
                closure_date=day,
                early_close_time=early_close_time,
                reason=reason,
            )
            self.db.add(row)
        else:
            row.early_close_time = early_close_time
            row.reason = reason
        self.db.flush()
        return row, created

    def delete_early_closure(self, vendor_id: int, day: date) -> bool:
        row = self._early_closure_row(vendor_id, day)
        if not row:
            return False
        self.db.delete(row)
        self.db.flush()
        return True
