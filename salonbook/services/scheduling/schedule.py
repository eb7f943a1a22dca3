# salonbook/services/scheduling/schedule.py
"""Read-only value objects describing a vendor's working day"""
from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from salonbook.core.exceptions import ValidationError
from salonbook.utils.time_utils import WEEKDAYS, weekday_name


@dataclass(frozen=True)
class VendorSchedule:
    vendor_id: int
    open_time: time
    close_time: time
    seat_count: int
    worker_count: int
    break_start_time: Optional[time] = None
    break_end_time: Optional[time] = None
    weekly_holiday: Optional[str] = None

    def __post_init__(self):
        if self.open_time >= self.close_time:
            raise ValidationError(
                "Open time must be before close time",
                details={"vendor_id": self.vendor_id},
            )
        if self.seat_count < 1 or self.worker_count < 1:
            raise ValidationError(
                "Seat and worker counts must be at least 1",
                details={"vendor_id": self.vendor_id},
            )
        if (self.break_start_time is None) != (self.break_end_time is None):
            raise ValidationError(
                "Break window needs both a start and an end",
                details={"vendor_id": self.vendor_id},
            )
        if self.has_break and not (
            self.open_time <= self.break_start_time < self.break_end_time <= self.close_time
        ):
            raise ValidationError(
                "Break window must lie within operating hours",
                details={"vendor_id": self.vendor_id},
            )
        if self.weekly_holiday is not None and self.weekly_holiday.lower() not in WEEKDAYS:
            raise ValidationError(
                f"Unknown weekly holiday '{self.weekly_holiday}'",
                details={"vendor_id": self.vendor_id},
            )

    @property
    def has_break(self) -> bool:
        return self.break_start_time is not None and self.break_end_time is not None

    def is_weekly_holiday(self, day: date) -> bool:
        return self.weekly_holiday is not None and self.weekly_holiday.lower() == weekday_name(day)

    def in_break(self, moment: time) -> bool:
        return self.has_break and self.break_start_time <= moment < self.break_end_time


@dataclass(frozen=True)
class HolidayOverride:
    vendor_id: int
    holiday_date: date
    reason: Optional[str] = None


@dataclass(frozen=True)
class EarlyClosureOverride:
    vendor_id: int
    closure_date: date
    early_close_time: time
    reason: Optional[str] = None
