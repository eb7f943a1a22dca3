# salonbook/services/scheduling/slot_generator.py
"""
Fixed-width slot generation for a vendor's working day.

Slots are recomputed on every call. A holiday (one-off or weekly) yields no
slots; an early closure moves the end of the day forward; slots starting
inside the break window are skipped rather than marked unavailable.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

from salonbook.services.scheduling.schedule import VendorSchedule, EarlyClosureOverride

SLOT_DURATION_MINUTES = 30
WEEKLY_HOLIDAY_REASON = "Weekly holiday"


@dataclass(frozen=True)
class TimeSlot:
    start: time
    end: time


def iter_slots(
        schedule: VendorSchedule,
        close_time: time,
        slot_minutes: int = SLOT_DURATION_MINUTES
) -> Iterator[TimeSlot]:
    """Walk from open time to close_time in slot_minutes steps, dropping a trailing partial slot"""
    step = timedelta(minutes=slot_minutes)
    day = date.min
    current = datetime.combine(day, schedule.open_time)
    day_end = datetime.combine(day, close_time)

    while current + step <= day_end:
        slot_end = current + step
        if not schedule.in_break(current.time()):
            yield TimeSlot(start=current.time(), end=slot_end.time())
        current = slot_end


@dataclass(frozen=True)
class DaySlots:
    """Slots for one vendor and date. Iterating re-runs the generation."""
    schedule: VendorSchedule
    day: date
    close_time: time
    slot_minutes: int = SLOT_DURATION_MINUTES
    is_holiday: bool = False
    holiday_reason: Optional[str] = None
    early_closure: Optional[EarlyClosureOverride] = field(default=None)

    def __iter__(self) -> Iterator[TimeSlot]:
        if self.is_holiday:
            return iter(())
        return iter_slots(self.schedule, self.close_time, self.slot_minutes)


class SlotGenerator:
    """Builds the day's slot sequence from a vendor schedule store"""

    def __init__(self, schedule_store, slot_minutes: int = SLOT_DURATION_MINUTES):
        self.schedule_store = schedule_store
        self.slot_minutes = slot_minutes

    def generate_slots(self, vendor_id: int, day: date) -> DaySlots:
        schedule = self.schedule_store.get_schedule(vendor_id)
        return self.generate_for_schedule(schedule, day)

    def generate_for_schedule(self, schedule: VendorSchedule, day: date) -> DaySlots:
        holiday = self.schedule_store.get_holiday(schedule.vendor_id, day)
        if holiday:
            return DaySlots(
                schedule=schedule,
                day=day,
                close_time=schedule.close_time,
                slot_minutes=self.slot_minutes,
                is_holiday=True,
                holiday_reason=holiday.reason,
            )

        if schedule.is_weekly_holiday(day):
            return DaySlots(
                schedule=schedule,
                day=day,
                close_time=schedule.close_time,
                slot_minutes=self.slot_minutes,
                is_holiday=True,
                holiday_reason=WEEKLY_HOLIDAY_REASON,
            )

        early_closure = self.schedule_store.get_early_closure(schedule.vendor_id, day)
        close_time = early_closure.early_close_time if early_closure else schedule.close_time

        return DaySlots(
            schedule=schedule,
            day=day,
            close_time=close_time,
            slot_minutes=self.slot_minutes,
            early_closure=early_closure,
        )
