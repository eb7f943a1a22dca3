from datetime import date, time

import pytest

from salonbook.core.exceptions import ValidationError
from salonbook.services.scheduling.capacity import max_concurrent
from salonbook.services.scheduling.schedule import (
    VendorSchedule,
    HolidayOverride,
    EarlyClosureOverride,
)
from salonbook.services.scheduling.slot_generator import SlotGenerator, TimeSlot, WEEKLY_HOLIDAY_REASON

TUESDAY = date(2030, 1, 15)
WEDNESDAY = date(2030, 1, 16)


class InMemoryScheduleStore:
    def __init__(self, schedule, holidays=None, early_closures=None):
        self.schedule = schedule
        self.holidays = holidays or {}
        self.early_closures = early_closures or {}

    def get_schedule(self, vendor_id):
        return self.schedule

    def get_holiday(self, vendor_id, day):
        return self.holidays.get(day)

    def get_early_closure(self, vendor_id, day):
        return self.early_closures.get(day)


def schedule(**overrides):
    fields = dict(vendor_id=1, open_time=time(9, 0), close_time=time(12, 0), seat_count=1, worker_count=1)
    fields.update(overrides)
    return VendorSchedule(**fields)


def starts(day_slots):
    return [slot.start.strftime("%H:%M") for slot in day_slots]


def test_morning_shift_yields_six_half_hour_slots():
    generator = SlotGenerator(InMemoryScheduleStore(schedule()))

    slots = list(generator.generate_slots(1, TUESDAY))

    assert len(slots) == 6
    assert slots[0] == TimeSlot(time(9, 0), time(9, 30))
    assert slots[-1] == TimeSlot(time(11, 30), time(12, 0))
    assert starts(slots) == ["09:00", "09:30", "10:00", "10:30", "11:00", "11:30"]


def test_early_closure_ends_day_at_closure_time():
    closure = EarlyClosureOverride(vendor_id=1, closure_date=TUESDAY, early_close_time=time(11, 0), reason="Staff meeting")
    generator = SlotGenerator(InMemoryScheduleStore(schedule(), early_closures={TUESDAY: closure}))

    day_slots = generator.generate_slots(1, TUESDAY)
    slots = list(day_slots)

    assert len(slots) == 4
    assert slots[-1].end == time(11, 0)
    assert all(slot.end <= time(11, 0) for slot in slots)
    assert day_slots.early_closure == closure


def test_early_closure_only_applies_to_its_date():
    closure = EarlyClosureOverride(vendor_id=1, closure_date=TUESDAY, early_close_time=time(11, 0))
    generator = SlotGenerator(InMemoryScheduleStore(schedule(), early_closures={TUESDAY: closure}))

    assert len(list(generator.generate_slots(1, WEDNESDAY))) == 6


def test_holiday_returns_no_slots_with_reason():
    holiday = HolidayOverride(vendor_id=1, holiday_date=TUESDAY, reason="Diwali")
    generator = SlotGenerator(InMemoryScheduleStore(schedule(), holidays={TUESDAY: holiday}))

    day_slots = generator.generate_slots(1, TUESDAY)

    assert day_slots.is_holiday
    assert day_slots.holiday_reason == "Diwali"
    assert list(day_slots) == []


def test_holiday_wins_over_early_closure():
    holiday = HolidayOverride(vendor_id=1, holiday_date=TUESDAY)
    closure = EarlyClosureOverride(vendor_id=1, closure_date=TUESDAY, early_close_time=time(10, 0))
    store = InMemoryScheduleStore(schedule(), holidays={TUESDAY: holiday}, early_closures={TUESDAY: closure})

    day_slots = SlotGenerator(store).generate_slots(1, TUESDAY)

    assert day_slots.is_holiday
    assert day_slots.early_closure is None


def test_weekly_holiday_closes_matching_weekday_only():
    generator = SlotGenerator(InMemoryScheduleStore(schedule(weekly_holiday="Wednesday")))

    wednesday = generator.generate_slots(1, WEDNESDAY)
    assert wednesday.is_holiday
    assert wednesday.holiday_reason == WEEKLY_HOLIDAY_REASON
    assert list(wednesday) == []

    assert len(list(generator.generate_slots(1, TUESDAY))) == 6


def test_break_window_slots_are_skipped():
    store = InMemoryScheduleStore(schedule(
        close_time=time(14, 0),
        break_start_time=time(12, 0),
        break_end_time=time(13, 0),
    ))

    slots = list(SlotGenerator(store).generate_slots(1, TUESDAY))

    assert "12:00" not in starts(slots)
    assert "12:30" not in starts(slots)
    assert "13:00" in starts(slots)
    assert len(slots) == 8


def test_trailing_partial_slot_is_dropped():
    store = InMemoryScheduleStore(schedule(close_time=time(10, 45)))

    slots = list(SlotGenerator(store).generate_slots(1, TUESDAY))

    assert starts(slots) == ["09:00", "09:30", "10:00"]
    assert slots[-1].end == time(10, 30)


def test_slots_are_recomputed_on_each_iteration():
    day_slots = SlotGenerator(InMemoryScheduleStore(schedule())).generate_slots(1, TUESDAY)

    first = list(day_slots)
    second = list(day_slots)

    assert first == second
    assert first == sorted(set(first), key=lambda slot: slot.start)


def test_capacity_is_the_scarcer_resource():
    assert max_concurrent(schedule(seat_count=4, worker_count=2)) == 2
    assert max_concurrent(schedule(seat_count=1, worker_count=3)) == 1


@pytest.mark.parametrize("overrides", [
    {"seat_count": 0},
    {"worker_count": 0},
    {"open_time": time(12, 0), "close_time": time(9, 0)},
    {"break_start_time": time(8, 0), "break_end_time": time(9, 30)},
    {"break_start_time": time(10, 0)},
    {"weekly_holiday": "someday"},
])
def test_invalid_schedules_are_rejected(overrides):
    with pytest.raises(ValidationError):
        schedule(**overrides)
