# ===== salonbook/services/availability/availability_service.py =====
from typing import Dict, Optional
from datetime import date, time
from sqlalchemy.orm import Session
import logging

from salonbook.config.settings import get_settings
from salonbook.repositories.booking_repository import BookingRepository
from salonbook.repositories.vendor_schedule_repository import VendorScheduleRepository
from salonbook.services.scheduling.capacity import max_concurrent
from salonbook.services.scheduling.overlap import OverlapDetector
from salonbook.services.scheduling.slot_generator import SlotGenerator
from salonbook.utils.time_utils import format_hhmm

logger = logging.getLogger(__name__)


class AvailabilityService:
    """
    Advisory slot listing for a vendor and date.

    The result can be stale by the time a booking is attempted; admission
    is decided again inside the booking transaction.
    """

    def __init__(self, db: Session, slot_minutes: Optional[int] = None):
        self.db = db
        self.schedule_store = VendorScheduleRepository(db)
        self.overlap_detector = OverlapDetector(BookingRepository(db))
        self.slot_generator = SlotGenerator(
            self.schedule_store,
            slot_minutes=slot_minutes or get_settings().SLOT_DURATION_MINUTES,
        )

    def get_available_slots(self, vendor_id: int, day: date) -> Dict:
        """Generate the day's slots and mark each one available or not"""
        schedule = self.schedule_store.get_schedule(vendor_id)
        day_slots = self.slot_generator.generate_for_schedule(schedule, day)

        if day_slots.is_holiday:
            logger.info(f"Vendor {vendor_id} closed on {day.isoformat()}: {day_slots.holiday_reason}")
            return {
                "is_holiday": True,
                "holiday_reason": day_slots.holiday_reason,
                "early_closure": None,
                "slots": [],
            }

        capacity = max_concurrent(schedule)
        slots = []
        for slot in day_slots:
            busy = self.overlap_detector.count_overlapping(vendor_id, day, slot.start, slot.end)
            slots.append({
                "start_time": format_hhmm(slot.start),
                "end_time": format_hhmm(slot.end),
                "is_available": busy < capacity,
            })

        early_closure = day_slots.early_closure
        return {
            "is_holiday": False,
            "holiday_reason": None,
            "early_closure": {
                "closes_at": format_hhmm(early_closure.early_close_time),
                "reason": early_closure.reason,
            } if early_closure else None,
            "slots": slots,
        }

    def is_range_available(self, vendor_id: int, day: date, start: time, end: time) -> bool:
        """Advisory check of a single range against the vendor's capacity"""
        schedule = self.schedule_store.get_schedule(vendor_id)
        busy = self.overlap_detector.count_overlapping(vendor_id, day, start, end)
        return busy < max_concurrent(schedule)
