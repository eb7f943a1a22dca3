# ============================================================================
# FILE: salonbook/api/dependencies.py
# Service providers for route handlers
# ============================================================================
from fastapi import Depends
from sqlalchemy.orm import Session

from salonbook.config.database import get_db
from salonbook.services.availability.availability_service import AvailabilityService
from salonbook.services.booking.booking_service import BookingService
from salonbook.services.vendor.schedule_override_service import ScheduleOverrideService


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


def get_schedule_override_service(db: Session = Depends(get_db)) -> ScheduleOverrideService:
    return ScheduleOverrideService(db)
