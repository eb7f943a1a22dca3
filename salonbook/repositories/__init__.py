from .vendor_schedule_repository import VendorScheduleRepository
from .service_repository import ServiceRepository
from .booking_repository import BookingRepository

__all__ = ["VendorScheduleRepository", "ServiceRepository", "BookingRepository"]
