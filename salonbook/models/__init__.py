# salonbook/models/__init__.py
from .base import Base
from .vendor import VendorShop, VerificationStatus, VendorStatus
from .schedule_override import VendorHoliday, VendorEarlyClosure
from .service import ServiceCatalogItem, VendorService
from .booking import (
    Booking,
    BookingServiceLine,
    BookingStatus,
    PaymentStatus,
    PaymentMethod,
    BookingType,
    ActorRole,
    ACTIVE_BOOKING_STATUSES,
)

__all__ = [
    "Base",
    "VendorShop",
    "VerificationStatus",
    "VendorStatus",
    "VendorHoliday",
    "VendorEarlyClosure",
    "ServiceCatalogItem",
    "VendorService",
    "Booking",
    "BookingServiceLine",
    "BookingStatus",
    "PaymentStatus",
    "PaymentMethod",
    "BookingType",
    "ActorRole",
    "ACTIVE_BOOKING_STATUSES",
]
