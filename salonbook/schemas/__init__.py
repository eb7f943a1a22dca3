from .availability import AvailabilityResponse, SlotResponse, EarlyClosureInfo
from .booking import (
    BookingServiceRequest,
    CreateBookingRequest,
    CreateOfflineBookingRequest,
    CancelBookingRequest,
    CompleteBookingRequest,
    BookingServiceLineResponse,
    BookingResponse,
    BookingListResponse,
    CustomerBookingListResponse,
    PageInfo,
)
from .schedule import HolidayCreateRequest, HolidayResponse, EarlyClosureRequest, EarlyClosureResponse

__all__ = [
    "AvailabilityResponse",
    "SlotResponse",
    "EarlyClosureInfo",
    "BookingServiceRequest",
    "CreateBookingRequest",
    "CreateOfflineBookingRequest",
    "CancelBookingRequest",
    "CompleteBookingRequest",
    "BookingServiceLineResponse",
    "BookingResponse",
    "BookingListResponse",
    "CustomerBookingListResponse",
    "PageInfo",
    "HolidayCreateRequest",
    "HolidayResponse",
    "EarlyClosureRequest",
    "EarlyClosureResponse",
]
