"""
Pydantic schemas for booking requests and responses
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date, time

from salonbook.models.booking import ActorRole, BookingType, PaymentMethod
from salonbook.utils.time_utils import parse_hhmm


def _hhmm(value):
    if isinstance(value, time):
        return value
    return parse_hhmm(value)


# ============================================================================
# Request Schemas
# ============================================================================

class BookingServiceRequest(BaseModel):
    """One requested service and when it should start"""
    service_id: int = Field(..., ge=1)
    start_time: time = Field(..., description="HH:MM, 24-hour")

    @field_validator("start_time", mode="before")
    @classmethod
    def validate_start_time(cls, v):
        return _hhmm(v)


class CreateBookingRequest(BaseModel):
    vendor_id: int = Field(..., ge=1)
    customer_id: int = Field(..., ge=1)
    booking_date: date
    services: List[BookingServiceRequest] = Field(..., min_length=1)
    payment_method: Optional[PaymentMethod] = None
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("booking_date")
    @classmethod
    def validate_booking_date(cls, v):
        if v < date.today():
            raise ValueError("Booking date cannot be in the past")
        return v


class CreateOfflineBookingRequest(BaseModel):
    """Walk-in booking entered by the vendor"""
    booking_date: date
    services: List[BookingServiceRequest] = Field(..., min_length=1)
    customer_name: Optional[str] = Field(None, min_length=2, max_length=100)
    customer_phone: Optional[str] = Field(None, max_length=20)
    payment_method: Optional[PaymentMethod] = None
    booking_type: BookingType = BookingType.OFFLINE
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("booking_type")
    @classmethod
    def validate_booking_type(cls, v):
        if v not in (BookingType.OFFLINE, BookingType.WALK_IN):
            raise ValueError("Booking type must be offline or walk_in")
        return v


class CancelBookingRequest(BaseModel):
    actor_id: int = Field(..., ge=1)
    actor_role: ActorRole
    reason: Optional[str] = Field(None, max_length=500)


class CompleteBookingRequest(BaseModel):
    vendor_id: int = Field(..., ge=1)


# ============================================================================
# Response Schemas
# ============================================================================

class BookingServiceLineResponse(BaseModel):
    service_id: int
    service_name: str
    service_price: float
    start_time: str
    end_time: str
    duration_minutes: int


class BookingResponse(BaseModel):
    booking_id: int
    vendor_id: int
    customer_id: Optional[int] = None
    booking_date: str
    booking_status: str
    booking_type: str
    total_amount: float
    payment_method: Optional[str] = None
    payment_status: str
    notes: Optional[str] = None
    cancellation_reason: Optional[str] = None
    cancelled_by: Optional[str] = None
    services: List[BookingServiceLineResponse]


class BookingListResponse(BaseModel):
    total: int
    bookings: List[BookingResponse]


class PageInfo(BaseModel):
    page: int
    limit: int
    total_pages: int


class CustomerBookingListResponse(BaseModel):
    customer_id: int
    total: int
    page: PageInfo
    bookings: List[BookingResponse]
