# ============================================================================
# salonbook/api/v1/bookings.py
# Booking create / cancel / complete endpoints
# ============================================================================
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from salonbook.api.dependencies import get_booking_service
from salonbook.models.booking import BookingStatus
from salonbook.schemas.booking import (
    BookingListResponse,
    CustomerBookingListResponse,
    BookingResponse,
    CancelBookingRequest,
    CompleteBookingRequest,
    CreateBookingRequest,
    CreateOfflineBookingRequest,
)
from salonbook.services.booking.actor import Actor
from salonbook.services.booking.booking_service import MAX_PAGE_SIZE, BookingService, RequestedService

router = APIRouter(tags=["bookings"])


def _requested(services) -> list:
    return [RequestedService(service_id=s.service_id, start_time=s.start_time) for s in services]


@router.post("/bookings", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
        data: CreateBookingRequest,
        service: BookingService = Depends(get_booking_service)
):
    """Book one or more services with a vendor"""
    booking = service.create_booking(
        customer_id=data.customer_id,
        vendor_id=data.vendor_id,
        booking_date=data.booking_date,
        services=_requested(data.services),
        payment_method=data.payment_method,
        notes=data.notes,
    )
    return BookingResponse(**booking.to_dict())


@router.post(
    "/vendors/{vendor_id}/bookings/offline",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_offline_booking(
        data: CreateOfflineBookingRequest,
        vendor_id: int = Path(..., ge=1),
        service: BookingService = Depends(get_booking_service)
):
    """Record a walk-in customer's booking"""
    booking = service.create_offline_booking(
        vendor_id=vendor_id,
        booking_date=data.booking_date,
        services=_requested(data.services),
        payment_method=data.payment_method,
        booking_type=data.booking_type,
        customer_name=data.customer_name,
        customer_phone=data.customer_phone,
        notes=data.notes,
    )
    return BookingResponse(**booking.to_dict())


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
def get_booking(
        booking_id: int = Path(..., ge=1),
        service: BookingService = Depends(get_booking_service)
):
    return BookingResponse(**service.get_booking(booking_id).to_dict())


@router.get("/vendors/{vendor_id}/bookings", response_model=BookingListResponse)
def list_vendor_bookings(
        vendor_id: int = Path(..., ge=1),
        day: Optional[date] = Query(None, alias="date", description="Only bookings on this date"),
        booking_status: Optional[BookingStatus] = Query(None, alias="status"),
        service: BookingService = Depends(get_booking_service)
):
    bookings = service.list_vendor_bookings(vendor_id, booking_date=day, status=booking_status)
    return BookingListResponse(
        total=len(bookings),
        bookings=[BookingResponse(**b.to_dict()) for b in bookings],
    )


@router.get("/customers/{customer_id}/bookings", response_model=CustomerBookingListResponse)
def list_customer_bookings(
        customer_id: int = Path(..., ge=1),
        booking_status: Optional[BookingStatus] = Query(None, alias="status"),
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
        service: BookingService = Depends(get_booking_service)
):
    """A customer's booking history, newest first"""
    result = service.list_customer_bookings(customer_id, status=booking_status, page=page, limit=limit)
    return CustomerBookingListResponse(
        customer_id=customer_id,
        total=result["total"],
        page=result["page"],
        bookings=[BookingResponse(**b.to_dict()) for b in result["bookings"]],
    )


@router.put("/bookings/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
        data: CancelBookingRequest,
        booking_id: int = Path(..., ge=1),
        service: BookingService = Depends(get_booking_service)
):
    """Cancel a booking as its customer, its vendor, or an admin"""
    actor = Actor(role=data.actor_role, id=data.actor_id)
    booking = service.cancel_booking(booking_id, actor, data.reason)
    return BookingResponse(**booking.to_dict())


@router.put("/bookings/{booking_id}/complete", response_model=BookingResponse)
def complete_booking(
        data: CompleteBookingRequest,
        booking_id: int = Path(..., ge=1),
        service: BookingService = Depends(get_booking_service)
):
    booking = service.complete_booking(booking_id, data.vendor_id)
    return BookingResponse(**booking.to_dict())
