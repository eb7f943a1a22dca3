# salonbook/repositories/booking_repository.py
"""Data access for bookings and booking service lines"""
from datetime import date, time
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from salonbook.models.booking import Booking, BookingServiceLine, ACTIVE_BOOKING_STATUSES


class BookingRepository:
    def __init__(self, db: Session):
        self.db = db

    def count_overlapping(self, vendor_id: int, booking_date: date, start: time, end: time) -> int:
        """
        Count service lines of confirmed/completed bookings for the vendor and
        date whose [start_time, end_time) intersects [start, end).
        """
        count = self.db.query(func.count(BookingServiceLine.id)).join(
            Booking, BookingServiceLine.booking_id == Booking.id
        ).filter(
            Booking.vendor_id == vendor_id,
            Booking.booking_date == booking_date,
            Booking.booking_status.in_(ACTIVE_BOOKING_STATUSES),
            BookingServiceLine.start_time < end,
            BookingServiceLine.end_time > start,
        ).scalar()
        return count or 0

    def add(self, booking: Booking) -> Booking:
        """Stage a booking with its lines; the caller owns the commit"""
        self.db.add(booking)
        self.db.flush()
        return booking

    def get(self, booking_id: int, for_update: bool = False) -> Optional[Booking]:
        query = self.db.query(Booking).filter(Booking.id == booking_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def list_for_vendor(
            self,
            vendor_id: int,
            booking_date: Optional[date] = None,
            status: Optional[str] = None
    ) -> List[Booking]:
        query = self.db.query(Booking).filter(Booking.vendor_id == vendor_id)
        if booking_date:
            query = query.filter(Booking.booking_date == booking_date)
        if status:
            query = query.filter(Booking.booking_status == status)
        return query.order_by(Booking.booking_date.asc(), Booking.id.asc()).all()

    def list_for_customer(
            self,
            customer_id: int,
            status: Optional[str] = None,
            page: int = 1,
            limit: int = 10
    ) -> Tuple[List[Booking], int]:
        """One page of a customer's bookings, newest date first, with the unpaged total"""
        query = self.db.query(Booking).filter(Booking.customer_id == customer_id)
        if status:
            query = query.filter(Booking.booking_status == status)

        total = query.count()
        bookings = query.order_by(
            Booking.booking_date.desc(), Booking.id.desc()
        ).offset((page - 1) * limit).limit(limit).all()
        return bookings, total
