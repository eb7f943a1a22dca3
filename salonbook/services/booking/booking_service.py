# ============================================================================
# salonbook/services/booking/booking_service.py
# Booking create / cancel / complete with capacity-safe admission
# ============================================================================
"""
Booking transaction manager.

Admission re-counts overlapping lines against committed bookings inside the
same transaction that inserts the booking, while holding the per-(vendor,
date) booking lock and the vendor row lock. The advisory slot listing is
never used as the admission decision.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from salonbook.config.settings import get_settings
from salonbook.core.exceptions import ConflictError, NotFoundError, ValidationError
from salonbook.models.booking import (
    ActorRole,
    Booking,
    BookingServiceLine,
    BookingStatus,
    BookingType,
    PaymentMethod,
    PaymentStatus,
)
from salonbook.repositories.booking_repository import BookingRepository
from salonbook.repositories.service_repository import ServiceRepository
from salonbook.repositories.vendor_schedule_repository import VendorScheduleRepository
from salonbook.services.booking.actor import Actor
from salonbook.services.booking.booking_lock import get_booking_lock
from salonbook.services.scheduling.capacity import max_concurrent
from salonbook.services.scheduling.overlap import OverlapDetector
from salonbook.services.scheduling.schedule import VendorSchedule
from salonbook.utils.time_utils import add_minutes, format_hhmm

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 50


@dataclass(frozen=True)
class RequestedService:
    service_id: int
    start_time: time


class BookingService:
    """Handles booking lifecycle operations"""

    def __init__(
            self,
            db: Session,
            lock=None,
            now: Callable[[], datetime] = datetime.now,
            min_cancellation_hours: Optional[int] = None
    ):
        self.db = db
        self.lock = lock or get_booking_lock()
        self.now = now
        self.min_cancellation_hours = (
            min_cancellation_hours
            if min_cancellation_hours is not None
            else get_settings().MIN_CANCELLATION_HOURS
        )
        self.schedule_store = VendorScheduleRepository(db)
        self.service_repository = ServiceRepository(db)
        self.booking_repository = BookingRepository(db)
        self.overlap_detector = OverlapDetector(self.booking_repository)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_booking(
            self,
            customer_id: int,
            vendor_id: int,
            booking_date: date,
            services: Sequence[RequestedService],
            payment_method: Optional[str],
            notes: Optional[str] = None
    ) -> Booking:
        """Create an online booking for a customer. Cash is collected at the shop."""
        method = self._payment_method(payment_method)
        payment_status = PaymentStatus.PENDING if method == PaymentMethod.CASH else PaymentStatus.COMPLETED
        return self._create(
            vendor_id=vendor_id,
            booking_date=booking_date,
            services=services,
            customer_id=customer_id,
            payment_method=method,
            payment_status=payment_status,
            booking_type=BookingType.ONLINE,
            notes=notes,
        )

    def create_offline_booking(
            self,
            vendor_id: int,
            booking_date: date,
            services: Sequence[RequestedService],
            payment_method: Optional[str] = None,
            booking_type: BookingType = BookingType.OFFLINE,
            customer_name: Optional[str] = None,
            customer_phone: Optional[str] = None,
            notes: Optional[str] = None
    ) -> Booking:
        """Create a walk-in booking on the vendor's behalf. Paid on the spot."""
        method = self._payment_method(payment_method)
        if booking_type not in (BookingType.OFFLINE, BookingType.WALK_IN):
            raise ValidationError(
                f"Booking type must be {BookingType.OFFLINE.value} or {BookingType.WALK_IN.value}"
            )
        if not notes:
            notes = f"Walk-in customer: {customer_name or 'N/A'}, Phone: {customer_phone or 'N/A'}"

        return self._create(
            vendor_id=vendor_id,
            booking_date=booking_date,
            services=services,
            customer_id=None,
            payment_method=method,
            payment_status=PaymentStatus.COMPLETED,
            booking_type=booking_type,
            notes=notes,
        )

    def _create(
            self,
            vendor_id: int,
            booking_date: date,
            services: Sequence[RequestedService],
            customer_id: Optional[int],
            payment_method: Optional[PaymentMethod],
            payment_status: PaymentStatus,
            booking_type: BookingType,
            notes: Optional[str]
    ) -> Booking:
        if not services:
            raise ValidationError("At least one service required")

        with self.lock.hold(vendor_id, booking_date):
            try:
                schedule = self.schedule_store.get_schedule(vendor_id, for_update=True)
                lines = self._build_lines(schedule, booking_date, services)
                self._admit(schedule, booking_date, lines)

                total_amount = sum((line.service_price for line in lines), Decimal("0"))
                booking = Booking(
                    vendor_id=vendor_id,
                    customer_id=customer_id,
                    booking_date=booking_date,
                    total_amount=total_amount,
                    payment_method=payment_method.value if payment_method else None,
                    payment_status=payment_status.value,
                    booking_status=BookingStatus.CONFIRMED.value,
                    booking_type=booking_type.value,
                    notes=notes,
                    services=lines,
                )
                self.booking_repository.add(booking)
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

        logger.info(
            f"Booking {booking.id} confirmed for vendor {vendor_id} on {booking_date.isoformat()} "
            f"({len(lines)} services, total {total_amount})"
        )
        return booking

    def _build_lines(
            self,
            schedule: VendorSchedule,
            booking_date: date,
            services: Sequence[RequestedService]
    ) -> List[BookingServiceLine]:
        """Resolve offerings, snapshot name and price, and compute each line's end time"""
        self._check_open_on(schedule, booking_date)
        close_time = self._effective_close(schedule, booking_date)

        lines = []
        for requested in services:
            offering = self.service_repository.find_vendor_offering(schedule.vendor_id, requested.service_id)
            if not offering:
                raise ValidationError(
                    f"Service {requested.service_id} not available",
                    details={"vendor_id": schedule.vendor_id, "service_id": requested.service_id},
                )

            duration = offering.catalog_item.default_duration_minutes
            try:
                end_time = add_minutes(requested.start_time, duration)
            except ValueError as e:
                raise ValidationError(str(e), details={"service_id": requested.service_id})

            self._check_within_hours(schedule, close_time, requested.start_time, end_time)

            lines.append(BookingServiceLine(
                service_id=requested.service_id,
                service_name=offering.catalog_item.service_name,
                service_price=Decimal(offering.price),
                start_time=requested.start_time,
                end_time=end_time,
                duration_minutes=duration,
            ))
        return lines

    def _admit(self, schedule: VendorSchedule, booking_date: date, lines: List[BookingServiceLine]) -> None:
        """Authoritative capacity check against committed state plus earlier lines of this request"""
        capacity = max_concurrent(schedule)
        claimed = []
        for line in lines:
            busy = self.overlap_detector.count_with_pending(
                schedule.vendor_id, booking_date, line.start_time, line.end_time, claimed
            )
            if busy >= capacity:
                slot = f"{format_hhmm(line.start_time)} - {format_hhmm(line.end_time)}"
                logger.warning(
                    f"Rejected booking for vendor {schedule.vendor_id} on {booking_date.isoformat()}: "
                    f"{slot} has {busy}/{capacity} taken"
                )
                raise ConflictError(
                    f"Time slot {slot} is not available",
                    details={
                        "vendor_id": schedule.vendor_id,
                        "booking_date": booking_date.isoformat(),
                        "start_time": format_hhmm(line.start_time),
                        "end_time": format_hhmm(line.end_time),
                    },
                )
            claimed.append((line.start_time, line.end_time))

    @staticmethod
    def _payment_method(value) -> Optional[PaymentMethod]:
        if value is None:
            return None
        try:
            return PaymentMethod(value)
        except ValueError:
            raise ValidationError(
                f"Unknown payment method '{value}'",
                details={"allowed": [m.value for m in PaymentMethod]},
            )

    def _check_open_on(self, schedule: VendorSchedule, booking_date: date) -> None:
        holiday = self.schedule_store.get_holiday(schedule.vendor_id, booking_date)
        if holiday or schedule.is_weekly_holiday(booking_date):
            raise ValidationError(
                "Vendor is closed on this date",
                details={"vendor_id": schedule.vendor_id, "booking_date": booking_date.isoformat()},
            )

    def _effective_close(self, schedule: VendorSchedule, booking_date: date) -> time:
        early_closure = self.schedule_store.get_early_closure(schedule.vendor_id, booking_date)
        return early_closure.early_close_time if early_closure else schedule.close_time

    @staticmethod
    def _check_within_hours(schedule: VendorSchedule, close_time: time, start: time, end: time) -> None:
        if start < schedule.open_time or end > close_time:
            raise ValidationError(
                f"Service time {format_hhmm(start)} - {format_hhmm(end)} is outside operating hours",
                details={"opens_at": format_hhmm(schedule.open_time), "closes_at": format_hhmm(close_time)},
            )
        if schedule.in_break(start):
            raise ValidationError(
                f"Service cannot start at {format_hhmm(start)} during the break",
                details={
                    "break_start_time": format_hhmm(schedule.break_start_time),
                    "break_end_time": format_hhmm(schedule.break_end_time),
                },
            )

    # ------------------------------------------------------------------
    # Cancel / complete
    # ------------------------------------------------------------------

    def cancel_booking(self, booking_id: int, actor: Actor, reason: Optional[str] = None) -> Booking:
        """Cancel a confirmed booking at least the cutoff ahead of its first service"""
        try:
            booking = self._get_for_update(booking_id)

            if not self._can_act_on(booking, actor):
                raise ValidationError("Not authorized to cancel this booking", details={"booking_id": booking_id})

            if booking.booking_status == BookingStatus.CANCELLED.value:
                raise ConflictError("Booking already cancelled", details={"booking_id": booking_id})
            if booking.booking_status == BookingStatus.COMPLETED.value:
                raise ValidationError("Cannot cancel completed booking", details={"booking_id": booking_id})
            if booking.booking_status != BookingStatus.CONFIRMED.value:
                raise ValidationError(
                    f"Cannot cancel booking in status {booking.booking_status}",
                    details={"booking_id": booking_id},
                )

            starts_at = datetime.combine(booking.booking_date, booking.earliest_start_time)
            if starts_at - self.now() < timedelta(hours=self.min_cancellation_hours):
                raise ValidationError(
                    f"Cannot cancel booking less than {self.min_cancellation_hours} hour before appointment",
                    details={"booking_id": booking_id, "starts_at": starts_at.isoformat()},
                )

            booking.booking_status = BookingStatus.CANCELLED.value
            booking.cancellation_reason = reason
            booking.cancelled_by = actor.role.value
            booking.cancelled_at = self.now()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Booking {booking_id} cancelled by {actor.role.value} {actor.id}")
        return booking

    def complete_booking(self, booking_id: int, vendor_id: int) -> Booking:
        """Vendor marks its own confirmed booking as served"""
        try:
            booking = self._get_for_update(booking_id)

            if booking.vendor_id != vendor_id:
                raise ValidationError("Not authorized to complete this booking", details={"booking_id": booking_id})
            if booking.booking_status != BookingStatus.CONFIRMED.value:
                raise ValidationError(
                    "Only confirmed bookings can be completed",
                    details={"booking_id": booking_id, "booking_status": booking.booking_status},
                )

            booking.booking_status = BookingStatus.COMPLETED.value
            booking.completed_at = self.now()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Booking {booking_id} completed by vendor {vendor_id}")
        return booking

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_booking(self, booking_id: int) -> Booking:
        booking = self.booking_repository.get(booking_id)
        if not booking:
            raise NotFoundError("Booking not found", details={"booking_id": booking_id})
        return booking

    def list_vendor_bookings(
            self,
            vendor_id: int,
            booking_date: Optional[date] = None,
            status: Optional[BookingStatus] = None
    ) -> List[Booking]:
        if not self.schedule_store.get_vendor(vendor_id):
            raise NotFoundError("Vendor not found", details={"vendor_id": vendor_id})
        return self.booking_repository.list_for_vendor(
            vendor_id,
            booking_date=booking_date,
            status=status.value if status else None,
        )

    def list_customer_bookings(
            self,
            customer_id: int,
            status: Optional[BookingStatus] = None,
            page: int = 1,
            limit: int = 10
    ) -> Dict[str, Any]:
        """Paged booking history for a customer, newest first"""
        if page < 1 or not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationError(
                f"page must be >= 1 and limit between 1 and {MAX_PAGE_SIZE}",
                details={"page": page, "limit": limit},
            )

        bookings, total = self.booking_repository.list_for_customer(
            customer_id,
            status=status.value if status else None,
            page=page,
            limit=limit,
        )
        return {
            "customer_id": customer_id,
            "total": total,
            "page": {
                "page": page,
                "limit": limit,
                "total_pages": (total + limit - 1) // limit if total > 0 else 0,
            },
            "bookings": bookings,
        }

    def _get_for_update(self, booking_id: int) -> Booking:
        booking = self.booking_repository.get(booking_id, for_update=True)
        if not booking:
            raise NotFoundError("Booking not found", details={"booking_id": booking_id})
        return booking

    @staticmethod
    def _can_act_on(booking: Booking, actor: Actor) -> bool:
        if actor.role == ActorRole.ADMIN:
            return True
        if actor.role == ActorRole.VENDOR:
            return booking.vendor_id == actor.id
        return booking.customer_id is not None and booking.customer_id == actor.id
