from datetime import datetime, time, timedelta
from decimal import Decimal

import pytest

from salonbook.core.exceptions import ConflictError, NotFoundError, ValidationError
from salonbook.models import Booking, BookingStatus, BookingType, PaymentMethod, VendorEarlyClosure, VendorHoliday
from salonbook.services.booking.actor import Actor
from salonbook.services.booking.booking_service import BookingService, RequestedService
from tests.conftest import BOOKING_DAY, DAY_BEFORE_9AM, make_offering, make_vendor

CUSTOMER_ID = 42


@pytest.fixture
def service(db):
    return BookingService(db, now=lambda: DAY_BEFORE_9AM)


def book(service, vendor, *lines, customer_id=CUSTOMER_ID, payment_method="card", day=BOOKING_DAY):
    return service.create_booking(
        customer_id=customer_id,
        vendor_id=vendor.id,
        booking_date=day,
        services=[RequestedService(offering.service_id, start) for offering, start in lines],
        payment_method=payment_method,
    )


def booking_count(db):
    return db.query(Booking).count()


class TestCreateBooking:

    def test_multi_service_booking_snapshots_lines_and_total(self, service, vendor, haircut, beard_trim):
        booking = book(service, vendor, (haircut, time(9, 0)), (beard_trim, time(9, 30)))

        assert booking.id is not None
        assert booking.booking_status == BookingStatus.CONFIRMED.value
        assert booking.booking_type == BookingType.ONLINE.value
        assert booking.customer_id == CUSTOMER_ID
        assert booking.total_amount == Decimal("400.00")

        lines = [line.to_dict() for line in booking.services]
        assert lines == [
            {
                "service_id": haircut.service_id,
                "service_name": "Haircut",
                "service_price": 250.0,
                "start_time": "09:00",
                "end_time": "09:30",
                "duration_minutes": 30,
            },
            {
                "service_id": beard_trim.service_id,
                "service_name": "Beard Trim",
                "service_price": 150.0,
                "start_time": "09:30",
                "end_time": "10:15",
                "duration_minutes": 45,
            },
        ]

    def test_cash_payment_stays_pending(self, service, vendor, haircut):
        assert book(service, vendor, (haircut, time(9, 0)), payment_method="cash").payment_status == "pending"

    def test_online_payment_is_completed(self, service, vendor, haircut):
        assert book(service, vendor, (haircut, time(9, 0)), payment_method="upi").payment_status == "completed"

    def test_price_snapshot_survives_catalog_change(self, db, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(9, 0)))

        haircut.price = Decimal("999.00")
        db.commit()
        db.expire_all()

        assert db.get(Booking, booking.id).services[0].service_price == Decimal("250.00")

    def test_requires_at_least_one_service(self, service, vendor):
        with pytest.raises(ValidationError):
            book(service, vendor)

    def test_service_not_offered_by_vendor(self, db, service, vendor):
        other_vendor = make_vendor(db, shop_name="Other Shop")
        foreign = make_offering(db, other_vendor, name="Facial", duration=30)

        with pytest.raises(ValidationError, match=f"Service {foreign.service_id} not available"):
            book(service, vendor, (foreign, time(9, 0)))
        assert booking_count(db) == 0

    def test_unavailable_offering_is_rejected(self, db, service, vendor):
        paused = make_offering(db, vendor, name="Perm", duration=30, is_available=False)

        with pytest.raises(ValidationError):
            book(service, vendor, (paused, time(9, 0)))

    def test_unapproved_vendor_is_not_found(self, db, service):
        vendor = make_vendor(db, verification_status="pending")
        offering = make_offering(db, vendor)

        with pytest.raises(NotFoundError):
            book(service, vendor, (offering, time(9, 0)))

    def test_full_slot_raises_conflict_and_rolls_back(self, db, service, vendor, haircut):
        book(service, vendor, (haircut, time(10, 0)))

        with pytest.raises(ConflictError, match="Time slot 10:00 - 10:30 is not available"):
            book(service, vendor, (haircut, time(10, 0)), customer_id=99)

        assert booking_count(db) == 1

    def test_partial_overlap_is_a_conflict(self, service, vendor, haircut, beard_trim):
        book(service, vendor, (beard_trim, time(10, 0)))

        with pytest.raises(ConflictError):
            book(service, vendor, (haircut, time(10, 30)))

    def test_back_to_back_bookings_are_allowed(self, service, vendor, haircut):
        book(service, vendor, (haircut, time(10, 0)))
        second = book(service, vendor, (haircut, time(10, 30)))

        assert second.booking_status == BookingStatus.CONFIRMED.value

    def test_lines_of_one_request_compete_for_capacity(self, db, service, vendor, haircut, beard_trim):
        with pytest.raises(ConflictError):
            book(service, vendor, (haircut, time(10, 0)), (beard_trim, time(10, 15)))
        assert booking_count(db) == 0

    def test_capacity_allows_parallel_bookings(self, db):
        vendor = make_vendor(db, seat_count=2, worker_count=3)
        offering = make_offering(db, vendor)
        service = BookingService(db, now=lambda: DAY_BEFORE_9AM)

        book(service, vendor, (offering, time(10, 0)))
        book(service, vendor, (offering, time(10, 0)), customer_id=7)

        with pytest.raises(ConflictError):
            book(service, vendor, (offering, time(10, 0)), customer_id=8)

    def test_cancelled_booking_frees_capacity(self, service, vendor, haircut):
        first = book(service, vendor, (haircut, time(10, 0)))
        service.cancel_booking(first.id, Actor.customer(CUSTOMER_ID))

        second = book(service, vendor, (haircut, time(10, 0)), customer_id=99)

        assert second.booking_status == BookingStatus.CONFIRMED.value

    def test_service_running_past_closing_is_rejected(self, service, vendor, beard_trim):
        with pytest.raises(ValidationError, match="outside operating hours"):
            book(service, vendor, (beard_trim, time(11, 30)))

    def test_service_before_opening_is_rejected(self, service, vendor, haircut):
        with pytest.raises(ValidationError):
            book(service, vendor, (haircut, time(8, 30)))

    def test_early_closure_shortens_bookable_hours(self, db, service, vendor, haircut):
        db.add(VendorEarlyClosure(vendor_id=vendor.id, closure_date=BOOKING_DAY, early_close_time=time(11, 0)))
        db.commit()

        with pytest.raises(ValidationError):
            book(service, vendor, (haircut, time(11, 0)))
        assert book(service, vendor, (haircut, time(10, 30))).id is not None

    def test_holiday_is_closed_for_booking(self, db, service, vendor, haircut):
        db.add(VendorHoliday(vendor_id=vendor.id, holiday_date=BOOKING_DAY, holiday_reason="Festival"))
        db.commit()

        with pytest.raises(ValidationError, match="closed"):
            book(service, vendor, (haircut, time(10, 0)))

    def test_weekly_holiday_is_closed_for_booking(self, db, service):
        vendor = make_vendor(db, weekly_holiday="Tuesday")
        offering = make_offering(db, vendor)

        with pytest.raises(ValidationError):
            book(service, vendor, (offering, time(10, 0)))

    def test_service_cannot_start_in_break(self, db, service):
        vendor = make_vendor(db, close_time=time(14, 0), break_start_time=time(12, 0), break_end_time=time(13, 0))
        offering = make_offering(db, vendor)

        with pytest.raises(ValidationError, match="during the break"):
            book(service, vendor, (offering, time(12, 30)))
        assert book(service, vendor, (offering, time(13, 0))).id is not None


class TestOfflineBooking:

    def test_walk_in_has_no_customer_and_is_paid(self, service, vendor, haircut):
        booking = service.create_offline_booking(
            vendor_id=vendor.id,
            booking_date=BOOKING_DAY,
            services=[RequestedService(haircut.service_id, time(9, 0))],
            payment_method="cash",
            customer_name="Ravi",
            customer_phone="9876543210",
        )

        assert booking.customer_id is None
        assert booking.booking_type == BookingType.OFFLINE.value
        assert booking.payment_status == "completed"
        assert booking.notes == "Walk-in customer: Ravi, Phone: 9876543210"

    def test_walk_in_competes_for_the_same_capacity(self, service, vendor, haircut):
        book(service, vendor, (haircut, time(9, 0)))

        with pytest.raises(ConflictError):
            service.create_offline_booking(
                vendor_id=vendor.id,
                booking_date=BOOKING_DAY,
                services=[RequestedService(haircut.service_id, time(9, 0))],
            )

    def test_online_type_is_rejected(self, service, vendor, haircut):
        with pytest.raises(ValidationError):
            service.create_offline_booking(
                vendor_id=vendor.id,
                booking_date=BOOKING_DAY,
                services=[RequestedService(haircut.service_id, time(9, 0))],
                booking_type=BookingType.ONLINE,
            )


class TestCancelBooking:

    def test_customer_cancels_own_booking(self, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(10, 0)))

        cancelled = service.cancel_booking(booking.id, Actor.customer(CUSTOMER_ID), reason="Change of plans")

        assert cancelled.booking_status == BookingStatus.CANCELLED.value
        assert cancelled.cancellation_reason == "Change of plans"
        assert cancelled.cancelled_by == "customer"
        assert cancelled.cancelled_at is not None

    def test_cancel_inside_cutoff_is_rejected(self, db, vendor, haircut):
        early = BookingService(db, now=lambda: DAY_BEFORE_9AM)
        booking = book(early, vendor, (haircut, time(10, 0)))

        late = BookingService(db, now=lambda: datetime.combine(BOOKING_DAY, time(9, 30)))
        with pytest.raises(ValidationError, match="less than 1 hour"):
            late.cancel_booking(booking.id, Actor.customer(CUSTOMER_ID))

        db.expire_all()
        assert db.get(Booking, booking.id).booking_status == BookingStatus.CONFIRMED.value

    def test_cancel_exactly_at_cutoff_is_allowed(self, db, vendor, haircut):
        booking = book(BookingService(db, now=lambda: DAY_BEFORE_9AM), vendor, (haircut, time(10, 0)))

        at_cutoff = BookingService(db, now=lambda: datetime.combine(BOOKING_DAY, time(9, 0)))

        assert at_cutoff.cancel_booking(booking.id, Actor.admin(1)).booking_status == "cancelled"

    def test_cutoff_uses_earliest_service(self, db, vendor, haircut, beard_trim):
        booking = book(
            BookingService(db, now=lambda: DAY_BEFORE_9AM),
            vendor,
            (beard_trim, time(11, 0)),
            (haircut, time(9, 30)),
        )
        service = BookingService(db, now=lambda: datetime.combine(BOOKING_DAY, time(8, 45)))

        with pytest.raises(ValidationError):
            service.cancel_booking(booking.id, Actor.customer(CUSTOMER_ID))

    def test_second_cancel_is_a_conflict(self, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(10, 0)))
        service.cancel_booking(booking.id, Actor.customer(CUSTOMER_ID))

        with pytest.raises(ConflictError, match="already cancelled"):
            service.cancel_booking(booking.id, Actor.customer(CUSTOMER_ID))

    def test_completed_booking_cannot_be_cancelled(self, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(10, 0)))
        service.complete_booking(booking.id, vendor.id)

        with pytest.raises(ValidationError, match="completed"):
            service.cancel_booking(booking.id, Actor.vendor(vendor.id))

    def test_no_show_cannot_be_cancelled(self, db, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(10, 0)))
        booking.booking_status = BookingStatus.NO_SHOW.value
        db.commit()

        with pytest.raises(ValidationError):
            service.cancel_booking(booking.id, Actor.admin(1))

    def test_other_customer_cannot_cancel(self, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(10, 0)))

        with pytest.raises(ValidationError, match="Not authorized"):
            service.cancel_booking(booking.id, Actor.customer(CUSTOMER_ID + 1))

    def test_other_vendor_cannot_cancel(self, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(10, 0)))

        with pytest.raises(ValidationError):
            service.cancel_booking(booking.id, Actor.vendor(vendor.id + 1))

    def test_owning_vendor_and_admin_can_cancel(self, service, vendor, haircut):
        first = book(service, vendor, (haircut, time(9, 0)))
        second = book(service, vendor, (haircut, time(10, 0)))

        assert service.cancel_booking(first.id, Actor.vendor(vendor.id)).cancelled_by == "vendor"
        assert service.cancel_booking(second.id, Actor.admin(1)).cancelled_by == "admin"

    def test_customer_cannot_cancel_walk_in(self, service, vendor, haircut):
        walk_in = service.create_offline_booking(
            vendor_id=vendor.id,
            booking_date=BOOKING_DAY,
            services=[RequestedService(haircut.service_id, time(9, 0))],
        )

        with pytest.raises(ValidationError):
            service.cancel_booking(walk_in.id, Actor.customer(CUSTOMER_ID))

    def test_unknown_booking(self, service):
        with pytest.raises(NotFoundError):
            service.cancel_booking(12345, Actor.admin(1))


class TestCompleteBooking:

    def test_vendor_completes_confirmed_booking(self, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(10, 0)))

        completed = service.complete_booking(booking.id, vendor.id)

        assert completed.booking_status == BookingStatus.COMPLETED.value
        assert completed.completed_at is not None

    def test_completed_booking_still_holds_capacity(self, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(10, 0)))
        service.complete_booking(booking.id, vendor.id)

        with pytest.raises(ConflictError):
            book(service, vendor, (haircut, time(10, 0)), customer_id=99)

    def test_completing_twice_is_rejected(self, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(10, 0)))
        service.complete_booking(booking.id, vendor.id)

        with pytest.raises(ValidationError):
            service.complete_booking(booking.id, vendor.id)

    def test_cancelled_booking_cannot_be_completed(self, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(10, 0)))
        service.cancel_booking(booking.id, Actor.customer(CUSTOMER_ID))

        with pytest.raises(ValidationError):
            service.complete_booking(booking.id, vendor.id)

    def test_other_vendor_cannot_complete(self, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(10, 0)))

        with pytest.raises(ValidationError):
            service.complete_booking(booking.id, vendor.id + 1)


class TestReads:

    def test_get_booking(self, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(10, 0)))

        assert service.get_booking(booking.id).to_dict()["booking_id"] == booking.id

    def test_get_missing_booking(self, service):
        with pytest.raises(NotFoundError):
            service.get_booking(999)

    def test_list_vendor_bookings_filters_by_date_and_status(self, service, vendor, haircut):
        first = book(service, vendor, (haircut, time(9, 0)))
        book(service, vendor, (haircut, time(10, 0)))
        book(service, vendor, (haircut, time(10, 0)), day=BOOKING_DAY + timedelta(days=1))
        service.cancel_booking(first.id, Actor.customer(CUSTOMER_ID))

        assert len(service.list_vendor_bookings(vendor.id)) == 3
        assert len(service.list_vendor_bookings(vendor.id, booking_date=BOOKING_DAY)) == 2
        confirmed = service.list_vendor_bookings(vendor.id, booking_date=BOOKING_DAY, status=BookingStatus.CONFIRMED)
        assert [b.services[0].start_time for b in confirmed] == [time(10, 0)]

    def test_list_for_unknown_vendor(self, service):
        with pytest.raises(NotFoundError):
            service.list_vendor_bookings(999)

    def test_customer_history_is_paged_newest_first(self, service, vendor, haircut):
        for offset in range(3):
            book(service, vendor, (haircut, time(10, 0)), day=BOOKING_DAY + timedelta(days=offset))
        book(service, vendor, (haircut, time(11, 0)), customer_id=99)

        first_page = service.list_customer_bookings(CUSTOMER_ID, page=1, limit=2)
        second_page = service.list_customer_bookings(CUSTOMER_ID, page=2, limit=2)

        assert first_page["total"] == 3
        assert first_page["page"] == {"page": 1, "limit": 2, "total_pages": 2}
        assert [b.booking_date for b in first_page["bookings"]] == [
            BOOKING_DAY + timedelta(days=2),
            BOOKING_DAY + timedelta(days=1),
        ]
        assert [b.booking_date for b in second_page["bookings"]] == [BOOKING_DAY]

    def test_customer_history_filters_by_status(self, service, vendor, haircut):
        kept = book(service, vendor, (haircut, time(9, 0)))
        dropped = book(service, vendor, (haircut, time(10, 0)))
        service.cancel_booking(dropped.id, Actor.customer(CUSTOMER_ID))

        result = service.list_customer_bookings(CUSTOMER_ID, status=BookingStatus.CANCELLED)

        assert result["total"] == 1
        assert [b.id for b in result["bookings"]] == [dropped.id]
        assert kept.id not in [b.id for b in result["bookings"]]

    def test_customer_without_bookings_has_empty_history(self, service):
        result = service.list_customer_bookings(CUSTOMER_ID)

        assert result["total"] == 0
        assert result["page"]["total_pages"] == 0
        assert result["bookings"] == []

    @pytest.mark.parametrize("page, limit", [(0, 10), (1, 0), (1, 51)])
    def test_customer_history_rejects_bad_paging(self, service, page, limit):
        with pytest.raises(ValidationError):
            service.list_customer_bookings(CUSTOMER_ID, page=page, limit=limit)


class TestPaymentMethod:

    def test_unknown_method_is_rejected_before_booking(self, db, service, vendor, haircut):
        with pytest.raises(ValidationError, match="Unknown payment method"):
            book(service, vendor, (haircut, time(9, 0)), payment_method="cheque")
        assert booking_count(db) == 0

    def test_method_is_stored_as_its_value(self, service, vendor, haircut):
        booking = book(service, vendor, (haircut, time(9, 0)), payment_method=PaymentMethod.WALLET)

        assert booking.payment_method == "wallet"
        assert booking.payment_status == "completed"

    def test_walk_in_without_method(self, service, vendor, haircut):
        booking = service.create_offline_booking(
            vendor_id=vendor.id,
            booking_date=BOOKING_DAY,
            services=[RequestedService(haircut.service_id, time(9, 0))],
        )

        assert booking.payment_method is None
