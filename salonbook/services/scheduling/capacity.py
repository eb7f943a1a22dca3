from salonbook.services.scheduling.schedule import VendorSchedule


def max_concurrent(schedule: VendorSchedule) -> int:
    """Bookings a vendor can serve at once: every booking needs a seat and a worker."""
    return min(schedule.seat_count, schedule.worker_count)
