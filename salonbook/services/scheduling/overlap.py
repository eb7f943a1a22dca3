from datetime import date, time
from typing import Iterable, Tuple


def ranges_overlap(a_start: time, a_end: time, b_start: time, b_end: time) -> bool:
    """Half-open [start, end) overlap; ranges that only touch do not overlap"""
    return a_start < b_end and b_start < a_end


class OverlapDetector:
    """Answers "how busy is this range" from committed bookings"""

    def __init__(self, booking_repository):
        self.booking_repository = booking_repository

    def count_overlapping(self, vendor_id: int, booking_date: date, start: time, end: time) -> int:
        return self.booking_repository.count_overlapping(vendor_id, booking_date, start, end)

    def count_with_pending(
            self,
            vendor_id: int,
            booking_date: date,
            start: time,
            end: time,
            pending: Iterable[Tuple[time, time]]
    ) -> int:
        """Committed overlaps plus ranges already claimed earlier in the same request"""
        committed = self.count_overlapping(vendor_id, booking_date, start, end)
        staged = sum(1 for p_start, p_end in pending if ranges_overlap(start, end, p_start, p_end))
        return committed + staged
